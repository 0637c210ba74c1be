"""Application staging – draft/applied filter gate."""
from resops.application.staging.gate import FilterStagingGate

__all__ = ["FilterStagingGate"]
