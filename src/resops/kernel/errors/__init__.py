"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    ResopsError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    └── InfrastructureError      (infrastructure.py)
        ├── TransportError
        ├── SerializationError
        └── PreferencesStorageError
"""

from resops.kernel.errors.base import ResopsError
from resops.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from resops.kernel.errors.infrastructure import (
    InfrastructureError,
    PreferencesStorageError,
    SerializationError,
    TransportError,
)

__all__ = [
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "PreferencesStorageError",
    "ResopsError",
    "SerializationError",
    "TransportError",
    "ValidationError",
]
