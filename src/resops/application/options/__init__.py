"""Application options – remote searchable single/multi-select pickers."""
from resops.application.options.option import RemoteOption, format_option, merge_with_selection
from resops.application.options.search import RemoteOptionSearch

__all__ = ["RemoteOption", "RemoteOptionSearch", "format_option", "merge_with_selection"]
