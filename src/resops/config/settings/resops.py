"""Config settings – ResopsSettings, the knobs of the list engine."""
from __future__ import annotations

import dataclasses

from resops.config.settings.base import Settings
from resops.config.validation import InvalidSettingValueError

VISIBILITY_PAGE = "page"
VISIBILITY_OWNER = "owner"


@dataclasses.dataclass
class ResopsSettings(Settings):
    """Settings read from ``RESOPS_*`` environment variables.

    ``http_timeout`` defaults to ``None``: list requests carry no timeout, so
    a hung request keeps its loader in the loading state.

    ``saved_filters_shared_by_default`` and ``saved_filter_visibility`` decide
    how the ``shared`` flag of saved filters is used.  ``page`` visibility lists
    every filter of a page type; ``owner`` lists the user's own filters plus
    shared ones.
    """

    _prefix: dataclasses.ClassVar[str] = "RESOPS"

    api_base_url: str = "http://localhost:5000"
    page_size: int = 20
    picker_page_size: int = 20
    search_debounce_ms: int = 500
    picker_debounce_ms: int = 300
    scroll_threshold_px: int = 50
    http_timeout: float | None = None
    preferences_path: str = ".resops-preferences.json"
    saved_filters_shared_by_default: bool = False
    saved_filter_visibility: str = VISIBILITY_PAGE

    def _validate(self) -> None:
        for name in ("page_size", "picker_page_size"):
            value = getattr(self, name)
            if not 1 <= value <= 1000:
                raise InvalidSettingValueError(name, value, "must be between 1 and 1000")
        for name in ("search_debounce_ms", "picker_debounce_ms", "scroll_threshold_px"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidSettingValueError(name, value, "must not be negative")
        if self.saved_filter_visibility not in (VISIBILITY_PAGE, VISIBILITY_OWNER):
            raise InvalidSettingValueError(
                "saved_filter_visibility",
                self.saved_filter_visibility,
                f"expected '{VISIBILITY_PAGE}' or '{VISIBILITY_OWNER}'",
            )


__all__ = ["ResopsSettings", "VISIBILITY_OWNER", "VISIBILITY_PAGE"]
