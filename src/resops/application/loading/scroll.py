"""Application loading – scroll-proximity trigger."""
from __future__ import annotations

import dataclasses

DEFAULT_THRESHOLD_PX = 50


@dataclasses.dataclass(frozen=True)
class ScrollPosition:
    """Geometry of a scrollable region, in pixels."""
    scroll_top: float
    client_height: float
    scroll_height: float

    @property
    def distance_to_bottom(self) -> float:
        return self.scroll_height - self.scroll_top - self.client_height


def is_near_bottom(position: ScrollPosition, threshold_px: float = DEFAULT_THRESHOLD_PX) -> bool:
    return position.distance_to_bottom <= threshold_px


__all__ = ["DEFAULT_THRESHOLD_PX", "ScrollPosition", "is_near_bottom"]
