from __future__ import annotations
from ..domain.models import HeightWindow

def plan_window(start_height: int, range_: int) -> HeightWindow:
    """Inclusive window ending at `start_height`, clamped at genesis."""
    if range_ < 1:
        raise ValueError(f"range must be >= 1 (got {range_})")
    if start_height < 0:
        raise ValueError(f"start_height must be >= 0 (got {start_height})")
    lo = max(0, start_height - (range_ - 1))
    return HeightWindow(start=lo, end=start_height, requested=range_)
