"""Color bands for the progress bar."""

from __future__ import annotations

import math

LOW_COLOR = "#d9534f"
MID_COLOR = "#f0ad4e"
HIGH_COLOR = "#5cb85c"
DEFAULT_TITLE_COLOR = "#428bca"

LOW_THRESHOLD = 0.3
HIGH_THRESHOLD = 0.7


def _ratio(progress: float, scale: float) -> float:
    # IEEE semantics instead of ZeroDivisionError
    if scale == 0:
        if progress == 0 or math.isnan(progress):
            return math.nan
        return math.copysign(math.inf, progress) * math.copysign(1.0, scale)
    return progress / scale


def color_for(progress: float, scale: float) -> str:
    """Pick the bar color for ``progress / scale``.

    Ratios below 0.3 are red, below 0.7 amber, anything else green. The
    thresholds themselves belong to the upper band, and a NaN ratio (``0/0``)
    fails both comparisons and ends up green as well.
    """
    ratio = _ratio(progress, scale)
    if ratio < LOW_THRESHOLD:
        return LOW_COLOR
    if ratio < HIGH_THRESHOLD:
        return MID_COLOR
    return HIGH_COLOR
