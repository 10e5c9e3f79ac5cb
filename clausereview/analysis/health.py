import math
from typing import List, Tuple

from clausereview.analysis.schemas import HealthStatus

# (inclusive lower bound, label, colour), best band first
HEALTH_BANDS: List[Tuple[float, str, str]] = [
    (80, "Good", "#374151"),
    (60, "Moderate", "#a16207"),
    (40, "Concerning", "#b91c1c"),
]
CRITICAL_BAND: Tuple[str, str] = ("Critical", "#4a1d1d")


def classify(score: float) -> HealthStatus:
    """
    Map a 0-100 health score onto its qualitative band.

    Total over every float: out-of-range scores fall into the outermost
    bands and NaN is treated as Critical. Callers must pass the
    perspective-resolved score whenever a perspective is active.
    """
    if score is not None and not math.isnan(score):
        for lower, label, color in HEALTH_BANDS:
            if score >= lower:
                return HealthStatus(label=label, color=color)
    label, color = CRITICAL_BAND
    return HealthStatus(label=label, color=color)
