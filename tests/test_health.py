import math
import pytest

from clausereview.analysis.health import classify


@pytest.mark.parametrize(
    "score,label",
    [
        (100, "Good"),
        (80, "Good"),
        (79.99, "Moderate"),
        (60, "Moderate"),
        (59.5, "Concerning"),
        (40, "Concerning"),
        (39.999, "Critical"),
        (0, "Critical"),
    ],
)
def test_band_boundaries(score, label):
    assert classify(score).label == label


def test_out_of_range_scores_are_accepted():
    assert classify(250).label == "Good"
    assert classify(-10).label == "Critical"
    assert classify(math.nan).label == "Critical"


def test_bands_are_monotonic():
    order = ["Critical", "Concerning", "Moderate", "Good"]
    ranks = [order.index(classify(s / 2).label) for s in range(-20, 221)]
    assert ranks == sorted(ranks)


def test_colour_tokens():
    assert classify(90).color == "#374151"
    assert classify(10).color == "#4a1d1d"
