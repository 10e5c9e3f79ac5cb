import pytest

from clausereview.analysis.schemas import AggregateScoreRecord, RiskAssessment
from clausereview.perspective import (
    Perspective,
    filter_by_perspective,
    parse_perspective,
    perspective_label,
    resolve,
    resolve_category_scores,
)
from clausereview.perspective.store import PerspectiveStore


# ---------------------------------------------------------------------------
# Field resolver
# ---------------------------------------------------------------------------

def test_resolve_prefers_shadow_field():
    assert resolve({"overallScore": 70, "clientOverallScore": 55}, "overallScore", "client") == 55


def test_resolve_falls_back_to_base_field():
    assert resolve({"overallScore": 70}, "overallScore", "subcontractor") == 70


def test_resolve_missing_is_zero():
    assert resolve({}, "overallScore", None) == 0
    assert resolve({"clientOverallScore": None}, "overallScore", "client") == 0


def test_resolve_ignores_shadow_without_perspective():
    assert resolve({"overallScore": 70, "clientOverallScore": 55}, "overallScore", None) == 70


def test_resolve_on_model_with_snake_case_fields():
    record = AggregateScoreRecord(overall_score=70, critical_count=4, subcontractor_critical_count=1)
    assert resolve(record, "criticalCount", Perspective.SUBCONTRACTOR) == 1
    assert resolve(record, "critical_count", "client") == 4
    assert resolve(record, "overallScore", "client") == 70


def test_resolve_unknown_perspective_uses_base():
    assert resolve({"highCount": 3, "clientHighCount": 1}, "highCount", "owner") == 3


def test_resolve_category_scores():
    record = AggregateScoreRecord.model_validate({
        "categoryScores": {"payment": 50},
        "clientCategoryScores": {"payment": 20},
    })
    assert resolve_category_scores(record, "client").payment == 20
    assert resolve_category_scores(record, "subcontractor").payment == 50
    assert resolve_category_scores(record, None).payment == 50


# ---------------------------------------------------------------------------
# Relevance filter
# ---------------------------------------------------------------------------

ITEMS = [
    {"relevance": "Client", "id": 1},
    {"relevance": "Subcontractor", "id": 2},
    {"relevance": "Both", "id": 3},
    {"id": 4},
]


def test_filter_is_identity_without_perspective():
    assert filter_by_perspective(ITEMS, None) is ITEMS
    assert filter_by_perspective([], None) == []


def test_filter_for_client():
    kept = filter_by_perspective(ITEMS, "client")
    assert [item["id"] for item in kept] == [1, 3, 4]


def test_filter_for_subcontractor():
    kept = filter_by_perspective(ITEMS, Perspective.SUBCONTRACTOR)
    assert [item["id"] for item in kept] == [2, 3, 4]


def test_filter_reads_wire_name_and_models():
    risks = [
        RiskAssessment.model_validate({"level": "High", "perspectiveRelevance": "Subcontractor"}),
        RiskAssessment.model_validate({"level": "Low"}),
    ]
    kept = filter_by_perspective(risks, "client")
    assert len(kept) == 1
    assert kept[0].relevance is None
    assert filter_by_perspective([{"perspectiveRelevance": "Client"}], "subcontractor") == []


# ---------------------------------------------------------------------------
# Perspective values and session store
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value,expected",
    [
        ("client", Perspective.CLIENT),
        (" Subcontractor ", Perspective.SUBCONTRACTOR),
        ("", None),
        ("none", None),
        (None, None),
        (3, None),
    ],
)
def test_parse_perspective(value, expected):
    assert parse_perspective(value) is expected


def test_perspective_label():
    assert perspective_label(Perspective.CLIENT) == "Client"
    assert perspective_label("subcontractor") == "Subcontractor"
    assert perspective_label(None) == ""


def test_store_is_session_scoped():
    store = PerspectiveStore()
    store.set("s1", Perspective.CLIENT)
    assert store.get("s1") is Perspective.CLIENT
    assert store.get("s2") is None
    assert store.get(None) is None


def test_store_clear():
    store = PerspectiveStore()
    store.set("s1", "subcontractor")
    store.clear("s1")
    assert store.get("s1") is None
    store.clear("never-set")


def test_store_rejects_unknown_perspective():
    with pytest.raises(ValueError):
        PerspectiveStore().set("s1", "auditor")
