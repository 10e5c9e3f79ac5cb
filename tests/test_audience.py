import pytest

from clausereview.perspective import extract, get_for_perspective

DUAL = "CLIENT: Pay promptly SUBCONTRACTOR: Expect delay"


def test_extract_both_segments():
    parts = extract(DUAL)
    assert parts.client_text == "Pay promptly"
    assert parts.sub_text == "Expect delay"


def test_markers_are_case_insensitive_and_span_lines():
    parts = extract("client:\n  Check the retention\n  amounts.\nSubcontractor: Negotiate the cap")
    assert parts.client_text == "Check the retention\n  amounts."
    assert parts.sub_text == "Negotiate the cap"


def test_segments_are_captured_independently():
    parts = extract("SUBCONTRACTOR: Ask for an extension")
    assert parts.client_text is None
    assert parts.sub_text == "Ask for an extension"


def test_empty_segment_counts_as_missing():
    assert extract("CLIENT:   SUBCONTRACTOR: Only this").client_text is None


@pytest.mark.parametrize("perspective", ["client", "subcontractor", None])
def test_unstructured_text_passes_through(perspective):
    text = "Review the termination notice period."
    assert get_for_perspective(text, perspective) == text


def test_dual_text_per_perspective():
    assert get_for_perspective(DUAL, "client") == "Pay promptly"
    assert get_for_perspective(DUAL, "subcontractor") == "Expect delay"
    assert get_for_perspective(DUAL, None) == DUAL


def test_unknown_perspective_is_unset():
    assert get_for_perspective(DUAL, "auditor") == DUAL


def test_missing_segment_falls_back_to_raw_text():
    text = "SUBCONTRACTOR: Ask for an extension"
    assert get_for_perspective(text, "client") == text


def test_empty_text():
    assert get_for_perspective(None, "client") == ""
    assert get_for_perspective("", None) == ""
