import logging
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, TypeVar

from clausereview.perspective.schemas import AUDIENCE_LABELS, Perspective, parse_perspective

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UPPER_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _snake(name: str) -> str:
    return _UPPER_RE.sub("_", name).lower()


def _unique(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


def _base_names(base_field: str) -> List[str]:
    return _unique([base_field, _camel(base_field), _snake(base_field)])


def _shadow_names(perspective: Perspective, base_field: str) -> List[str]:
    """clientOverallScore / client_overall_score style names for ``base_field``."""
    camel = _camel(base_field)
    return _unique([
        f"{perspective.value}{camel[:1].upper()}{camel[1:]}",
        f"{perspective.value}_{_snake(base_field)}",
    ])


def _lookup(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _first_present(record: Any, names: Iterable[str]) -> Any:
    for name in names:
        value = _lookup(record, name)
        if value is not None:
            return value
    return None


def _candidates(base_field: str, perspective) -> List[str]:
    perspective = parse_perspective(perspective)
    names = _base_names(base_field)
    if perspective is not None:
        names = _shadow_names(perspective, base_field) + names
    return names


def resolve(record: Any, base_field: str, perspective) -> float:
    """
    Return the value of ``base_field`` as seen from ``perspective``.

    With a perspective selected the client-/subcontractor-prefixed shadow
    field wins when present; otherwise the base field is used. Missing
    values resolve to 0. Works on mappings and attribute objects alike,
    with camelCase or snake_case field names.
    """
    value = _first_present(record, _candidates(base_field, perspective))
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric value for {base_field!r}: {value!r}")
        return 0


def resolve_category_scores(record: Any, perspective) -> Any:
    """Perspective-specific category score block, falling back to the base block."""
    return _first_present(record, _candidates("categoryScores", perspective))


def _relevance(item: Any) -> Optional[str]:
    return _first_present(item, ["relevance", "perspectiveRelevance"]) or None


def filter_by_perspective(items: List[T], perspective) -> List[T]:
    """
    Keep the risks visible to ``perspective``.

    Untagged and ``Both`` items are always kept; items tagged for the other
    audience only are dropped. Order is preserved. With no perspective the
    input list itself is returned.
    """
    perspective = parse_perspective(perspective)
    if perspective is None:
        return items
    label = AUDIENCE_LABELS[perspective]
    return [item for item in items if _relevance(item) in (None, "Both", label)]
