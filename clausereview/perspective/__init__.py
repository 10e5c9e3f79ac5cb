from clausereview.perspective.schemas import (
    Perspective,
    parse_perspective,
    perspective_label,
)
from clausereview.perspective.audience import extract, get_for_perspective
from clausereview.perspective.service import (
    resolve,
    resolve_category_scores,
    filter_by_perspective,
)
