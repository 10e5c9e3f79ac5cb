import logging
import re
from typing import List, Optional

from clausereview.analysis.health import classify
from clausereview.analysis.schemas import (
    RISK_CATEGORY_LABELS,
    RISK_LEVEL_COLORS,
    AggregateScoreRecord,
    CategoryScores,
    ClauseRecord,
    ClauseSummary,
    PerspectiveView,
    RiskAssessment,
    RiskCategory,
    RiskLevel,
    RiskPill,
    RiskView,
)
from clausereview.perspective import (
    filter_by_perspective,
    get_for_perspective,
    parse_perspective,
    perspective_label,
    resolve,
    resolve_category_scores,
)

logger = logging.getLogger(__name__)

# Display order and short labels of the risk count pills
PILL_LEVELS = [
    (RiskLevel.CRITICAL, "Critical", "criticalCount"),
    (RiskLevel.HIGH, "High", "highCount"),
    (RiskLevel.MEDIUM, "Med", "mediumCount"),
    (RiskLevel.LOW, "Low", "lowCount"),
]


def analysis_prompt(label: str) -> str:
    """Chat prompt sent when a user asks the assistant about a clause."""
    return f"Analyze the risks in {label}"


def category_label(category: str) -> str:
    try:
        return RISK_CATEGORY_LABELS[RiskCategory(category)]
    except ValueError:
        return category


def worst_risk(risks: List[RiskAssessment]) -> Optional[RiskAssessment]:
    """The highest-scoring finding; the first one wins ties."""
    worst = None
    for risk in risks:
        if worst is None or risk.score > worst.score:
            worst = risk
    return worst


def find_clause_references(text: str, clause_labels: List[str]) -> List[str]:
    """
    Known clause labels mentioned in an assistant reply, in order of first
    appearance. Longer labels are matched first so "13.7" is not reported
    for a reply that mentions "13.7.1". Matching is literal and
    case-insensitive; the canonical label is returned.
    """
    labels = sorted({label for label in clause_labels if label}, key=len, reverse=True)
    if not text or not labels:
        return []

    pattern = re.compile("|".join(re.escape(label) for label in labels), re.IGNORECASE)
    canonical = {label.lower(): label for label in reversed(labels)}

    found: List[str] = []
    for match in pattern.finditer(text):
        label = canonical.get(match.group(0).lower(), match.group(0))
        if label not in found:
            found.append(label)
    return found


class ReviewService:
    """Projects a delivered analysis record into the view for one perspective."""

    def __init__(self, record: AggregateScoreRecord):
        self.record = record

    def _risk_view(self, risk: RiskAssessment, perspective) -> RiskView:
        return RiskView(
            category=risk.category,
            category_label=category_label(risk.category),
            level=risk.level,
            score=risk.score,
            description=risk.description,
            recommendation=get_for_perspective(risk.recommendation, perspective),
            matched_text=risk.matched_text,
            relevance=risk.relevance,
        )

    def _clause_summary(self, clause: ClauseRecord, perspective) -> ClauseSummary:
        risks = filter_by_perspective(clause.risk_assessments, perspective)
        worst = worst_risk(risks)
        return ClauseSummary(
            label=clause.label,
            title=clause.clause_title,
            content=clause.clause_content,
            risk_count=len(risks),
            worst_level=worst.level if worst else None,
            worst_color=RISK_LEVEL_COLORS[worst.level] if worst else None,
            risks=[self._risk_view(risk, perspective) for risk in risks],
        )

    def risk_pills(self, perspective) -> List[RiskPill]:
        pills = []
        for level, label, field in PILL_LEVELS:
            count = int(resolve(self.record, field, perspective))
            if count > 0:
                pills.append(RiskPill(level=level, label=label, count=count, color=RISK_LEVEL_COLORS[level]))
        return pills

    def top_risks(self, perspective, risk_level: Optional[RiskLevel] = None) -> List[RiskView]:
        risks = filter_by_perspective(self.record.top_risks, perspective)
        if risk_level is not None:
            risks = [risk for risk in risks if risk.level == risk_level]
        return [self._risk_view(risk, perspective) for risk in risks]

    def clause_labels(self) -> List[str]:
        return [clause.label for clause in self.record.clauses]

    def build_view(self, perspective, risk_level: Optional[RiskLevel] = None) -> PerspectiveView:
        perspective = parse_perspective(perspective)
        score = resolve(self.record, "overallScore", perspective)
        category_scores = resolve_category_scores(self.record, perspective) or CategoryScores()

        view = PerspectiveView(
            perspective=perspective.value if perspective else None,
            perspective_label=perspective_label(perspective),
            overall_score=score,
            health=classify(score),
            critical_count=int(resolve(self.record, "criticalCount", perspective)),
            high_count=int(resolve(self.record, "highCount", perspective)),
            medium_count=int(resolve(self.record, "mediumCount", perspective)),
            low_count=int(resolve(self.record, "lowCount", perspective)),
            category_scores=category_scores,
            risk_pills=self.risk_pills(perspective),
            top_risks=self.top_risks(perspective, risk_level),
            clauses=[self._clause_summary(clause, perspective) for clause in self.record.clauses],
            clause_labels=self.clause_labels(),
        )
        logger.debug(
            f"Built {view.perspective or 'default'} view: score={score}, "
            f"{len(view.top_risks)} top risks, {len(view.clauses)} clauses"
        )
        return view
