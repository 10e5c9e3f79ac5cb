from enum import Enum
from typing import Dict, List, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL]


def parse_risk_level(value) -> RiskLevel:
    """Map an upstream level string onto RiskLevel. Anything unrecognised is Low."""
    if isinstance(value, RiskLevel):
        return value
    normalized = str(value or "").strip().lower()
    for level in _LEVEL_ORDER:
        if level.value.lower() == normalized:
            return level
    return RiskLevel.LOW


class RiskCategory(str, Enum):
    PAYMENT = "Payment"
    ROLE_RESPONSIBILITY = "RoleResponsibility"
    SAFETY = "Safety"
    TEMPORAL = "Temporal"
    PROCEDURE = "Procedure"
    DEFINITION = "Definition"
    REFERENCE = "Reference"


RISK_CATEGORY_LABELS: Dict[RiskCategory, str] = {
    RiskCategory.PAYMENT: "Payment Risk",
    RiskCategory.ROLE_RESPONSIBILITY: "Role & Responsibility",
    RiskCategory.SAFETY: "Safety & Insurance",
    RiskCategory.TEMPORAL: "Timeline & Penalties",
    RiskCategory.PROCEDURE: "Procedures & Claims",
    RiskCategory.DEFINITION: "Definitions & Ambiguities",
    RiskCategory.REFERENCE: "Reference Documents",
}

RISK_LEVEL_COLORS: Dict[RiskLevel, str] = {
    RiskLevel.LOW: "#6b7280",
    RiskLevel.MEDIUM: "#a16207",
    RiskLevel.HIGH: "#b91c1c",
    RiskLevel.CRITICAL: "#4a1d1d",
}

Relevance = Literal["Client", "Subcontractor", "Both"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryScores(CamelModel):
    payment: float = Field(0, ge=0, le=100)
    role_responsibility: float = Field(0, ge=0, le=100)
    safety: float = Field(0, ge=0, le=100)
    temporal: float = Field(0, ge=0, le=100)
    procedure: float = Field(0, ge=0, le=100)
    definition: float = Field(0, ge=0, le=100)
    reference: float = Field(0, ge=0, le=100)


class RiskAssessment(CamelModel):
    category: str = ""
    level: RiskLevel = RiskLevel.LOW
    score: float = Field(0, ge=0, description="Numeric severity of the finding")
    description: str = Field(
        "",
        validation_alias=AliasChoices("description", "riskDescriptionEn", "riskDescription"),
    )
    recommendation: str = Field(
        "",
        validation_alias=AliasChoices("recommendationEn", "recommendation"),
        description="Raw recommendation, may embed CLIENT:/SUBCONTRACTOR: segments",
    )
    matched_text: Optional[str] = Field(
        None, description="Literal excerpt from the source document that triggered the finding"
    )
    relevance: Optional[Relevance] = Field(
        None,
        validation_alias=AliasChoices("perspectiveRelevance", "relevance"),
        serialization_alias="perspectiveRelevance",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, value):
        return parse_risk_level(value)

    @field_validator("relevance", mode="before")
    @classmethod
    def _coerce_relevance(cls, value):
        if value is None or value == "":
            return None
        normalized = str(value).strip().capitalize()
        return normalized if normalized in ("Client", "Subcontractor", "Both") else None


class ClauseRecord(CamelModel):
    clause_number: Optional[str] = None
    clause_title: Optional[str] = None
    clause_content: Optional[str] = None
    order: int = Field(
        0,
        validation_alias=AliasChoices("clauseOrder", "order"),
        serialization_alias="clauseOrder",
    )
    risk_assessments: List[RiskAssessment] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.clause_number or f"Clause {self.order}"


class AggregateScoreRecord(CamelModel):
    """
    Template profile, contract health report or document scan summary.

    Shadow fields carry the perspective-specific values computed upstream;
    a missing shadow field means the base value holds for every perspective.
    """
    overall_score: float = 0
    total_clauses: int = 0
    critical_count: int = Field(0, validation_alias=AliasChoices("criticalCount", "criticalRiskCount"))
    high_count: int = Field(0, validation_alias=AliasChoices("highCount", "highRiskCount"))
    medium_count: int = Field(0, validation_alias=AliasChoices("mediumCount", "mediumRiskCount"))
    low_count: int = Field(0, validation_alias=AliasChoices("lowCount", "lowRiskCount"))
    category_scores: CategoryScores = Field(default_factory=CategoryScores)

    client_overall_score: Optional[float] = None
    client_critical_count: Optional[int] = None
    client_high_count: Optional[int] = None
    client_medium_count: Optional[int] = None
    client_low_count: Optional[int] = None
    client_category_scores: Optional[CategoryScores] = None

    subcontractor_overall_score: Optional[float] = None
    subcontractor_critical_count: Optional[int] = None
    subcontractor_high_count: Optional[int] = None
    subcontractor_medium_count: Optional[int] = None
    subcontractor_low_count: Optional[int] = None
    subcontractor_category_scores: Optional[CategoryScores] = None

    summary: Optional[str] = None
    recommendations: List[str] = Field(default_factory=list)
    clauses: List[ClauseRecord] = Field(default_factory=list)
    top_risks: List[RiskAssessment] = Field(default_factory=list)


# --- Perspective-specific projections ---

class HealthStatus(CamelModel):
    label: Literal["Good", "Moderate", "Concerning", "Critical"]
    color: str


class RiskPill(CamelModel):
    level: RiskLevel
    label: str
    count: int
    color: str


class RiskView(CamelModel):
    category: str
    category_label: str
    level: RiskLevel
    score: float
    description: str
    recommendation: str
    matched_text: Optional[str] = None
    relevance: Optional[Relevance] = None


class ClauseSummary(CamelModel):
    label: str
    title: Optional[str] = None
    content: Optional[str] = None
    risk_count: int
    worst_level: Optional[RiskLevel] = None
    worst_color: Optional[str] = None
    risks: List[RiskView] = Field(default_factory=list)


class PerspectiveView(CamelModel):
    perspective: Optional[str] = None
    perspective_label: str = ""
    overall_score: float
    health: HealthStatus
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    category_scores: CategoryScores
    risk_pills: List[RiskPill]
    top_risks: List[RiskView]
    clauses: List[ClauseSummary]
    clause_labels: List[str]


class ViewRequest(CamelModel):
    record: AggregateScoreRecord
    risk_level: Optional[RiskLevel] = Field(None, description="Only include top risks at this level")

    @field_validator("risk_level", mode="before")
    @classmethod
    def _coerce_risk_level(cls, value):
        return None if value in (None, "") else parse_risk_level(value)


class ClauseReferenceRequest(CamelModel):
    text: str
    clause_labels: List[str] = Field(default_factory=list)


class ClauseReferenceResponse(CamelModel):
    references: List[str]
