from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class LocatorState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SEARCHING = "searching"
    HIGHLIGHTED = "highlighted"


class LocateResult(BaseModel):
    state: LocatorState
    query: str
    variant: Optional[str] = Field(None, description="Search string that matched")
    match_count: int = 0
    match_index: Optional[int] = Field(None, description="Result navigated to, zero-based")
    variants_tried: List[str] = Field(default_factory=list)


class LocateRequest(BaseModel):
    clause_ref: str = Field(..., description="Clause label or '13.7: Title' style reference")
    matched_text: Optional[str] = Field(None, description="Excerpt of the risk finding, preferred when present")


class OpenDocumentRequest(BaseModel):
    text: str = Field(..., description="Full document text, one paragraph per line")


class DocumentStatus(BaseModel):
    document_id: str
    loaded: bool
    state: LocatorState
    highlighted: Optional[str] = None
    pending: Optional[str] = None
