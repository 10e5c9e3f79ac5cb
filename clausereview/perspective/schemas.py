from enum import Enum
from typing import Optional
from pydantic import BaseModel


class Perspective(str, Enum):
    CLIENT = "client"
    SUBCONTRACTOR = "subcontractor"


AUDIENCE_LABELS = {
    Perspective.CLIENT: "Client",
    Perspective.SUBCONTRACTOR: "Subcontractor",
}


def parse_perspective(value) -> Optional[Perspective]:
    """Unknown or empty values mean no perspective is selected."""
    if isinstance(value, Perspective):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Perspective(value.strip().lower())
    except ValueError:
        return None


def perspective_label(perspective: Optional[Perspective]) -> str:
    return AUDIENCE_LABELS.get(parse_perspective(perspective), "")


class PerspectiveSelection(BaseModel):
    perspective: Optional[Perspective] = None
    label: str = ""


class SetPerspectiveRequest(BaseModel):
    perspective: Perspective
