"""
Dual-audience recommendation text.

Upstream recommendations may address both parties in one string, e.g.
``"CLIENT: Pay promptly SUBCONTRACTOR: Expect delay"``. Two patterns are
matched independently against the original text: the client segment runs
up to the next ``SUBCONTRACTOR:`` marker or the end of the string, the
subcontractor segment runs to the end of the string. Markers are
case-insensitive.

If a third audience is ever needed, replace the patterns with a parser
that splits on any ``UPPERCASE_WORD:`` marker into tagged segments.
"""
import re
from typing import NamedTuple, Optional

from clausereview.perspective.schemas import Perspective, parse_perspective

CLIENT_RE = re.compile(r"CLIENT:\s*(.*?)(?=\s*SUBCONTRACTOR:|$)", re.IGNORECASE | re.DOTALL)
SUBCONTRACTOR_RE = re.compile(r"SUBCONTRACTOR:\s*(.*?)$", re.IGNORECASE | re.DOTALL)


class AudienceText(NamedTuple):
    client_text: Optional[str]
    sub_text: Optional[str]

    @property
    def is_structured(self) -> bool:
        return self.client_text is not None or self.sub_text is not None


def _capture(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def extract(text: Optional[str]) -> AudienceText:
    if not text:
        return AudienceText(None, None)
    return AudienceText(_capture(CLIENT_RE, text), _capture(SUBCONTRACTOR_RE, text))


def get_for_perspective(text: Optional[str], perspective) -> str:
    """
    Return the part of ``text`` addressed to ``perspective``.

    Unstructured text, or no selected perspective, returns the raw text.
    A missing segment for the active audience also returns the raw text so
    nothing is dropped, even if that shows the other party's segment.
    """
    raw = text or ""
    parts = extract(raw)
    if not parts.is_structured:
        return raw

    perspective = parse_perspective(perspective)
    if perspective is Perspective.CLIENT:
        return parts.client_text or raw
    if perspective is Perspective.SUBCONTRACTOR:
        return parts.sub_text or raw
    return raw
