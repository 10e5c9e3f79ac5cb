import logging
from typing import List, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentViewer(Protocol):
    """Literal-search surface of a rendered document."""

    def find(self, text: str) -> int:
        """Highlight every occurrence of ``text`` and return how many there are (0 if none)."""
        ...

    def navigate(self, index: int) -> None:
        """Scroll to the ``index``-th (zero-based) result of the last find."""
        ...

    def clear_highlight(self) -> None:
        ...


class ParagraphDocumentViewer:
    """
    In-memory viewer over plain-text paragraphs.

    Matches are literal and case-insensitive and never span two paragraphs,
    like the search module of a rich document editor.
    """

    def __init__(self, paragraphs: List[str]):
        self.paragraphs = list(paragraphs)
        self.results: List[Tuple[int, int]] = []
        self.current: Optional[Tuple[int, int]] = None
        self.query: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "ParagraphDocumentViewer":
        return cls([line for line in text.splitlines() if line.strip()])

    def find(self, text: str) -> int:
        self.clear_highlight()
        if not text:
            return 0
        needle = text.lower()
        for p_index, paragraph in enumerate(self.paragraphs):
            haystack = paragraph.lower()
            start = haystack.find(needle)
            while start != -1:
                self.results.append((p_index, start))
                start = haystack.find(needle, start + len(needle))
        self.query = text
        return len(self.results)

    def navigate(self, index: int) -> None:
        if not 0 <= index < len(self.results):
            raise IndexError(f"No search result {index} (have {len(self.results)})")
        self.current = self.results[index]
        logger.debug(f"Navigated to paragraph {self.current[0]}, offset {self.current[1]}")

    def clear_highlight(self) -> None:
        self.results = []
        self.current = None
        self.query = None

    @property
    def highlighted_paragraph(self) -> Optional[str]:
        if self.current is None:
            return None
        return self.paragraphs[self.current[0]]
