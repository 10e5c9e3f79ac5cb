"""
Search variants for clause references.

The document viewer only offers a literal substring search, while clause
references coming from the classifier are noisy ("13.7: Gardiennage",
"13.7 Gardiennage", "Article 3", ...). A reference is turned into an ordered
list of candidate strings by a chain of small transforms; the locator tries
them in order and stops at the first one the document contains.
"""
import re
from typing import Callable, Iterator, List, Optional

from clausereview.config import settings

COLON_RE = re.compile(r"\s*:\s*")
BARE_COLON_RE = re.compile(r"(\S):(\s)")
# The number is not allowed to backtrack into a shorter prefix, so "12345"
# has no title and "13.7: Gardiennage" has title "Gardiennage".
NUMBERED_TITLE_RE = re.compile(r"^[\d.]+(?![\d.])\s*[:：]?\s*(.{%d,})" % settings.MIN_TITLE_VARIANT_LENGTH)
LEADING_NUMBER_RE = re.compile(r"^([\d.]+)")

Transform = Callable[[str], Optional[str]]


def verbatim(text: str) -> Optional[str]:
    return text


def without_colon(text: str) -> Optional[str]:
    """'13.7: Gardiennage' -> '13.7 Gardiennage'"""
    return COLON_RE.sub(" ", text).strip()


def spaced_colon(text: str) -> Optional[str]:
    """French typography puts a space before the colon: '13.7 : Gardiennage'"""
    return BARE_COLON_RE.sub(r"\1 :\2", text)


def title_only(text: str) -> Optional[str]:
    match = NUMBERED_TITLE_RE.match(text)
    if not match:
        return None
    title = match.group(1).strip()
    return title if len(title) >= settings.MIN_TITLE_VARIANT_LENGTH else None


def number_only(text: str) -> Optional[str]:
    match = LEADING_NUMBER_RE.match(text)
    if match and len(match.group(1)) >= settings.MIN_NUMBER_VARIANT_LENGTH:
        return match.group(1)
    return None


# Priority order; earlier variants are more specific.
VARIANT_TRANSFORMS: List[Transform] = [
    verbatim,
    without_colon,
    spaced_colon,
    title_only,
    number_only,
]

# Excerpts are literal document text, never cut down to a title or number.
EXCERPT_TRANSFORMS: List[Transform] = [
    verbatim,
    without_colon,
    spaced_colon,
]


def iter_variants(text: str, transforms: List[Transform] = VARIANT_TRANSFORMS) -> Iterator[str]:
    """Lazily yield each distinct, non-empty variant of ``text``."""
    seen = set()
    for transform in transforms:
        variant = transform(text)
        if variant and variant not in seen:
            seen.add(variant)
            yield variant


def build_variants(text: str) -> List[str]:
    return list(iter_variants(text))


def excerpt_search_text(matched_text: Optional[str], limit: int = settings.EXCERPT_MAX_CHARS) -> Optional[str]:
    """
    First line of a matched excerpt, cut to ``limit`` characters.

    The viewer matches within a single paragraph, so multi-line excerpts
    never match as a whole.
    """
    if not matched_text:
        return None
    for line in matched_text.splitlines():
        line = line.strip()
        if line:
            return line[:limit].strip()
    return None


def search_candidates(clause_ref: Optional[str], matched_text: Optional[str] = None) -> Iterator[str]:
    """
    Candidates for one locate request: the excerpt's first line and its
    colon variants, then every variant of the clause reference, without
    repeats.
    """
    seen = set()
    sources = (
        (excerpt_search_text(matched_text), EXCERPT_TRANSFORMS),
        (clause_ref, VARIANT_TRANSFORMS),
    )
    for source, transforms in sources:
        if not source:
            continue
        for variant in iter_variants(source, transforms):
            if variant not in seen:
                seen.add(variant)
                yield variant
