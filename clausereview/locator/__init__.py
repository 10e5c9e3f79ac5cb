from clausereview.locator.variants import build_variants, excerpt_search_text, search_candidates
from clausereview.locator.viewer import DocumentViewer, ParagraphDocumentViewer
from clausereview.locator.service import ClauseLocator
from clausereview.locator.schemas import LocateResult, LocatorState
