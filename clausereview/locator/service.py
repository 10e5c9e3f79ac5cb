import asyncio
import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Protocol

from clausereview.config import settings
from clausereview.locator.schemas import LocateResult, LocatorState
from clausereview.locator.variants import search_candidates
from clausereview.locator.viewer import DocumentViewer

logger = logging.getLogger(__name__)

# (event, payload) -> None; events are the LocatorState values plus "cleared"
EventListener = Callable[[str, Dict[str, Any]], None]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class EventLoopScheduler:
    """Schedules callbacks on the running asyncio loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class PendingRequest(NamedTuple):
    clause_ref: str
    matched_text: Optional[str] = None


class ClauseLocator:
    """
    Finds a clause in a rendered document and keeps its highlight lifecycle.

    States: idle -> pending (document not loaded yet) -> searching ->
    highlighted -> idle. Requests made before the document is loaded are
    kept in a single slot; a newer request overwrites an older one that has
    not run yet, so superseded requests are dropped silently. A successful
    match arms an auto-clear timer, which is cancelled before any new
    request so a stale timer never clears a newer highlight.

    None of the public operations raise: failures are logged and leave the
    locator idle.
    """

    def __init__(
        self,
        viewer: Optional[DocumentViewer] = None,
        scheduler: Optional[Scheduler] = None,
        auto_clear_seconds: float = settings.HIGHLIGHT_AUTO_CLEAR_SECONDS,
        listener: Optional[EventListener] = None,
    ):
        self.viewer = viewer
        self.scheduler = scheduler or EventLoopScheduler()
        self.auto_clear_seconds = auto_clear_seconds
        self.listener = listener
        self.state = LocatorState.IDLE
        self.loaded = False
        self.highlighted: Optional[str] = None
        self._pending: Optional[PendingRequest] = None
        self._timer: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def pending(self) -> Optional[PendingRequest]:
        return self._pending

    # --- public operations ---

    def search_and_scroll_to(self, clause_ref: str, matched_text: Optional[str] = None) -> LocateResult:
        return self._locate(PendingRequest(clause_ref or "", matched_text))

    def highlight_clause(self, clause_ref: str, matched_text: Optional[str] = None) -> LocateResult:
        return self._locate(PendingRequest(clause_ref or "", matched_text))

    def clear_highlights(self) -> None:
        was_highlighted = self.state == LocatorState.HIGHLIGHTED
        dropped = self._pending
        self._pending = None
        self._go_idle()
        if was_highlighted:
            self._clear_viewer()
        if was_highlighted or dropped is not None:
            self._emit("cleared")

    def close(self) -> None:
        """Forget the document: drop any pending request and highlight, cancel the timer."""
        self.clear_highlights()
        self.loaded = False
        self.viewer = None

    def document_loaded(self, viewer: Optional[DocumentViewer] = None) -> Optional[LocateResult]:
        """
        Load signal from the viewer. Runs the pending request, if any.

        Passing a viewer replaces the current one, e.g. when a new document
        is opened; any highlight on the old document is dropped.
        """
        if viewer is not None:
            if self.state == LocatorState.HIGHLIGHTED:
                self._go_idle()
                self._emit("cleared")
            self.viewer = viewer
        self.loaded = True

        request, self._pending = self._pending, None
        if request is None:
            return None
        logger.info(f"Executing pending search: {request.clause_ref[:60]!r}")
        return self._execute(request)

    # --- internals ---

    def _locate(self, request: PendingRequest) -> LocateResult:
        # A new request ends any current highlight first.
        if self.state == LocatorState.HIGHLIGHTED:
            self._go_idle()
            self._clear_viewer()
            self._emit("cleared")

        if not self.loaded:
            if self._pending is not None:
                logger.info(f"Replacing pending search {self._pending.clause_ref[:60]!r}")
            self._pending = request
            self.state = LocatorState.PENDING
            logger.info(f"Document not ready, queuing search: {request.clause_ref[:60]!r}")
            self._emit(LocatorState.PENDING.value, query=request.clause_ref)
            return LocateResult(state=self.state, query=request.clause_ref)

        return self._execute(request)

    def _execute(self, request: PendingRequest) -> LocateResult:
        self.state = LocatorState.SEARCHING
        result = LocateResult(state=self.state, query=request.clause_ref)

        viewer = self.viewer
        if viewer is None:
            logger.warning("No document viewer available, search skipped")
            self.state = result.state = LocatorState.IDLE
            return result

        try:
            viewer.clear_highlight()
            for variant in search_candidates(request.clause_ref, request.matched_text):
                result.variants_tried.append(variant)
                count = viewer.find(variant)
                logger.debug(f"Search results for {variant[:60]!r}: {count}")
                if count > 0:
                    # The first hit of a short clause number is usually the
                    # table of contents; prefer the second when there is one.
                    index = 1 if count > 1 else 0
                    viewer.navigate(index)
                    result.variant = variant
                    result.match_count = count
                    result.match_index = index
                    break
        except Exception as e:
            logger.warning(f"Search/navigate failed for {request.clause_ref[:60]!r}: {e}")
            self.state = result.state = LocatorState.IDLE
            return result

        if result.variant is None:
            logger.info(
                f"No match for {request.clause_ref[:60]!r} after {len(result.variants_tried)} variants"
            )
            self.state = result.state = LocatorState.IDLE
            return result

        self.state = result.state = LocatorState.HIGHLIGHTED
        self.highlighted = result.variant
        self._arm_timer()
        self._emit(LocatorState.HIGHLIGHTED.value, query=request.clause_ref, variant=result.variant, match_index=result.match_index)
        return result

    def _arm_timer(self) -> None:
        self._cancel_timer()
        generation = self._generation
        try:
            self._timer = self.scheduler.call_later(self.auto_clear_seconds, lambda: self._auto_clear(generation))
        except RuntimeError as e:
            logger.warning(f"Highlight auto-clear not scheduled: {e}")
            self._timer = None

    def _auto_clear(self, generation: int) -> None:
        if generation != self._generation or self.state != LocatorState.HIGHLIGHTED:
            return
        self._timer = None
        self._go_idle()
        self._clear_viewer()
        self._emit("cleared")

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _go_idle(self) -> None:
        self._cancel_timer()
        self.state = LocatorState.IDLE
        self.highlighted = None

    def _clear_viewer(self) -> None:
        if not self.loaded or self.viewer is None:
            return
        try:
            self.viewer.clear_highlight()
        except Exception as e:
            logger.warning(f"Clear highlights failed: {e}")

    def _emit(self, event: str, **payload: Any) -> None:
        if self.listener is None:
            return
        try:
            self.listener(event, payload)
        except Exception as e:
            logger.error(f"Locator listener failed on {event!r}: {e}")


# In-memory locators, one per open document
# Format: {document_id: ClauseLocator}
DOCUMENT_LOCATORS: Dict[str, ClauseLocator] = {}


def get_locator(document_id: str, listener: Optional[EventListener] = None) -> ClauseLocator:
    locator = DOCUMENT_LOCATORS.get(document_id)
    if locator is None:
        locator = ClauseLocator(listener=listener)
        DOCUMENT_LOCATORS[document_id] = locator
    return locator


def remove_locator(document_id: str) -> Optional[ClauseLocator]:
    locator = DOCUMENT_LOCATORS.pop(document_id, None)
    if locator is not None:
        locator.close()
    return locator
