import asyncio
import json
import logging
from fastapi import APIRouter, HTTPException

from clausereview.core.websockets.manager import manager
from clausereview.locator.schemas import DocumentStatus, LocateRequest, LocateResult, OpenDocumentRequest
from clausereview.locator.service import DOCUMENT_LOCATORS, ClauseLocator, get_locator, remove_locator
from clausereview.locator.viewer import ParagraphDocumentViewer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["locator"])

_background_tasks = set()


def _room_broadcaster(document_id: str):
    """Forward highlight lifecycle events to the document's WebSocket room."""
    def listener(event: str, payload: dict) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running loop, {event!r} not broadcast for {document_id}")
            return
        message = json.dumps({"event": event, "document_id": document_id, **payload})
        task = loop.create_task(manager.broadcast(message, document_id))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
    return listener


def _status(document_id: str, locator: ClauseLocator) -> DocumentStatus:
    return DocumentStatus(
        document_id=document_id,
        loaded=locator.loaded,
        state=locator.state,
        highlighted=locator.highlighted,
        pending=locator.pending.clause_ref if locator.pending else None,
    )


@router.put("/{document_id}", response_model=DocumentStatus)
async def open_document(document_id: str, request: OpenDocumentRequest):
    locator = get_locator(document_id, listener=_room_broadcaster(document_id))
    locator.document_loaded(ParagraphDocumentViewer.from_text(request.text))
    return _status(document_id, locator)


@router.get("/{document_id}", response_model=DocumentStatus)
async def get_document_status(document_id: str):
    locator = DOCUMENT_LOCATORS.get(document_id)
    if locator is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return _status(document_id, locator)


@router.post("/{document_id}/locate", response_model=LocateResult)
async def locate_clause(document_id: str, request: LocateRequest):
    locator = get_locator(document_id, listener=_room_broadcaster(document_id))
    return locator.search_and_scroll_to(request.clause_ref, request.matched_text)


@router.delete("/{document_id}/highlight", response_model=DocumentStatus)
async def clear_highlight(document_id: str):
    locator = DOCUMENT_LOCATORS.get(document_id)
    if locator is None:
        raise HTTPException(status_code=404, detail="Document not found")
    locator.clear_highlights()
    return _status(document_id, locator)


@router.delete("/{document_id}")
async def close_document(document_id: str):
    if remove_locator(document_id) is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return {"status": "closed", "document_id": document_id}
