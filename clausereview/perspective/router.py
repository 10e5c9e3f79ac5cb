from fastapi import APIRouter, Depends, HTTPException

from clausereview.perspective.dependencies import get_perspective_store
from clausereview.perspective.schemas import (
    PerspectiveSelection,
    SetPerspectiveRequest,
    perspective_label,
)
from clausereview.perspective.store import PerspectiveStore

router = APIRouter(prefix="/sessions", tags=["perspective"])


@router.get("/{session_id}/perspective", response_model=PerspectiveSelection)
async def get_perspective(session_id: str, store: PerspectiveStore = Depends(get_perspective_store)):
    perspective = store.get(session_id)
    return PerspectiveSelection(perspective=perspective, label=perspective_label(perspective))


@router.put("/{session_id}/perspective", response_model=PerspectiveSelection)
async def set_perspective(
    session_id: str,
    request: SetPerspectiveRequest,
    store: PerspectiveStore = Depends(get_perspective_store),
):
    try:
        perspective = store.set(session_id, request.perspective)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PerspectiveSelection(perspective=perspective, label=perspective_label(perspective))


@router.delete("/{session_id}/perspective", response_model=PerspectiveSelection)
async def clear_perspective(session_id: str, store: PerspectiveStore = Depends(get_perspective_store)):
    store.clear(session_id)
    return PerspectiveSelection()
