from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from clausereview.core.websockets.manager import manager
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.websocket("/{room_id}")
async def websocket_endpoint(websocket: WebSocket, room_id: str):
    """
    Highlight lifecycle events for one document.
    room_id is the document id used with /documents/{document_id}.

    Each message is a JSON object with "event" and "document_id":
    - "pending": locate request stored until the document loads; adds "query"
    - "highlighted": a match is shown; adds "query", "variant", "match_index"
    - "cleared": the highlight or pending request is gone (manual clear,
      auto-clear, a newer request, or the document was replaced or closed)
    """
    await manager.connect(websocket, room_id)
    try:
        while True:
            # Viewers do not send anything meaningful; keep the socket open.
            data = await websocket.receive_text()
            logger.debug(f"Received from {room_id}: {data}")
    except WebSocketDisconnect:
        manager.disconnect(websocket, room_id)
    except Exception as e:
        logger.error(f"WebSocket error in room {room_id}: {type(e).__name__}: {e}")
        manager.disconnect(websocket, room_id)
