from typing import List, Dict
from fastapi import WebSocket
import logging

logger = logging.getLogger(__name__)

class ConnectionManager:
    """Document viewers subscribed to highlight events, grouped by document id."""

    def __init__(self):
        # Map document_id -> List[WebSocket]
        self.rooms: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, room_id: str):
        await websocket.accept()
        self.rooms.setdefault(room_id, []).append(websocket)
        logger.info(f"Viewer connected to {room_id}. Total in room: {len(self.rooms[room_id])}")

    def disconnect(self, websocket: WebSocket, room_id: str):
        connections = self.rooms.get(room_id)
        if connections and websocket in connections:
            connections.remove(websocket)
            if not connections:
                del self.rooms[room_id]
        logger.info(f"Viewer disconnected from {room_id}")

    async def broadcast(self, message: str, room_id: str):
        for connection in list(self.rooms.get(room_id, [])):
            try:
                await connection.send_text(message)
            except Exception as e:
                logger.error(f"Error broadcasting to {room_id}: {e}")

manager = ConnectionManager()
