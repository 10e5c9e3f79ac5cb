import logging
from collections import defaultdict
from typing import Dict, Optional

from clausereview.config import settings
from clausereview.perspective.schemas import Perspective, parse_perspective

logger = logging.getLogger(__name__)


class PerspectiveStore:
    """
    Session-scoped key-value storage for the selected perspective.

    Each browsing session gets its own small key-value map, the same shape
    as browser session storage. The value is only ever written by an
    explicit user selection; nothing in the review core mutates it.
    """

    def __init__(self, storage_key: str = settings.PERSPECTIVE_STORAGE_KEY):
        self.storage_key = storage_key
        self._sessions: Dict[str, Dict[str, str]] = defaultdict(dict)

    def get(self, session_id: Optional[str]) -> Optional[Perspective]:
        if not session_id or session_id not in self._sessions:
            return None
        return parse_perspective(self._sessions[session_id].get(self.storage_key))

    def set(self, session_id: str, perspective: Perspective) -> Perspective:
        perspective = parse_perspective(perspective)
        if perspective is None:
            raise ValueError("Perspective must be 'client' or 'subcontractor'")
        self._sessions[session_id][self.storage_key] = perspective.value
        logger.info(f"Session {session_id} perspective set to {perspective.value}")
        return perspective

    def clear(self, session_id: str) -> None:
        storage = self._sessions.get(session_id)
        if storage is not None:
            storage.pop(self.storage_key, None)
            if not storage:
                del self._sessions[session_id]
        logger.info(f"Session {session_id} perspective cleared")


perspective_store = PerspectiveStore()
