from typing import Optional
from fastapi import Depends, Header, Query

from clausereview.perspective.schemas import Perspective, parse_perspective
from clausereview.perspective.store import PerspectiveStore, perspective_store


def get_perspective_store() -> PerspectiveStore:
    return perspective_store


async def get_current_perspective(
    perspective: Optional[str] = Query(None, description="client | subcontractor; overrides the session value"),
    x_session_id: Optional[str] = Header(None),
    store: PerspectiveStore = Depends(get_perspective_store),
) -> Optional[Perspective]:
    """
    The perspective a request is served under.

    An explicit query parameter wins, otherwise the session's stored
    selection is used. Unknown values count as no perspective.
    """
    if perspective is not None:
        return parse_perspective(perspective)
    return store.get(x_session_id)
