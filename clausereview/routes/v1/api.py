from fastapi import APIRouter

from clausereview.analysis.router import router as analysis_router
from clausereview.perspective.router import router as perspective_router
from clausereview.locator.router import router as locator_router
from clausereview.routes.v1.websockets import router as ws_router

api_router = APIRouter()

api_router.include_router(analysis_router)
api_router.include_router(perspective_router)
api_router.include_router(locator_router)
api_router.include_router(ws_router, prefix="/ws")
