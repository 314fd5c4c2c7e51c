from fastapi import APIRouter
from api.v1.routes.webhooks import router as webhooks_router
from api.v1.routes.activity import router as activity_router


router = APIRouter()
router.include_router(webhooks_router)
router.include_router(activity_router)
