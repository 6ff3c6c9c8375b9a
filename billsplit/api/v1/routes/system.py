from fastapi import APIRouter, Depends

from billsplit.core.config import Settings
from billsplit.core.dependencies import get_app_settings

router = APIRouter()

@router.get("/health", description="service liveness")
async def health(settings: Settings = Depends(get_app_settings)):
    return {"status": "ok", "app": settings.APP_NAME}
