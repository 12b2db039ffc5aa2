from fastapi import APIRouter, Depends

from legalhub.config import Settings
from legalhub.dependencies import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(app_settings: Settings = Depends(get_settings)):
    return {"status": "ok", "app": app_settings.app_name, "version": app_settings.app_version}
