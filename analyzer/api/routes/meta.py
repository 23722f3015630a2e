from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from analyzer.api.dependencies import AppServices, get_services, get_settings
from analyzer.config.settings import Settings

router = APIRouter(tags=["meta"])


@router.get("/rules")
def rules(services: AppServices = Depends(get_services)) -> dict[str, Any]:
    return {"rules": services.rules.list_rules()}


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
    }
