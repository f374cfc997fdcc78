from fastapi import APIRouter
from datetime import datetime

from sberbank_id.core.settings import settings

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check():
    """Endpoint de salud: indica si el servicio y la integración están listos."""
    now = datetime.now()
    return {
        "status": "ok",
        "environment": settings.environment,
        "sberbank_configured": settings.sberbank_configured,
        "timestamp": now.isoformat()
    }
