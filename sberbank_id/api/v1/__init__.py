from fastapi import APIRouter
from .health import router as health_router
from .auth import router as auth_router

# Endpoints versionados, montados bajo /api/v1
router = APIRouter(prefix="/v1")

router.include_router(health_router)
router.include_router(auth_router)
