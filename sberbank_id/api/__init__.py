from fastapi import APIRouter
from .v1 import router as v1_router

# Router raíz de la API; main.py lo incluye en la aplicación
api_router = APIRouter(prefix="/api")
api_router.include_router(v1_router)
