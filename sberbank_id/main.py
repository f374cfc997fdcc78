from fastapi import FastAPI
import logging
import sys
from contextlib import asynccontextmanager

from fastapi.middleware.cors import CORSMiddleware

from sberbank_id.core.settings import settings
from sberbank_id.api import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Enviar logs a stdout para Docker
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Maneja el ciclo de vida de la aplicación.
    """
    # Startup
    if settings.sberbank_configured:
        logger.info("✅ Servicio Sberbank ID inicializado")
    else:
        logger.warning("⚠️ Servicio iniciado sin credenciales de Sberbank ID")

    yield

    # Shutdown
    logger.info("Servicio cerrado")


app = FastAPI(
    title="Sberbank ID API",
    description="Servicio de ejemplo que intercambia el código de Sberbank ID por la información del usuario",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower()
    )
