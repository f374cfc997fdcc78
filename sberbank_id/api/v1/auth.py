"""
Endpoints de autenticación con Sberbank ID.
Recibe el callback OAuth2 y devuelve la información del usuario.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from functools import lru_cache
from typing import Optional, Dict, Any
import logging

from sberbank_id.core.settings import settings
from sberbank_id.exceptions import (
    ArgumentError,
    ConfigurationError,
    ProviderError,
    TokenAcquisitionError,
    TransportError
)
from sberbank_id.utils.sberbank_auth import SberbankIDFactory, configure

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def get_client_factory() -> Optional[SberbankIDFactory]:
    """
    Construye la fábrica de clientes una sola vez desde las variables de entorno.
    Devuelve None si faltan las credenciales o la configuración es inválida.
    """
    if not settings.sberbank_configured:
        logger.warning("⚠️ Sberbank ID no configurado (SBERBANK_CLIENT_ID / SBERBANK_CLIENT_SECRET / SBERBANK_REDIRECT_URL)")
        return None
    try:
        return configure(settings.sberbank_config())
    except ConfigurationError as e:
        logger.error(f"❌ Configuración de Sberbank ID inválida: {e.message}")
        return None


@router.get(
    "/auth/callback",
    tags=["Authentication"],
    summary="Callback de OAuth2",
    description="Recibe el código de autorización desde Sberbank ID, lo intercambia por un token y devuelve la información del usuario."
)
async def oauth_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    factory: Optional[SberbankIDFactory] = Depends(get_client_factory)
) -> Dict[str, Any]:
    """
    Callback de OAuth2 desde Sberbank ID.
    Cada código genera un cliente nuevo; no se guardan tokens entre peticiones.
    """
    if error:
        logger.error(f"❌ Error OAuth: {error}")
        raise HTTPException(status_code=400, detail=f"Error OAuth: {error}")

    if not factory:
        raise HTTPException(
            status_code=400,
            detail="Sberbank ID no configurado. Verifica SBERBANK_CLIENT_ID, SBERBANK_CLIENT_SECRET y SBERBANK_REDIRECT_URL en .env"
        )

    try:
        client = factory.create(code)
        user_info = await client.fetch_user()
    except ArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProviderError as e:
        status_code = 401 if e.status in (401, 403) else 502
        raise HTTPException(status_code=status_code, detail=e.message)
    except TokenAcquisitionError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except TransportError as e:
        raise HTTPException(status_code=504, detail=e.message)

    logger.info(f"✅ Usuario autenticado con Sberbank ID (state={state})")
    return user_info
