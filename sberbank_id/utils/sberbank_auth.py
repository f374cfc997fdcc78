"""
Utilidad para manejar la autenticación con Sberbank ID.
Intercambia el código de autorización por un access_token y obtiene
la información del usuario con ese token.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

import aiohttp
from pydantic import ValidationError

from sberbank_id.core.http_request import HTTPClient, ResponseWrapper
from sberbank_id.exceptions import (
    ArgumentError,
    ConfigurationError,
    ProviderError,
    TokenAcquisitionError,
    TransportError
)
from sberbank_id.models.auth import ClientConfig, TokenState, UserInfo
from sberbank_id.utils.request_id import generate_request_id

logger = logging.getLogger(__name__)

# Campos de diagnóstico que el gateway devuelve en sus errores, por prioridad
PROVIDER_ERROR_FIELDS = (
    "moreInformation",
    "httpMessage",
    "error_description",
    "error",
    "message"
)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def _error_text(error: BaseException) -> str:
    return str(error) or type(error).__name__


def _describe_provider_error(payload: Dict[str, Any]) -> str:
    for field in PROVIDER_ERROR_FIELDS:
        value = payload.get(field)
        if value:
            return str(value)
    return json.dumps(payload, ensure_ascii=False)


async def _read_payload(response: ResponseWrapper) -> Any:
    """Devuelve el cuerpo como JSON o, si no lo es, como texto."""
    try:
        return await response.json()
    except ValueError:
        return (await response.read()).decode('utf-8', errors='replace')


def configure(config: Union[ClientConfig, Mapping[str, Any], None]) -> "SberbankIDFactory":
    """
    Valida la configuración y devuelve una fábrica de clientes.

    Args:
        config: Diccionario con los campos a sobrescribir sobre los valores
            por defecto, o un ClientConfig ya construido

    Returns:
        SberbankIDFactory ligada a la configuración inmutable resultante

    Raises:
        ConfigurationError: Si config no es un mapeo o falta algún campo obligatorio
    """
    if isinstance(config, ClientConfig):
        client_config = config
    elif isinstance(config, Mapping):
        try:
            client_config = ClientConfig.model_validate(dict(config))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            message = "; ".join(error["msg"] for error in errors)
            raise ConfigurationError(message, details={"errors": errors}) from e
    else:
        raise ConfigurationError("Config is required.")

    logger.debug(
        f"Sberbank ID configurado: {client_config.base_url} "
        f"(production={client_config.production})"
    )
    return SberbankIDFactory(client_config)


class SberbankIDFactory:
    """Crea un cliente SberbankID por cada código de autorización."""

    def __init__(self, config: ClientConfig):
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def create(self, code: Optional[str], http_client: Optional[HTTPClient] = None) -> "SberbankID":
        """
        Crea un cliente para un código de autorización concreto.

        Args:
            code: Código recibido en el callback tras la autorización del usuario
            http_client: Transporte alternativo (por defecto uno nuevo por instancia)

        Raises:
            ArgumentError: Si el código está vacío
        """
        return SberbankID(code, self.config, http_client=http_client)


class SberbankID:
    """
    Cliente de Sberbank ID para un único código de autorización.

    Flujo:
    - acquire_token(): POST al endpoint de tokens, guarda el access_token
    - fetch_user(): obtiene un token nuevo y luego la información del usuario

    Cada instancia tiene su propio transporte; los headers de cada petición
    (RqUID, Authorization) se pasan por llamada y nunca se guardan como
    headers por defecto.
    """

    def __init__(
        self,
        code: Optional[str],
        config: ClientConfig,
        http_client: Optional[HTTPClient] = None
    ):
        if not code:
            raise ArgumentError("Field 'code' is required to constructor")

        self._code = code
        self.config = config
        self.token_state = TokenState()
        if http_client is None:
            http_client = HTTPClient(
                base_url=config.base_url,
                timeout=config.timeout_seconds,
                default_headers={
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                    "X-IBM-Client-ID": config.client_id
                }
            )
        self.http_client = http_client

    @property
    def code(self) -> str:
        return self._code

    @property
    def authenticated(self) -> bool:
        return self.token_state.authenticated

    @staticmethod
    def generate_request_id() -> str:
        return generate_request_id()

    def _token_request_body(self) -> str:
        return urlencode({
            "grant_type": self.config.grant_type,
            "scope": self.config.scope,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": self._code,
            "redirect_uri": self.config.redirect_url
        })

    def get_auth_headers(self) -> Dict[str, str]:
        """
        Obtiene el header Authorization para peticiones autenticadas.

        Raises:
            TokenAcquisitionError: Si todavía no se obtuvo un access_token
        """
        if not self.token_state.authenticated:
            raise TokenAcquisitionError(
                "No access token available. Call acquire_token() first."
            )
        return {"Authorization": f"Bearer {self.token_state.access_token}"}

    async def acquire_token(self) -> str:
        """
        Intercambia el código de autorización por un access_token.

        Returns:
            El access_token recibido

        Raises:
            TokenAcquisitionError: Si el gateway rechaza el código, no responde
                o la respuesta no contiene access_token
        """
        headers = {"RqUID": self.generate_request_id()}

        logger.info("Intercambiando código por token con Sberbank ID")

        try:
            response = await self.http_client.post(
                self.config.auth_path,
                headers=headers,
                data=self._token_request_body()
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Excepción intercambiando código por token: {_error_text(e)}")
            raise TokenAcquisitionError(
                f"Error while getting access token. {_error_text(e)}"
            ) from e

        payload = await _read_payload(response)

        if not response.ok:
            logger.error(f"❌ Error obteniendo token: {response.status} - {payload}")
            detail = _describe_provider_error(payload) if isinstance(payload, dict) else payload
            raise TokenAcquisitionError(
                f"Can not get access token from Sberbank. {detail}",
                status=response.status,
                response=payload
            )

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(access_token, str) or not access_token:
            logger.error("❌ La respuesta de token no contiene access_token")
            raise TokenAcquisitionError(
                "Token response does not contain access_token.",
                status=response.status,
                response=payload
            )

        self.token_state = TokenState(access_token=access_token)
        logger.info("✅ Token de acceso obtenido exitosamente")
        return access_token

    async def fetch_user(self) -> UserInfo:
        """
        Obtiene la información del usuario.

        Siempre pide un token nuevo antes de consultar el endpoint de userinfo.

        Returns:
            Claims del usuario tal como los devuelve el proveedor

        Raises:
            TokenAcquisitionError: Si falla el intercambio del código
            ProviderError: Si el gateway rechaza la petición con un error estructurado
            TransportError: Si hay error de red, timeout o respuesta no interpretable
        """
        await self.acquire_token()

        headers = {"x-Introspect-RqUID": self.generate_request_id()}
        headers.update(self.get_auth_headers())

        try:
            response = await self.http_client.get(
                self.config.user_info_path,
                headers=headers
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"❌ Excepción obteniendo usuario: {_error_text(e)}")
            raise TransportError(
                f"Error while getting marker or handling response. {_error_text(e)}"
            ) from e

        payload = await _read_payload(response)

        if response.ok:
            if isinstance(payload, str):
                raise TransportError(
                    "Error while getting marker or handling response. "
                    "Response is not valid JSON.",
                    details={"status": response.status}
                )
            logger.info("✅ Información de usuario obtenida exitosamente")
            return payload

        logger.error(f"❌ Error obteniendo usuario: {response.status} - {payload}")

        if isinstance(payload, dict):
            raise ProviderError(
                f"Can not get access from Sberbank. {_describe_provider_error(payload)}",
                status=response.status,
                response=payload
            )

        raise TransportError(
            f"Error while getting marker or handling response. "
            f"HTTP {response.status}: {payload}",
            details={"status": response.status}
        )
