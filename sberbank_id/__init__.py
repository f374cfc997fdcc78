"""
Cliente asíncrono para Sberbank ID (OAuth2 / OpenID Connect).

Uso:
    factory = configure({"client_id": ..., "client_secret": ..., "redirect_url": ...})
    user = await factory.create(code).fetch_user()
"""

from sberbank_id.exceptions import (
    ArgumentError,
    ConfigurationError,
    ProviderError,
    SberbankIDError,
    TokenAcquisitionError,
    TransportError
)
from sberbank_id.models.auth import ClientConfig, TokenState, UserInfo
from sberbank_id.utils.request_id import generate_request_id
from sberbank_id.utils.sberbank_auth import SberbankID, SberbankIDFactory, configure

__all__ = [
    "configure",
    "ClientConfig",
    "TokenState",
    "UserInfo",
    "SberbankID",
    "SberbankIDFactory",
    "generate_request_id",
    "SberbankIDError",
    "ConfigurationError",
    "ArgumentError",
    "TokenAcquisitionError",
    "ProviderError",
    "TransportError",
]
