"""
Modelos de datos del cliente.
"""

from sberbank_id.models.auth import (
    REQUIRED_FIELDS,
    ClientConfig,
    TokenState,
    UserInfo
)

__all__ = [
    "REQUIRED_FIELDS",
    "ClientConfig",
    "TokenState",
    "UserInfo"
]
