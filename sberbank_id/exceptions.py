"""
Jerarquía de errores del cliente de Sberbank ID.

Todos los errores son terminales para la llamada que los produce: no hay
reintentos automáticos. El mapeo a códigos HTTP se hace en la capa de API
(``sberbank_id.api.v1.auth``), nunca en el cliente.
"""

from typing import Any, Dict, Optional


class SberbankIDError(Exception):
    """
    Excepción base para todos los errores del cliente.

    Atributos:
        message: Descripción legible del error
        code: Código de error en texto, estable entre versiones
        details: Datos adicionales (status HTTP, respuesta del proveedor, etc.)
    """

    def __init__(
        self,
        message: str,
        code: str = "SBERBANK_ID_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(SberbankIDError):
    """Configuración inválida o incompleta al llamar a ``configure``."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="SBERBANK_ID_CONFIG_ERROR", details=details)


class ArgumentError(SberbankIDError, ValueError):
    """Argumento inválido al crear una instancia (por ejemplo, code vacío)."""

    def __init__(self, message: str):
        super().__init__(message, code="SBERBANK_ID_ARGUMENT_ERROR")


class TokenAcquisitionError(SberbankIDError):
    """Falló el intercambio del código de autorización por un token."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Any = None
    ):
        details: Dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        if response is not None:
            details["response"] = response
        super().__init__(message, code="SBERBANK_ID_TOKEN_ERROR", details=details)
        self.status = status
        self.response = response


class ProviderError(SberbankIDError):
    """El proveedor rechazó la petición con un cuerpo de error estructurado."""

    def __init__(self, message: str, status: int, response: Dict[str, Any]):
        super().__init__(
            message,
            code="SBERBANK_ID_PROVIDER_ERROR",
            details={"status": status, "response": response}
        )
        self.status = status
        self.response = response


class TransportError(SberbankIDError):
    """Error de red, timeout o respuesta imposible de interpretar."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="SBERBANK_ID_TRANSPORT_ERROR", details=details)


__all__ = [
    "SberbankIDError",
    "ConfigurationError",
    "ArgumentError",
    "TokenAcquisitionError",
    "ProviderError",
    "TransportError",
]
