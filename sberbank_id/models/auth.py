"""
Modelos Pydantic para autenticación con Sberbank ID.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

# Campos sin valor por defecto que el partner debe proporcionar
REQUIRED_FIELDS = ("redirect_url", "client_id", "client_secret")

# Claims del proveedor, se devuelven tal cual
UserInfo = Dict[str, Any]


class ClientConfig(BaseModel):
    """
    Configuración de conexión a Sberbank ID.

    Acepta claves en snake_case o en camelCase
    (``clientId``, ``redirectUrl``...). Las claves desconocidas se ignoran.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        # clientId numérico se acepta como texto
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "client_id": "11111111-2222-3333-4444-555555555555",
                "client_secret": "s3cr3t",
                "redirect_url": "http://localhost:8002/api/v1/auth/callback",
                "production": False
            }
        }
    )

    grant_type: str = Field(
        default="authorization_code",
        validation_alias=AliasChoices("grant_type", "grantType")
    )
    production_url: str = Field(
        default="https://open.api.sberbank.ru/ru/prod",
        validation_alias=AliasChoices("production_url", "productionUrl")
    )
    dev_url: str = Field(
        default="https://dev.api.sberbank.ru/ru/prod",
        validation_alias=AliasChoices("dev_url", "devUrl")
    )
    auth_path: str = Field(
        default="/tokens/v2/oidc",
        validation_alias=AliasChoices("auth_path", "authPath")
    )
    user_info_path: str = Field(
        default="/sberbankid/v2.1/userinfo",
        validation_alias=AliasChoices("user_info_path", "userInfoPath")
    )
    production: bool = True
    redirect_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("redirect_url", "redirectUrl")
    )
    client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("client_id", "clientId")
    )
    client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("client_secret", "clientSecret"),
        repr=False
    )
    scope: str = "openid+name"
    timeout_millis: float = Field(
        default=2000,
        gt=0,
        validation_alias=AliasChoices("timeout_millis", "timeoutMillis", "timeout")
    )

    @model_validator(mode="after")
    def _check_required(self) -> "ClientConfig":
        """Los campos obligatorios no pueden quedar en None ni vacíos."""
        for field in REQUIRED_FIELDS:
            if not getattr(self, field):
                raise PydanticCustomError(
                    "required_field",
                    "Field '{field}' is required to config.",
                    {"field": field}
                )
        return self

    @property
    def base_url(self) -> str:
        """URL del gateway según el entorno (producción o desarrollo)."""
        return self.production_url if self.production else self.dev_url

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_millis / 1000


class TokenState(BaseModel):
    """
    Estado de autenticación de una instancia.

    Sin token la instancia está en estado no autenticado; tras un intercambio
    exitoso pasa a autenticado con el access_token recibido.
    """

    model_config = ConfigDict(frozen=True)

    access_token: Optional[str] = Field(default=None, repr=False)

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None
