from typing import Any, Dict, List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuraciones del servicio cargadas desde variables de entorno."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Permitir campos extra en caso de que se agreguen nuevas variables
        extra="ignore"
    )

    # Configuración del servidor
    port: int = 8002
    environment: str = "development"
    allow_origins: str = "http://localhost:8002,http://127.0.0.1:8002"
    log_level: str = "INFO"

    # Sberbank ID Configuration
    sberbank_client_id: str = ""
    sberbank_client_secret: str = ""
    sberbank_redirect_url: str = "http://localhost:8002/api/v1/auth/callback"
    sberbank_production: bool = True
    sberbank_scope: str = "openid+name"
    sberbank_timeout_millis: int = 2000

    @property
    def origins_list(self) -> List[str]:
        """Convierte la cadena de orígenes separada por comas en una lista."""
        return [origin.strip() for origin in self.allow_origins.split(",")]

    @property
    def sberbank_configured(self) -> bool:
        return bool(
            self.sberbank_client_id
            and self.sberbank_client_secret
            and self.sberbank_redirect_url
        )

    def sberbank_config(self) -> Dict[str, Any]:
        """Diccionario listo para ``sberbank_id.configure``."""
        return {
            "client_id": self.sberbank_client_id,
            "client_secret": self.sberbank_client_secret,
            "redirect_url": self.sberbank_redirect_url,
            "production": self.sberbank_production,
            "scope": self.sberbank_scope,
            "timeout_millis": self.sberbank_timeout_millis
        }


# Instancia global de configuración
settings = Settings()
