"""
Configuración centralizada de la aplicación
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # API Settings
    API_TITLE: str = "Verduleria API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "API de gestión de clientes, productos, pedidos y remitos"
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8080
    API_DEBUG: bool = False

    # Database
    # SQLite for the local desktop install, postgresql+psycopg2://... on a server
    DATABASE_URL: str = "sqlite:///./verduleria.db"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:5173,app://." or '["http://localhost:5173"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:5173,http://localhost:3000"

    # Orders
    # When enabled, change_status rejects transitions outside ORDER_TRANSITIONS
    ENFORCE_STATUS_TRANSITIONS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:5173"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
