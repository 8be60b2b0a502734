"""Application settings loaded from .env file."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from models.starrez import StarRezConnection


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # StarRez
    STARREZ_API_URL: str = ""
    STARREZ_API_USER: str = ""
    STARREZ_API_KEY: str = ""
    STARREZ_TIMEOUT_SECONDS: int = 60

    # Swagger 2.0 -> OpenAPI 3.0 conversion service
    SWAGGER_CONVERTER_URL: str = "https://converter.swagger.io/api/convert"

    # API
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    def starrez_connection(
        self, username: Optional[str] = None, api_key: Optional[str] = None
    ) -> StarRezConnection:
        """Build the upstream connection, optionally with per-request credentials."""
        root = self.STARREZ_API_URL.rstrip("/")
        return StarRezConnection(
            production_url=f"{root}/services",
            development_url=f"{root}Dev/services",
            username=username if username is not None else self.STARREZ_API_USER,
            api_key=api_key if api_key is not None else self.STARREZ_API_KEY,
            timeout_seconds=self.STARREZ_TIMEOUT_SECONDS,
        )


settings = Settings()
