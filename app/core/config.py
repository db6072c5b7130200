from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Quiz Scoring API"
    APP_VERSION: str = "1.0.0"

    DATABASE_URL_LOCAL: str = "sqlite:///./quiz.db"
    DATABASE_URL_DOCKER: Optional[str] = None
    USE_DOCKER_DB: bool = False

    API_PREFIX: str = "/api/v1"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # frontend
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def DATABASE_URL(self) -> str:
        """
        Use the docker DB only when explicitly asked for and configured.
        """
        if self.USE_DOCKER_DB and self.DATABASE_URL_DOCKER:
            return self.DATABASE_URL_DOCKER
        return self.DATABASE_URL_LOCAL


settings = Settings()
