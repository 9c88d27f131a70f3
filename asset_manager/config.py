"""
Configuration management for Asset Manager
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Asset Manager"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # HTTP
    PORT: int = 3001
    CORS_ORIGINS: list[str] = ["*"]

    # Database (DATABASE_URL wins when set)
    DATABASE_URL: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "asset_manager"

    # Client
    API_BASE_URL: str = "http://localhost:3001"
    API_TIMEOUT: float = 20.0

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        auth = self.DB_USER
        if self.DB_PASSWORD:
            auth = f"{self.DB_USER}:{self.DB_PASSWORD}"
        return f"postgresql://{auth}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
