"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./marathon.db"
    ADMIN_SECRET: str = ""
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:5174,https://satyajit-ghosh.netlify.app"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Strava proxy
    STRAVA_CLIENT_ID: str = ""
    STRAVA_CLIENT_SECRET: str = ""
    STRAVA_ACCESS_TOKEN: str = ""
    STRAVA_REFRESH_TOKEN: str = ""
    STRAVA_API_URL: str = "https://www.strava.com/api/v3"
    STRAVA_OAUTH_URL: str = "https://www.strava.com/oauth/token"
    STRAVA_ACTIVITIES_PER_PAGE: int = 50
    STRAVA_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
