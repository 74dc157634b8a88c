"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    api_prefix: str = "/api/v1"
    project_name: str = "Othello Plus API"
    allow_origins: list[str] = ["http://localhost:4173", "https://eothello.com"]
    catalogue_path: str = str(BASE_DIR / "data" / "openings.txt")
    catalogue_strict: bool = True
    catalogue_symmetric: bool = True
    poll_interval_seconds: float = 2.5
    watch_ttl_seconds: int = 3600
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
