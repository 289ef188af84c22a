"""
Application configuration.
All sensitive values loaded from environment variables.
"""
from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Hosted table API (Supabase / PostgREST)
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""
    # Session token of the signed-in user; unset means no identity
    SUPABASE_ACCESS_TOKEN: Optional[str] = None
    REMOTE_TIMEOUT_SECONDS: float = 10.0

    # Durable snapshot of records, types and view window
    CACHE_PATH: Path = Path("data") / "fitlog-storage.json"

    # Completed days per week the weekly board aims for
    WEEKLY_GOAL: int = 5

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    def has_identity(self) -> bool:
        """Check if a user session token is configured."""
        return bool(self.SUPABASE_ACCESS_TOKEN)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
