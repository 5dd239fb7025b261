"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Loader settings with environment variable support"""

    # NocoDB source
    API_URL: Optional[str] = None
    API_TOKEN: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    # Fetch defaults (per table values override these)
    DEFAULT_PAGE_SIZE: int = 100
    MAX_RETRIES: int = 10
    RETRY_DELAY: float = 2.0
    MAX_RETRY_DELAY: Optional[float] = None
    REQUEST_TIMEOUT: float = 30.0

    # Sync script
    OUTPUT_DIR: str = ".content"
    SYNC_TIMEOUT: Optional[float] = None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
