"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Paths
    STORAGE_DIR: Path = Path.home() / ".filtercam"

    # Bounded collections
    MAX_HISTORY: int = 5
    MAX_CAPTURES: int = 5
    CAPTURE_STORAGE_KEY: str = "capturedPhotos"

    # Filters and encoding
    PIXELATE_BLOCK_SIZE: int = 8
    JPEG_QUALITY: int = 92  # Browser default for canvas JPEG export

    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": "FILTERCAM_"}


settings = Settings()
