# transparency/config.py
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./transparency.db"  # Default if not in .env

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    LOGS_PATH: Path | None = None  # Will be set based on STORAGE_PATH

    # Display
    CURRENCY: str = "USD"

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    STREAM_KEEPALIVE_SECONDS: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.STORAGE_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

settings = Settings()
