from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- DB ---
    DATABASE_URL: str = "sqlite:///./roomsched.db"

    # --- logging ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # --- scheduling rules ---
    MAX_STARRED_SEMESTERS: int = 4
    RESTRICTED_DAYS: List[str] = ["Tuesday", "Thursday"]
    RESTRICTED_START: str = "2:00PM"
    RESTRICTED_END: str = "4:00PM"

    # --- HTTP ---
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

settings = Settings()
