import os
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "minewatch-backend"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./minewatch.db"
    CREATE_TABLES_ON_START: bool = True
    SEED_DEMO_DATA: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Equipment rules enforced at the API boundary
    EQUIPMENT_CODE_MAX_LENGTH: int = 20
    DEFAULT_FUEL_LEVEL: float = 100.0

    class Config:
        case_sensitive = True
        # Load .env ONLY when not production
        env_file = ".env" if os.getenv("ENVIRONMENT") != "production" else None


settings = Settings()
