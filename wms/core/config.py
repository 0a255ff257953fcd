from pydantic_settings import BaseSettings
from functools import lru_cache
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Warehouse"
    APP_PORT: int = 5000
    DEBUG: bool = False
    SECRET_KEY: str = "warehouse-secret-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Database
    # "sqlite://" selects the in-memory store
    DATABASE_URL: str = ""

    # Paths
    DATA_PATH: str = "./data"
    LOGS_PATH: str = "./logs"
    FILES_PATH: str = "./attached_assets"

    # Default accounts
    SEED_DEFAULT_USERS: bool = True
    DEFAULT_ADMIN_PASSWORD: str = "admin1234"
    DEFAULT_VIEWER_PASSWORD: str = "viewer1234"

    # Defective-item exchange: outbound <-> queue entry matching window
    EXCHANGE_MATCH_WINDOW_SECONDS: int = 60

    # Attached asset cleanup job
    FILE_CLEANUP_ENABLED: bool = False
    FILE_CLEANUP_INTERVAL_HOURS: int = 24
    FILE_CLEANUP_MAX_AGE_DAYS: int = 30
    FILE_CLEANUP_MAX_SIZE_MB: int = 100

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{os.path.join(self.DATA_PATH, 'warehouse.db')}"

    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
