from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Literal

load_dotenv()

class Settings(BaseSettings):
    # Service Configuration
    SERVICE_NAME: str = "task-service"
    SERVICE_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./tasks.db"
    STORAGE_BACKEND: Literal["sql", "memory"] = "sql"
    DB_ECHO: bool = False

    # Client
    TASK_SERVICE_URL: str = "http://localhost:8000"
    CLIENT_TIMEOUT: float = 30.0

    # Monitoring
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
