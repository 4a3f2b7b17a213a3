# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Literal, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # "memory" keeps everything in process-local dicts, "sql" goes through SQLAlchemy
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    SEED_DEFAULT_CATEGORIES: bool = True

    # Fraction of the subtotal charged as tax on carts and orders
    TAX_RATE: float = 0.08

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
