# app/core/config.py
import os
from typing import ClassVar, List
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'daycare.db')}")

def _split_csv(raw: str) -> List[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]

def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET"))
    ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7")))
    # fuso usado para converter timestamps com offset em HH:MM:SS
    TIMEZONE: str = Field(default_factory=lambda: os.getenv("TIMEZONE", "UTC"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: _env_flag("RUN_MIGRATIONS_ON_STARTUP", "true"))

    # custo do argon2; hashes com custo diferente são regravados no login
    PASSWORD_HASH_TIME_COST: int = Field(default_factory=lambda: int(os.getenv("PASSWORD_HASH_TIME_COST", "2")))
    PASSWORD_HASH_MEMORY_KIB: int = Field(default_factory=lambda: int(os.getenv("PASSWORD_HASH_MEMORY_KIB", "19456")))

    # seed
    ADMIN_EMAIL: str = Field(default_factory=lambda: os.getenv("ADMIN_EMAIL", "admin@daycare.com"))
    ADMIN_PASSWORD: str = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "admin12345"))

settings = Settings()
