from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
import os

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration values exposed to FastAPI components."""

    app_name: str = "auth-service"
    version: str = "0.1.0"
    db_host: str = field(default_factory=lambda: _env("DB_HOST", "localhost"))
    db_port: int = field(default_factory=lambda: int(_env("DB_PORT", "5432")))
    db_user: str = field(default_factory=lambda: _env("DB_USER"))
    db_password: str = field(default_factory=lambda: os.getenv("DB_PASS", ""))
    db_name: str = field(default_factory=lambda: _env("DB_NAME"))
    db_pool_min: int = field(default_factory=lambda: int(_env("DB_POOL_MIN", "1")))
    db_pool_max: int = field(default_factory=lambda: int(_env("DB_POOL_MAX", "10")))
    db_auto_migrate: bool = field(default_factory=lambda: _env_bool("DB_AUTO_MIGRATE", True))
    http_host: str = field(default_factory=lambda: _env("HTTP_HOST", "0.0.0.0"))
    http_port: int = field(default_factory=lambda: int(_env("PORT", "4000")))
    bcrypt_rounds: int = field(default_factory=lambda: int(_env("BCRYPT_ROUNDS", "10")))
    static_dir: Path = field(default_factory=lambda: Path(_env("STATIC_DIR", "public")))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())

    @property
    def conninfo(self) -> str:
        """libpq connection string assembled from the individual DB_* settings."""
        return make_conninfo(
            host=self.db_host or None,
            port=self.db_port,
            user=self.db_user or None,
            password=self.db_password or None,
            dbname=self.db_name or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance for the running process."""
    load_dotenv()
    return Settings()
