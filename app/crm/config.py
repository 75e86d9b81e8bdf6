import logging
import os
from dataclasses import dataclass

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str
    log_level: str
    create_tables_on_start: bool
    db_pool_size: int
    db_pool_recycle: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("%s=%r is not an integer; using %s", name, raw, default)
        return default


def _log_level(raw: str) -> str:
    level = raw.upper()
    if level not in _LOG_LEVELS:
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r; using INFO", raw)
        return "INFO"
    return level


def _normalize_database_url(url: str) -> str:
    # Hosted Postgres hands out postgres:// URLs; SQLAlchemy wants an explicit dialect+driver.
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def is_production(env: str | None) -> bool:
    return (env or "").strip().lower() in ("prod", "production")


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_normalize_database_url(_getenv("DATABASE_URL", "sqlite:///customers.db")),
        log_level=_log_level(_getenv("LOG_LEVEL", "INFO")),
        create_tables_on_start=_getenv("CREATE_TABLES_ON_START", "0") == "1",
        db_pool_size=_getenv_int("DB_POOL_SIZE", 5),
        db_pool_recycle=_getenv_int("DB_POOL_RECYCLE", 1800),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "LOG_LEVEL": s.log_level,
        "CREATE_TABLES_ON_START": s.create_tables_on_start,
        "DB_POOL_SIZE": s.db_pool_size,
        "DB_POOL_RECYCLE": s.db_pool_recycle,
        # request and response bodies are JSON only; keep them small
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }
