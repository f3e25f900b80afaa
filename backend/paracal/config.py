# backend/paracal/config.py
import os
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Paracal")
    APP_URL: str = os.getenv("APP_URL", "http://localhost:8080")

    # SQLite by default; any SQLAlchemy URL works
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./data/calendar.db")

    # "today", schedule_time and week boundaries are evaluated in this zone
    APP_TZ: str = os.getenv("APP_TZ", "Asia/Bangkok")

    FRONTEND_ORIGIN: str = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Notifications
    SCHEDULER_ENABLED: bool = _env_bool("SCHEDULER_ENABLED", True)
    SCHEDULER_INTERVAL_SECONDS: int = int(os.getenv("SCHEDULER_INTERVAL_SECONDS", "60"))
    WEBHOOK_TIMEOUT_SECONDS: float = float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10"))

    SEED_DEFAULT_EMPLOYEES: bool = _env_bool("SEED_DEFAULT_EMPLOYEES", False)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
