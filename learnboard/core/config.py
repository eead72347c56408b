from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]
FallbackMode = Literal["degrade", "strict"]

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it's easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


def _getenv_bool(name: str, default: bool) -> bool:
    raw = _getenv(name, "true" if default else "false").lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    database_url: str | None
    default_student_id: int
    fallback_mode: FallbackMode
    trend_demo_data: bool
    cors_origins: tuple[str, ...]
    seed_demo_data: bool

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"

    @property
    def degrade_gracefully(self) -> bool:
        return self.fallback_mode == "degrade"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    fallback_mode_raw = _getenv("FALLBACK_MODE", "degrade").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if fallback_mode_raw not in ("degrade", "strict"):
        raise ValueError(
            f"FALLBACK_MODE must be degrade|strict (got {fallback_mode_raw!r})"
        )

    port = _getenv_int("PORT", 8000)
    default_student_id = _getenv_int("DEFAULT_STUDENT_ID", 1)
    if default_student_id < 1:
        raise ValueError(
            f"DEFAULT_STUDENT_ID must be a positive integer (got {default_student_id})"
        )

    database_url = _getenv("DATABASE_URL", "") or None
    cors_origins = tuple(
        origin.strip()
        for origin in _getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if origin.strip()
    )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=_getenv_bool("LOG_JSON", False),
        port=port,
        database_url=database_url,
        default_student_id=default_student_id,
        fallback_mode=fallback_mode_raw,
        trend_demo_data=_getenv_bool("TREND_DEMO_DATA", True),
        cors_origins=cors_origins,
        seed_demo_data=_getenv_bool("SEED_DEMO_DATA", False),
    )


# Module-level singleton so imports are cheap
SETTINGS = load_settings()
