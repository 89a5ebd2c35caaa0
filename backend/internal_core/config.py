from __future__ import annotations

import os
from dataclasses import dataclass


FRED_OBSERVATIONS_URL = "https://api.stlouisfed.org/fred/series/observations"


class ConfigError(RuntimeError):
    """Raised when required settings are missing or malformed."""


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_required(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigError(f"{name} environment variable is not set")
    return value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _getenv_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class AtlasConfig:
    FRED_API_KEY: str
    FRED_API_BASE_URL: str
    FRED_TIMEOUT_SECONDS: float
    ATLAS_HOST: str
    ATLAS_PORT: int
    ATLAS_CORS_ORIGINS: tuple[str, ...]
    ATLAS_LOG_LEVEL: str

    def __repr__(self) -> str:
        # Keep the API key out of logs and tracebacks.
        return (
            f"AtlasConfig(FRED_API_BASE_URL={self.FRED_API_BASE_URL!r}, "
            f"FRED_TIMEOUT_SECONDS={self.FRED_TIMEOUT_SECONDS!r}, "
            f"ATLAS_HOST={self.ATLAS_HOST!r}, ATLAS_PORT={self.ATLAS_PORT!r}, "
            f"ATLAS_CORS_ORIGINS={self.ATLAS_CORS_ORIGINS!r}, "
            f"ATLAS_LOG_LEVEL={self.ATLAS_LOG_LEVEL!r})"
        )


def load_cors_origins() -> list[str]:
    return _getenv_list("ATLAS_CORS_ORIGINS", ["*"])


def load_log_level() -> str:
    return _getenv_str("ATLAS_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def load_config() -> AtlasConfig:
    timeout_sec = _getenv_float("FRED_TIMEOUT_SECONDS", 5.0)
    if timeout_sec <= 0:
        raise ConfigError(f"FRED_TIMEOUT_SECONDS must be positive, got {timeout_sec}")
    port = _getenv_int("ATLAS_PORT", 8080)
    if not 0 < port < 65536:
        raise ConfigError(f"ATLAS_PORT must be in 1..65535, got {port}")

    return AtlasConfig(
        FRED_API_KEY=_getenv_required("FRED_API_KEY"),
        FRED_API_BASE_URL=_getenv_str("FRED_API_BASE_URL", FRED_OBSERVATIONS_URL),
        FRED_TIMEOUT_SECONDS=timeout_sec,
        ATLAS_HOST=_getenv_str("ATLAS_HOST", "0.0.0.0"),
        ATLAS_PORT=port,
        ATLAS_CORS_ORIGINS=tuple(load_cors_origins()),
        ATLAS_LOG_LEVEL=load_log_level(),
    )
