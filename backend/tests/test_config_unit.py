import pytest

from backend import __main__ as entrypoint
from backend.atlas.analyzer import MetricAnalyzer
from backend.internal_core.config import FRED_OBSERVATIONS_URL, ConfigError, load_config

_ATLAS_ENV = (
    "FRED_API_KEY",
    "FRED_API_BASE_URL",
    "FRED_TIMEOUT_SECONDS",
    "ATLAS_HOST",
    "ATLAS_PORT",
    "ATLAS_CORS_ORIGINS",
    "ATLAS_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ATLAS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_config_defaults(clean_env) -> None:
    clean_env.setenv("FRED_API_KEY", "abc123")
    cfg = load_config()
    assert cfg.FRED_API_KEY == "abc123"
    assert cfg.FRED_API_BASE_URL == FRED_OBSERVATIONS_URL
    assert cfg.FRED_TIMEOUT_SECONDS == 5.0
    assert cfg.ATLAS_HOST == "0.0.0.0"
    assert cfg.ATLAS_PORT == 8080
    assert cfg.ATLAS_CORS_ORIGINS == ("*",)
    assert cfg.ATLAS_LOG_LEVEL == "INFO"


def test_load_config_reads_overrides(clean_env) -> None:
    clean_env.setenv("FRED_API_KEY", "abc123")
    clean_env.setenv("FRED_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("ATLAS_PORT", "9090")
    clean_env.setenv("ATLAS_CORS_ORIGINS", "http://localhost:3000, https://atlas.example.com")
    clean_env.setenv("ATLAS_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.FRED_TIMEOUT_SECONDS == 2.5
    assert cfg.ATLAS_PORT == 9090
    assert cfg.ATLAS_CORS_ORIGINS == ("http://localhost:3000", "https://atlas.example.com")
    assert cfg.ATLAS_LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_api_key_is_config_error(clean_env, raw) -> None:
    if raw is not None:
        clean_env.setenv("FRED_API_KEY", raw)
    with pytest.raises(ConfigError, match="FRED_API_KEY"):
        load_config()


@pytest.mark.parametrize(
    ("name", "value"),
    [("ATLAS_PORT", "eighty"), ("ATLAS_PORT", "70000"), ("FRED_TIMEOUT_SECONDS", "0")],
)
def test_malformed_numeric_setting_is_config_error(clean_env, name, value) -> None:
    clean_env.setenv("FRED_API_KEY", "abc123")
    clean_env.setenv(name, value)
    with pytest.raises(ConfigError, match=name):
        load_config()


def test_config_repr_hides_api_key(clean_env) -> None:
    clean_env.setenv("FRED_API_KEY", "super-secret")
    assert "super-secret" not in repr(load_config())


def test_entrypoint_exits_before_serving_without_api_key(clean_env) -> None:
    served: list[dict] = []
    clean_env.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: served.append(kwargs))
    assert entrypoint.main() == 1
    assert served == []


def test_entrypoint_serves_with_configured_analyzer(clean_env) -> None:
    served: list[dict] = []
    clean_env.setenv("FRED_API_KEY", "abc123")
    clean_env.setenv("ATLAS_PORT", "8181")
    clean_env.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: served.append(kwargs))
    try:
        assert entrypoint.main() == 0
        assert isinstance(entrypoint.app.state.atlas_analyzer, MetricAnalyzer)
    finally:
        if hasattr(entrypoint.app.state, "atlas_analyzer"):
            delattr(entrypoint.app.state, "atlas_analyzer")
    assert served == [{"host": "0.0.0.0", "port": 8181, "log_level": "info"}]
