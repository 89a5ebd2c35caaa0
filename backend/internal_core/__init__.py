from .config import AtlasConfig, ConfigError, load_config

__all__ = ["AtlasConfig", "ConfigError", "load_config"]
