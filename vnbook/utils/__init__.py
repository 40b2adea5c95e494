"""vnbook utilities."""

from .config import (
    EngineConfig,
    ConfigError,
    load_config,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_CONTENT_PATH,
    ENV_OVERRIDES,
)

__all__ = [
    "EngineConfig",
    "ConfigError",
    "load_config",
    "DEFAULT_KEY_BINDINGS",
    "DEFAULT_CONTENT_PATH",
    "ENV_OVERRIDES",
]
