"""
Engine configuration for vnbook.

Engine-wide defaults (text color and size, background, confirm input,
key bindings) come from an optional YAML file, then environment variables.
A `.env` file in the working directory is loaded first so that local
overrides do not need to be exported.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from vnbook.schemas import Color


DEFAULT_CONTENT_PATH = Path("data/book.json")

# Physical input name -> logical button key used by content files.
# Space and Y both press the green button.
DEFAULT_KEY_BINDINGS = {
    "space": "green",
    "y": "green",
    "n": "red",
    "m": "yellow",
}

# Environment variable -> EngineConfig field
ENV_OVERRIDES = {
    "VNBOOK_CONTENT": "content_path",
    "VNBOOK_CONFIRM_INPUT": "confirm_input",
    "VNBOOK_DEFAULT_SIZE": "default_size",
    "VNBOOK_SCOREBOARD_CAPACITY": "scoreboard_capacity",
}


class ConfigError(ValueError):
    """Invalid configuration file or environment value."""


class EngineConfig(BaseModel):
    default_color: Color = Color.rgb(0.8, 0.8, 0.8)
    default_size: float = Field(default=30.0, gt=0)
    default_background_color: Color = Color.rgb(0.1, 0.1, 0.2)
    confirm_input: str = "space"                 # restarts from the scoreboard
    key_bindings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))
    scoreboard_capacity: int = Field(default=10, ge=1)
    title_size: float = Field(default=60.0, gt=0)
    score_row_spacing: float = Field(default=10.0, ge=0)
    content_path: Path = DEFAULT_CONTENT_PATH

    @field_validator("confirm_input")
    @classmethod
    def lower_input(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("confirm_input must not be empty")
        return v

    @field_validator("key_bindings")
    @classmethod
    def lower_bindings(cls, v: dict[str, str]) -> dict[str, str]:
        return {key.strip().lower(): button.strip().lower() for key, button in v.items()}


def load_config(path: str | Path | None = None, env_file: str | Path | None = None) -> EngineConfig:
    """
    Load engine configuration.

    Args:
        path: Optional YAML config file (default: $VNBOOK_CONFIG if set)
        env_file: Optional .env file (default: search from the working directory)

    Returns:
        EngineConfig with file values and environment overrides applied

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ConfigError: If the file or an override fails validation
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(Path.cwd() / ".env")

    if path is None and os.getenv("VNBOOK_CONFIG"):
        path = os.getenv("VNBOOK_CONFIG")

    data: dict[str, Any] = {}
    if path is not None:
        data.update(_read_config_file(Path(path)))

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data[field_name] = value

    try:
        return EngineConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid engine configuration: {e}") from e


def _read_config_file(file_path: Path) -> dict[str, Any]:
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file must contain a mapping: {file_path}")
    return loaded
