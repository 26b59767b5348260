from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from service_mock.errors import ConfigError
from service_mock.usecases.config_models import AppConfig


def load_config(path: Path) -> AppConfig:
    # YAML loader for the service description; fails fast on any shape problem.
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to open config file {path}: {exc}") from exc
    return parse_config(text)


def parse_config(text: str) -> AppConfig:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping of service names to services")

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
