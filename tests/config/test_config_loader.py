from __future__ import annotations

from pathlib import Path

import pytest

from service_mock.config.loader import load_config, parse_config
from service_mock.domain.topology import HandlerType, ServiceType
from service_mock.errors import ConfigError

_CONFIG = """
Counter:
  type: VirtualObject
  handlers:
    add:
      steps:
        - type: increment
          params:
            input: count
        - type: return
          params:
            output: count
    peek:
      type: shared
      steps:
        - type: echo
"""


def test_load_config_happy_path(tmp_path: Path) -> None:
    path = tmp_path / "services.yml"
    path.write_text(_CONFIG, encoding="utf-8")
    config = load_config(path)
    counter = config.services["Counter"]
    assert counter.type is ServiceType.VIRTUAL_OBJECT
    assert counter.handlers["peek"].type is HandlerType.SHARED
    assert counter.handlers["add"].type is None
    assert [step.type for step in counter.handlers["add"].steps] == ["increment", "return"]
    assert counter.handlers["add"].steps[0].params == {"input": "count"}


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")


def test_empty_document_has_no_services() -> None:
    assert parse_config("").services == {}


def test_invalid_yaml_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        parse_config("Counter: [unclosed")


def test_non_mapping_root_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        parse_config("- Counter")


def test_unknown_fields_are_rejected() -> None:
    # Misspelled keys must fail fast instead of being ignored.
    with pytest.raises(ConfigError):
        parse_config("Counter:\n  type: SERVICE\n  handler: {}\n")


def test_unknown_service_type_is_rejected() -> None:
    with pytest.raises(ConfigError):
        parse_config("Counter:\n  type: Actor\n")
