from __future__ import annotations

import json
from pathlib import Path

import pytest

from service_mock.app import cli
from service_mock.app.cli import parse_args, parse_listen_address, run
from service_mock.main import main

_CONFIG = """
Greeter:
  type: SERVICE
  handlers:
    greet:
      steps:
        - type: echo
"""


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep the root logger owned by pytest.
    monkeypatch.setattr(cli, "configure_logging", lambda level, fmt: None)


def _config_file(tmp_path: Path, text: str = _CONFIG) -> Path:
    path = tmp_path / "services.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_args_defaults() -> None:
    args = parse_args(["--config-file", "services.yml"])
    assert args.config_file == "services.yml"
    assert args.listen_address == "0.0.0.0:9200"
    assert args.log_level == "info"
    assert args.log_format == "text"
    assert args.discover is False


def test_parse_args_short_flags() -> None:
    args = parse_args(["-c", "s.yml", "-l", "127.0.0.1:8080", "--log-level", "debug", "--discover"])
    assert args.listen_address == "127.0.0.1:8080"
    assert args.log_level == "debug"
    assert args.discover is True


def test_config_file_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_listen_address() -> None:
    assert parse_listen_address("127.0.0.1:8080") == ("127.0.0.1", 8080)
    assert parse_listen_address(":9200") == ("0.0.0.0", 9200)
    assert parse_listen_address("[::1]:9200") == ("::1", 9200)
    with pytest.raises(ValueError):
        parse_listen_address("localhost")


def test_discover_prints_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["-c", str(_config_file(tmp_path)), "--discover"]) == 0
    manifest = json.loads(capsys.readouterr().out)
    assert manifest == {"services": [{"name": "Greeter", "ty": "SERVICE", "handlers": [{"name": "greet"}]}]}


def test_invalid_config_exits_with_1(tmp_path: Path) -> None:
    # Unknown step kinds stop the process before anything is served.
    path = _config_file(tmp_path, "Greeter:\n  type: SERVICE\n  handlers:\n    greet:\n      steps:\n        - type: teleport\n")
    assert run(["-c", str(path), "--discover"]) == 1


def test_missing_config_exits_with_1(tmp_path: Path) -> None:
    assert main(["-c", str(tmp_path / "missing.yml")]) == 1


def test_run_serves_on_listen_address(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    served: dict[str, object] = {}

    def fake_run(app: object, **kwargs: object) -> None:
        served.update(kwargs)
        served["app"] = app

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    assert main(["-c", str(_config_file(tmp_path)), "-l", "127.0.0.1:9300"]) == 0
    assert served["host"] == "127.0.0.1"
    assert served["port"] == 9300
    assert served["app"] is not None


def test_invalid_listen_address_exits_with_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # A malformed address is reported like a config failure, before anything is served.
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: pytest.fail("must not serve"))
    assert main(["-c", str(_config_file(tmp_path)), "-l", "nowhere"]) == 1
