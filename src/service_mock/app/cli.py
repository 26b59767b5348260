from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from pathlib import Path

import uvicorn

from service_mock.adapters.http import create_app
from service_mock.adapters.local_host import LocalRuntime
from service_mock.app.logging import configure_logging
from service_mock.config.loader import load_config
from service_mock.errors import ConfigError
from service_mock.kernel.composition_root import build_endpoint
from service_mock.usecases.wiring import build_step_registry

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_ADDRESS = "0.0.0.0:9200"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="service-mock", description="Configuration driven mock services")
    parser.add_argument("-c", "--config-file", required=True, help="Path to YAML service configuration")
    parser.add_argument(
        "-l",
        "--listen-address",
        default=DEFAULT_LISTEN_ADDRESS,
        help=f"HOST:PORT to serve on (default {DEFAULT_LISTEN_ADDRESS})",
    )
    parser.add_argument("--log-level", default="info", help="Log level (default info)")
    parser.add_argument("--log-format", choices=["text", "json"], default="text", help="Log output format")
    parser.add_argument("--discover", action="store_true", help="Print the discovery manifest and exit")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def parse_listen_address(value: str) -> tuple[str, int]:
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address '{value}', expected HOST:PORT")
    return host.strip("[]") or "0.0.0.0", int(port)


def run(argv: Sequence[str] | None = None) -> int:
    # Thin orchestration: logging, config, endpoint, then either discovery output or serving.
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    try:
        host, port = parse_listen_address(args.listen_address)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    try:
        config = load_config(Path(args.config_file))
        endpoint = build_endpoint(config, build_step_registry())
    except ConfigError as exc:
        logger.error("Failed to load configuration from %s: %s", args.config_file, exc)
        return 1

    if args.discover:
        print(json.dumps(endpoint.discover(), indent=2))
        return 0

    logger.info("Serving %d service(s) on %s:%d", len(endpoint.services), host, port)
    uvicorn.run(create_app(LocalRuntime(endpoint)), host=host, port=port, log_config=None)
    return 0
