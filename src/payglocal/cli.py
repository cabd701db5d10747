"""
Command-line interface for exercising the PayGlocal APIs.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import OPERATIONS
from .core.config import load_config
from .core.errors import ConfigError, PayGlocalError


def _configure_logging(level: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [PAYGLOCAL-SDK] %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _sdk_log_level(level: str | None) -> str | None:
    if level is None:
        return None
    level = level.strip().lower()
    return "warn" if level == "warning" else level


def _read_payload(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as handle:
        return json.load(handle)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payglocal",
        description="Send a single request to the PayGlocal gateway",
    )
    parser.add_argument(
        "operation",
        choices=sorted(OPERATIONS),
        help="Gateway operation to perform",
    )
    parser.add_argument(
        "--payload",
        required=True,
        help="Path to a JSON file with the request payload ('-' reads stdin)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYGLOCAL_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for the SDK: error, warn, info or debug (default: PAYGLOCAL_LOG_LEVEL or info)",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_config(
            env_file=args.env_file,
            overrides=overrides,
            log_level=_sdk_log_level(args.log_level),
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        payload = _read_payload(args.payload)
    except (OSError, ValueError) as exc:
        logging.error("Could not read payload from %s: %s", args.payload, exc)
        return 1

    with create_client(config=config, session=requests.Session()) as client:
        try:
            response = client.run(OPERATIONS[args.operation], payload)
        except PayGlocalError as exc:
            logging.error("%s request failed: %s", args.operation, exc)
            return 1

    print(json.dumps(response, indent=2))
    return 0


def main() -> None:
    sys.exit(run_cli())
