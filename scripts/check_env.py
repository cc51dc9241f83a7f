"""Verify that an environment file carries everything the proxy needs to start.

The server refuses to boot without supplier credentials; running this tool
ahead of a deploy reports the missing or malformed variables instead::

    python -m scripts.check_env --env-file /opt/parts-proxy/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from parts_proxy.core.config import AppSettings, SupplierSettings

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5

_SUPPLIER_ENV_PREFIX = SupplierSettings.model_config.get("env_prefix", "")


def _load_settings(env_file: Path) -> AppSettings:
    """Build settings from ``env_file``; process variables still take priority."""
    supplier = SupplierSettings(_env_file=env_file)  # type: ignore[call-arg]
    return AppSettings(_env_file=env_file, supplier=supplier)  # type: ignore[call-arg]


def _describe_errors(exc: ValidationError) -> list[str]:
    lines = []
    supplier_error = exc.title == SupplierSettings.__name__
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        name = f"{_SUPPLIER_ENV_PREFIX}{field}".upper() if supplier_error else field
        lines.append(f"  - {name}: {error['msg']}")
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the settings required to start the parts proxy."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the working directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:",
            *_describe_errors(exc),
            sep="\n",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    print(
        f"Environment OK (supplier {settings.supplier.base_url}, port {settings.port})."
    )
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
