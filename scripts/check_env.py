"""Verify that the service's environment configuration is complete and unchanged.

Sub-commands:

* ``check`` loads ``AppSettings`` from the given ``.env`` file and reports
  missing or malformed values (provider credentials, timeouts, paths).
* ``record`` does the same and stores a SHA-256 baseline of the file.
* ``verify`` does the same and compares the file against that baseline, so an
  unexpected edit to provider credentials is caught before a restart.

Example usages::

    python -m scripts.check_env record --env-file /srv/dislike/.env \
        --hash-file /srv/dislike/.env.sha256

    python -m scripts.check_env verify --env-file /srv/dislike/.env \
        --hash-file /srv/dislike/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from dislike_service.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _validate_settings(env_file: Path) -> AppSettings:
    """Load settings with ``env_file`` as the only dotenv source."""
    _load_env_file(str(env_file))
    return AppSettings(_env_file=str(env_file))  # type: ignore[call-arg]


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    """Compare the current checksum to the recorded baseline."""
    if not hash_file.exists():
        print(
            f"Checksum baseline {hash_file} not found; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate dislike service settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_env_file(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env).",
        )

    def add_hash_file(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--hash-file",
            required=True,
            type=Path,
            help="Location of the checksum baseline.",
        )

    for name, help_text, needs_hash in (
        ("check", "Validate settings only.", False),
        ("record", "Validate settings and store the checksum baseline.", True),
        ("verify", "Validate settings and compare against the baseline.", True),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        add_env_file(subparser)
        if needs_hash:
            add_hash_file(subparser)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed:\n" f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    print(
        f"Settings OK (environment={settings.environment}, "
        f"provider={settings.provider.base_url}, db={settings.database_path})"
    )

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: EXIT_OK,
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
