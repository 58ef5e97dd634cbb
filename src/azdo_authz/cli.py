"""Command line entrypoint for reconciling manifest authorizations."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from azdo_authz import __version__
from azdo_authz.declarative import load_manifest
from azdo_authz.domain.models import AuthorizationRecord
from azdo_authz.errors import AuthorizationError
from azdo_authz.execution.build_client import BuildClient, build_client_from_settings
from azdo_authz.logging_utils import configure_logging
from azdo_authz.reconciler import ResourceAuthorizationReconciler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azdo-authz",
        description="Reconcile Azure DevOps pipeline resource authorizations.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument(
        "command",
        choices=("apply", "read", "revoke"),
        help="apply declared flags, show remote state, or revoke every entry",
    )
    parser.add_argument("manifest", help="Path to a YAML manifest of authorizations")
    return parser


def _describe(record: AuthorizationRecord) -> str:
    return f"{record.project_id}/{record.resource_type}/{record.resource_id}"


async def run_command(
    command: str,
    records: Sequence[AuthorizationRecord],
    client: BuildClient,
) -> list[str]:
    """Run ``command`` for each record in order and return one line per record."""
    reconciler = ResourceAuthorizationReconciler(client)
    lines: list[str] = []
    for record in records:
        if command == "apply":
            result = await reconciler.update(record)
            lines.append(f"{_describe(record)} authorized={result.record.authorized}")
        elif command == "read":
            result = await reconciler.read(record)
            state = f"authorized={result.record.authorized}" if result.exists else "absent"
            lines.append(f"{_describe(record)} {state}")
        elif command == "revoke":
            await reconciler.delete(record)
            lines.append(f"{_describe(record)} revoked")
        else:
            raise ValueError(f"Unknown command: {command}")
    return lines


async def _run(command: str, records: Sequence[AuthorizationRecord]) -> list[str]:
    async with build_client_from_settings() as client:
        return await run_command(command, records, client)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        configure_logging(args.log_level)
        records = load_manifest(args.manifest)
        lines = asyncio.run(_run(args.command, records))
    except (AuthorizationError, FileNotFoundError, RuntimeError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


def run_entrypoint() -> None:
    sys.exit(main())
