"""CLI entry point for solrid."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from solrid import __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solrid",
        description="solrid — Look up Solr records by any configured identifier field",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--id-fields",
        type=str,
        default=None,
        help="Comma-separated identifier fields (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"solrid {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("unique-key", help="Print the resolved unique key field")
    for name, help_text in (
        ("query", "Print the identifier query for an ID without contacting Solr"),
        ("retrieve", "Retrieve the record(s) matching an ID"),
        ("similar", "Find records similar to the record with an ID"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("id", help="Identifier value")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = _build_parser().parse_args(argv)

    from solrid.config.settings import Settings
    from solrid.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.id_fields is not None:
        settings.solr.id_fields = args.id_fields
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    from solrid.core.identifiers import IdentifierConfig

    identifiers = IdentifierConfig.from_raw(settings.solr.id_fields)

    if args.command == "unique-key":
        print(identifiers.unique_key)
    elif args.command == "query":
        print(identifiers.query_for(args.id))
    else:
        from solrid.backend.exceptions import BackendError

        try:
            result = asyncio.run(_run_remote(settings, args.command, args.id))
        except BackendError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)
        print(json.dumps(result, indent=2, ensure_ascii=False))


async def _run_remote(settings: Any, command: str, doc_id: str) -> Any:
    from solrid.backend import create_connector

    connector = create_connector(settings)
    await connector.initialize()
    try:
        if command == "retrieve":
            return await connector.retrieve(doc_id)
        return await connector.similar(doc_id)
    finally:
        await connector.shutdown()


if __name__ == "__main__":
    main()
