# recordsync/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import structlog

from recordsync.core.domain.exceptions import RecordNotFoundError
from recordsync.core.domain.records import Record, RecordCollection
from recordsync.shared.config import settings
from recordsync.shared.container import container
from recordsync.shared.logging_config import configure_logging
from recordsync.shared.observability import setup_observability

logger = structlog.get_logger()


def _parse_where(pairs: Optional[List[str]]) -> Optional[Dict[str, Any]]:
    """Turns ['done=true', 'title=x'] into {'done': True, 'title': 'x'}."""
    if not pairs:
        return None

    conditions: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got {pair!r}")
        try:
            conditions[key] = json.loads(raw)
        except ValueError:
            conditions[key] = raw
    return conditions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recordsync",
        description="Inspect and edit stores through the sync layer.",
    )
    parser.add_argument(
        "--profile",
        default=settings.DEFAULT_PROFILE_ID,
        help=f"Profile (logical database) to use. Default: {settings.DEFAULT_PROFILE_ID}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    find = sub.add_parser("find", help="List records of a store")
    find.add_argument("store")
    find.add_argument("--where", action="append", metavar="KEY=VALUE", help="Filter condition (repeatable)")

    get = sub.add_parser("get", help="Show one record")
    get.add_argument("store")
    get.add_argument("id")

    put = sub.add_parser("put", help="Create or update a record from a JSON object")
    put.add_argument("store")
    put.add_argument("payload", help='e.g. \'{"title": "x"}\'')

    delete = sub.add_parser("delete", help="Remove one record")
    delete.add_argument("store")
    delete.add_argument("id")

    return parser


async def run(args: argparse.Namespace) -> int:
    sync = container.sync_adapter().dispatch
    record_class = type("CliRecord", (Record,), {"store_name": args.store, "sync": sync})

    if args.command == "find":
        collection_class = type("CliCollection", (RecordCollection,), {"record_class": record_class, "sync": sync})
        collection = collection_class(profile_id=args.profile)
        await collection.fetch(conditions=_parse_where(args.where))
        _print(collection.to_list())
        return 0

    if args.command == "put":
        payload = json.loads(args.payload)
        if not isinstance(payload, dict):
            print("error: payload must be a JSON object", file=sys.stderr)
            return 2
        record = record_class(payload, profile_id=args.profile)
        await record.save()
        _print(record.serialize())
        return 0

    record = record_class({"id": args.id}, profile_id=args.profile)
    try:
        if args.command == "get":
            await record.fetch()
            _print(record.serialize())
        else:
            removed = await record.destroy()
            if not removed:
                raise RecordNotFoundError(args.store, args.id)
            _print(removed)
    except RecordNotFoundError:
        print(f"error: {args.store}/{args.id} not found", file=sys.stderr)
        return 1
    return 0


def _print(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Simple CLI over the configured storage engine.

    Usage:
        python -m recordsync.cli [--profile P] find <store> [--where k=v ...]
        python -m recordsync.cli [--profile P] get <store> <id>
        python -m recordsync.cli [--profile P] put <store> '<json object>'
        python -m recordsync.cli [--profile P] delete <store> <id>
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging()
    setup_observability()
    logger.debug("cli_command", command=args.command, profile=args.profile, store=args.store)

    try:
        return asyncio.run(run(args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except json.JSONDecodeError as e:
        print(f"error: invalid JSON payload: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
