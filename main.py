#!/usr/bin/env python3
"""
hn-pull: watch Hacker News for newly posted stories.

Usage:
    python main.py                      # same as `watch`
    python main.py watch                # Stream new stories, resuming from the stored cursor
    python main.py watch --ephemeral    # Don't read or write the stored cursor
    python main.py cursor               # Show the stored cursor
    python main.py cursor --reset       # Forget the stored cursor (next run starts at newest)
    python main.py cursor --set 1234    # Resume from a specific item ID
"""

import argparse
import logging
import sys

from collectors import FetchError, HackerNewsClient
from config import load_config
from delivery import ConsoleOutput
from poller import Poller, PollSettings, gap_prompt_for
from storage import NO_CURSOR, MemoryCursorStore, SQLiteCursorStore, StorageUnavailable

log = logging.getLogger("hn-pull")


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_watch(config, store) -> int:
    """Run the poller until interrupted."""
    poller = Poller(
        source=HackerNewsClient(config),
        store=store,
        output=ConsoleOutput(),
        confirm=gap_prompt_for(config.gap_policy),
        settings=PollSettings.from_config(config),
    )
    try:
        poller.run()
    except KeyboardInterrupt:
        print("\nStopped.")
        return 0
    except FetchError as e:
        log.error(f"Hacker News API unavailable: {e}")
        return 1
    return 0


def cmd_cursor(store, reset: bool = False, set_to: int | None = None) -> int:
    """Show, clear or set the stored cursor."""
    if reset:
        store.clear()
        print("Stored cursor cleared.")
        return 0
    if set_to is not None:
        if not store.save(set_to):
            print(f"Error: cursor must be a non-negative integer, got {set_to}", file=sys.stderr)
            return 1
        print(f"Stored cursor set to {set_to}.")
        return 0

    cursor = store.load()
    if cursor == NO_CURSOR:
        print("No stored cursor. The next run starts at the newest item.")
    else:
        print(f"Stored cursor: {cursor}")
    return 0


def cli():
    parser = argparse.ArgumentParser(
        prog="hn-pull",
        description="Monitor and pull the latest Hacker News stories",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    watch_parser = sub.add_parser("watch", parents=[common], help="Stream new stories (default)")
    watch_parser.add_argument(
        "--ephemeral", action="store_true",
        help="Keep the cursor in memory only; start at the newest item",
    )

    cursor_parser = sub.add_parser("cursor", parents=[common], help="Show or change the stored cursor")
    group = cursor_parser.add_mutually_exclusive_group()
    group.add_argument("--reset", action="store_true", help="Forget the stored cursor")
    group.add_argument("--set", dest="set_to", type=int, default=None, metavar="ID",
                       help="Resume from this item ID on the next run")

    args = parser.parse_args()
    command = args.command or "watch"

    setup_logging(getattr(args, "verbose", False))
    try:
        config = load_config()
    except ValueError as e:
        print(f"\nERROR: invalid configuration: {e}\nExit.", file=sys.stderr)
        sys.exit(1)

    try:
        if command == "watch" and getattr(args, "ephemeral", False):
            store = MemoryCursorStore()
        else:
            store = SQLiteCursorStore(config.db_path)
    except StorageUnavailable as e:
        print(f"\nERROR: {e}\nExit.", file=sys.stderr)
        sys.exit(1)

    try:
        match command:
            case "watch":
                code = cmd_watch(config, store)
            case "cursor":
                code = cmd_cursor(store, reset=args.reset, set_to=args.set_to)
            case _:
                parser.print_help()
                code = 1
    except StorageUnavailable as e:
        print(f"\nERROR: {e}\nExit.", file=sys.stderr)
        code = 1
    finally:
        store.close()

    sys.exit(code)


if __name__ == "__main__":
    cli()
