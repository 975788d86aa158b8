"""Command-line entry point for exercising the file operations facade."""
from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, ConfigError, load_config
from .errors import exit_code_for
from .events import ChangeEvent
from .facade import FileOperations
from .files import WriteMode
from .results import OperationResult, attempt

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _level_for(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fsfacade", description="Run a single filesystem operation")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an optional YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR); overrides the configuration file",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding for content arguments (default: %(default)s)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    read = commands.add_parser("read", help="Print a file's content")
    read.add_argument("path")

    write = commands.add_parser("write", help="Write content to a file, replacing it")
    write.add_argument("path")
    write.add_argument("content")
    write.add_argument("--create-only", action="store_true", help="Fail if the file already exists")

    append = commands.add_parser("append", help="Append content to an existing file")
    append.add_argument("path")
    append.add_argument("content")

    remove = commands.add_parser("remove", help="Delete a file")
    remove.add_argument("path")

    exists = commands.add_parser("exists", help="Exit 0 if the path exists, 1 otherwise")
    exists.add_argument("path")

    mkdir = commands.add_parser("mkdir", help="Create a directory")
    mkdir.add_argument("path")
    mkdir.add_argument("--parents", action="store_true", help="Create missing parent directories")

    rmdir = commands.add_parser("rmdir", help="Remove a directory and everything below it")
    rmdir.add_argument("path")

    ls = commands.add_parser("ls", help="List directory entries")
    ls.add_argument("path")

    watch = commands.add_parser("watch", help="Print change events until interrupted")
    watch.add_argument("path")
    watch.add_argument("--max-events", type=int, default=None, help="Stop after this many events")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_level_for(args.log_level or "INFO"),
        format=LOG_FORMAT,
    )

    try:
        app_config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        logging.error("%s", exc)
        return 2

    # The configuration file only decides the level when --log-level is absent.
    logging.getLogger().setLevel(_level_for(args.log_level or app_config.logging.level))

    ops = FileOperations(watch_config=app_config.watch)
    if args.command == "watch":
        result: OperationResult = attempt(_watch, ops, args.path, args.max_events)
    else:
        result = attempt(_run_command, ops, args)

    if not result.ok:
        print(f"error: {result.error}", file=sys.stderr)
        return exit_code_for(result.error)
    return result.value or 0


def _run_command(ops: FileOperations, args: argparse.Namespace) -> int:
    command = args.command
    if command == "read":
        sys.stdout.buffer.write(ops.read(args.path))
        sys.stdout.flush()
    elif command == "write":
        mode = WriteMode.CREATE_ONLY if args.create_only else WriteMode.OVERWRITE
        written = ops.write(args.path, args.content.encode(args.encoding), mode)
        logger.info("Wrote %s bytes to %s", written, args.path)
    elif command == "append":
        written = ops.append(args.path, args.content.encode(args.encoding))
        logger.info("Appended %s bytes to %s", written, args.path)
    elif command == "remove":
        ops.remove(args.path)
    elif command == "exists":
        present = ops.exists(args.path)
        print("yes" if present else "no")
        return 0 if present else 1
    elif command == "mkdir":
        ops.mkdir(args.path, parents=args.parents)
    elif command == "rmdir":
        ops.rmtree(args.path)
    elif command == "ls":
        for name in ops.listdir(args.path):
            print(name)
    return 0


def _watch(ops: FileOperations, raw_path: str, max_events: Optional[int]) -> int:
    received = 0
    limit_reached = threading.Event()

    def consumer(event: ChangeEvent) -> None:
        nonlocal received
        print(f"{event.timestamp.isoformat()} {event.kind.value} {event.path}", flush=True)
        received += 1
        if max_events is not None and received >= max_events:
            limit_reached.set()

    subscription = ops.watch(raw_path, consumer)
    try:
        while not subscription.wait(0.2):
            if limit_reached.is_set():
                break
    except KeyboardInterrupt:
        logger.info("Watch interrupted by user")
    finally:
        ops.cancel(subscription)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
