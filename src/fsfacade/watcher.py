"""Change notification with a simple polling backend."""
from __future__ import annotations

import logging
import os
import stat
import threading
import time
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .config import WatchConfig
from .errors import NotFound, translate_os_error
from .events import ChangeEvent, ChangeKind, WatchState
from .existence import ExistenceChecker

logger = logging.getLogger(__name__)

Snapshot = Dict[Path, Tuple[int, int]]
ChangeConsumer = Callable[[ChangeEvent], None]


@dataclass
class WatchStats:
    """Counters kept per subscription for observability."""

    cycles: int = 0
    events_emitted: int = 0


class WatchSubscription:
    """Caller-owned handle on an active watch.

    Events are delivered on a background thread, in the order the poller
    detects them. Rapid successive writes can produce several ``MODIFIED``
    events for what the caller considers a single change; nothing is merged.
    """

    def __init__(self, path: Path, consumer: ChangeConsumer, config: WatchConfig):
        self.path = path
        self._consumer = consumer
        self._config = config
        self._state = WatchState.IDLE
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._done_event = threading.Event()
        self._snapshot: Snapshot = {}
        self._thread: Optional[threading.Thread] = None
        self.stats = WatchStats()

    @property
    def state(self) -> WatchState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is WatchState.WATCHING

    def cancel(self) -> None:
        """Stop delivery. Calling again, or after the path vanished, is a no-op."""

        with self._state_lock:
            if self._state.terminal:
                return
            self._state = WatchState.CANCELLED
        self._stop_event.set()
        logger.info("Watch on %s cancelled", self.path)
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._done_event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the subscription reaches a terminal state."""

        return self._done_event.wait(timeout)

    def _start(self) -> None:
        self._snapshot = self._scan(os.stat(self.path))
        self._state = WatchState.WATCHING
        self._thread = threading.Thread(
            target=self._run,
            name=f"fsfacade-watch-{self.path.name or self.path}",
            daemon=True,
        )
        logger.info("Starting watch on %s", self.path)
        self._thread.start()

    def _run(self) -> None:
        try:
            while not self._stop_event.is_set():
                started_at = time.monotonic()
                self._poll()
                self.stats.cycles += 1
                self._sleep_until_next_cycle(started_at)
        finally:
            logger.info(
                "Watch on %s stopped after %s cycles, %s events",
                self.path,
                self.stats.cycles,
                self.stats.events_emitted,
            )
            self._done_event.set()

    def _sleep_until_next_cycle(self, started_at: float) -> None:
        elapsed = time.monotonic() - started_at
        remaining = max(self._config.poll_interval - elapsed, 0.0)
        if remaining > 0:
            self._stop_event.wait(remaining)

    def _poll(self) -> None:
        try:
            root_stat = os.stat(self.path)
        except (FileNotFoundError, NotADirectoryError):
            self._path_removed()
            return
        except OSError as exc:
            logger.warning("Could not stat watched path %s: %s", self.path, exc)
            return

        try:
            new_snapshot = self._scan(root_stat)
        except OSError as exc:
            logger.warning("Scan of %s failed, retrying next cycle: %s", self.path, exc)
            return

        events = list(_diff_snapshots(self._snapshot, new_snapshot))
        self._snapshot = new_snapshot
        for event in events:
            if self._stop_event.is_set():
                break
            self._deliver(event)

    def _path_removed(self) -> None:
        with self._state_lock:
            if self._state.terminal:
                return
            self._state = WatchState.PATH_REMOVED
        logger.info("Watched path %s was removed; ending watch", self.path)
        self._deliver(ChangeEvent(kind=ChangeKind.RENAMED, path=self.path))
        self._stop_event.set()

    def _deliver(self, event: ChangeEvent) -> None:
        self.stats.events_emitted += 1
        try:
            self._consumer(event)
        except Exception:
            logger.exception("Watch consumer failed for event %s", event)

    def _scan(self, root_stat: os.stat_result) -> Snapshot:
        if not stat.S_ISDIR(root_stat.st_mode):
            return {self.path: (root_stat.st_mtime_ns, root_stat.st_size)}

        results: Snapshot = {}
        for path in _iter_paths(self.path, recursive=self._config.recursive):
            if not _matches_patterns(path, self._config.include_patterns, self._config.exclude_patterns):
                continue
            try:
                entry_stat = path.stat()
            except FileNotFoundError:
                continue
            if stat.S_ISDIR(entry_stat.st_mode):
                # Directories only report appearing and disappearing.
                results[path] = (0, 0)
            else:
                results[path] = (entry_stat.st_mtime_ns, entry_stat.st_size)
        return results


class ChangeWatcher:
    """Starts and cancels watch subscriptions."""

    def __init__(self, config: Optional[WatchConfig] = None, checker: Optional[ExistenceChecker] = None):
        self._config = config or WatchConfig()
        self._checker = checker or ExistenceChecker()

    def start(self, path: Path, consumer: ChangeConsumer) -> WatchSubscription:
        if not self._checker.exists(path):
            raise NotFound(path)
        subscription = WatchSubscription(path, consumer, self._config)
        try:
            subscription._start()
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return subscription

    def cancel(self, subscription: WatchSubscription) -> None:
        subscription.cancel()


def _iter_paths(root: Path, *, recursive: bool) -> Iterable[Path]:
    if recursive:
        yield from root.rglob("*")
    else:
        yield from root.glob("*")


def _matches_patterns(path: Path, include_patterns: List[str], exclude_patterns: List[str]) -> bool:
    relative = path.name
    full = str(path)

    if exclude_patterns and any(fnmatch(relative, pat) or fnmatch(full, pat) for pat in exclude_patterns):
        return False

    if not include_patterns:
        return True

    return any(fnmatch(relative, pat) or fnmatch(full, pat) for pat in include_patterns)


def _diff_snapshots(old: Snapshot, new: Snapshot) -> Iterable[ChangeEvent]:
    seen: Set[Path] = set()

    for path, signature in new.items():
        if path not in old:
            yield ChangeEvent(kind=ChangeKind.RENAMED, path=path)
        elif old[path] != signature:
            yield ChangeEvent(kind=ChangeKind.MODIFIED, path=path)
        seen.add(path)

    for path in old:
        if path not in seen:
            yield ChangeEvent(kind=ChangeKind.RENAMED, path=path)
