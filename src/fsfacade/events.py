"""Event and state models shared by the change watcher."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ChangeKind(str, Enum):
    """Kinds of change reported to watch consumers.

    ``RENAMED`` covers an entry appearing or disappearing, ``MODIFIED`` a change
    of content or metadata on an entry that is still present.
    """

    RENAMED = "renamed"
    MODIFIED = "modified"


class WatchState(str, Enum):
    """Lifecycle of a watch subscription."""

    IDLE = "idle"
    WATCHING = "watching"
    CANCELLED = "cancelled"
    PATH_REMOVED = "path_removed"

    @property
    def terminal(self) -> bool:
        return self in (WatchState.CANCELLED, WatchState.PATH_REMOVED)


@dataclass(frozen=True)
class ChangeEvent:
    """A single change observed on the watched path."""

    kind: ChangeKind
    path: Path
    timestamp: datetime = field(default_factory=datetime.now)
