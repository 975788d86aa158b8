"""Syntactic validation and normalization of path arguments."""
from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath
from typing import Union

from .errors import InvalidPath

logger = logging.getLogger(__name__)

RawPath = Union[str, "os.PathLike[str]"]

MAX_COMPONENT_LENGTH = 255
_WINDOWS_ILLEGAL = set('<>"|?*')


class PathResolver:
    """Turns raw path arguments into validated ``Path`` values.

    Resolution is purely syntactic: the filesystem is never consulted, so a
    resolved path may or may not exist.
    """

    def __init__(self, *, windows: bool = os.name == "nt"):
        self._windows = windows

    def resolve(self, raw: RawPath) -> Path:
        if isinstance(raw, PurePath):
            text = str(raw)
        elif isinstance(raw, str):
            text = raw
        elif isinstance(raw, os.PathLike):
            fspath = os.fspath(raw)
            if not isinstance(fspath, str):
                raise InvalidPath(repr(raw), "path must be text, not bytes")
            text = fspath
        else:
            raise InvalidPath(repr(raw), f"unsupported path type {type(raw).__name__}")

        if not text or not text.strip():
            raise InvalidPath(text, "path is empty")
        if "\x00" in text:
            raise InvalidPath(text.replace("\x00", "\\0"), "path contains a NUL byte")
        if self._windows:
            self._check_windows(text)

        path = Path(text)
        for part in path.parts:
            if len(part) > MAX_COMPONENT_LENGTH:
                raise InvalidPath(text, f"path component exceeds {MAX_COMPONENT_LENGTH} characters")

        logger.debug("Resolved %r -> %s", raw, path)
        return path

    def _check_windows(self, text: str) -> None:
        rest = _strip_drive(text)
        for char in rest:
            if char in _WINDOWS_ILLEGAL or ord(char) < 32:
                raise InvalidPath(text, f"path contains illegal character {char!r}")
        if ":" in rest:
            raise InvalidPath(text, "path contains ':' outside the drive prefix")


def _strip_drive(text: str) -> str:
    if len(text) >= 2 and text[1] == ":" and text[0].isalpha():
        return text[2:]
    return text


_default_resolver = PathResolver()


def resolve(raw: RawPath) -> Path:
    """Resolve ``raw`` with the host's default rules."""

    return _default_resolver.resolve(raw)
