"""Single-file read, write, append and remove operations."""
from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .errors import translate_os_error
from .existence import ExistenceChecker

logger = logging.getLogger(__name__)


class WriteMode(str, Enum):
    """How ``write`` treats an existing target."""

    OVERWRITE = "overwrite"
    CREATE_ONLY = "create_only"


_OPEN_MODES = {
    WriteMode.OVERWRITE: "wb",
    WriteMode.CREATE_ONLY: "xb",
}


def _append_opener(path: str, flags: int) -> int:
    # Strip O_CREAT so a file removed after the guard is not recreated.
    return os.open(path, flags & ~os.O_CREAT)


def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        raise TypeError("content must be bytes-like, not str; encode it first")
    return bytes(memoryview(data))


class FileAccess:
    """Blocking and non-blocking access to one file at a time.

    Each call opens, acts on and closes the file within its own scope; no
    handle outlives the call. The ``*_async`` methods share the contract of
    their blocking counterparts and run the I/O through ``aiofiles`` so the
    event loop stays free while the OS completes the work.
    """

    def __init__(self, checker: Optional[ExistenceChecker] = None):
        self._checker = checker or ExistenceChecker()

    def read(self, path: Path) -> bytes:
        logger.debug("read %s", path)
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    def write(self, path: Path, data, mode: WriteMode = WriteMode.OVERWRITE) -> int:
        payload = _as_bytes(data)
        mode = WriteMode(mode)
        if mode is WriteMode.CREATE_ONLY:
            self._checker.require_absent(path)
        logger.debug("write %s (%s bytes, mode=%s)", path, len(payload), mode.value)
        try:
            with open(path, _OPEN_MODES[mode]) as fh:
                written = fh.write(payload)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return written

    def append(self, path: Path, data) -> int:
        payload = _as_bytes(data)
        self._checker.require_present(path)
        logger.debug("append %s (%s bytes)", path, len(payload))
        try:
            with open(path, "ab", opener=_append_opener) as fh:
                written = fh.write(payload)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return written

    def remove(self, path: Path) -> None:
        # A dangling symlink is still an entry that can be removed.
        self._checker.require_present(path, follow_symlinks=False)
        logger.debug("remove %s", path)
        try:
            os.remove(path)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    async def read_async(self, path: Path) -> bytes:
        logger.debug("read_async %s", path)
        try:
            async with aiofiles.open(path, "rb") as fh:
                return await fh.read()
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    async def write_async(self, path: Path, data, mode: WriteMode = WriteMode.OVERWRITE) -> int:
        payload = _as_bytes(data)
        mode = WriteMode(mode)
        if mode is WriteMode.CREATE_ONLY:
            await self._checker.require_absent_async(path)
        logger.debug("write_async %s (%s bytes, mode=%s)", path, len(payload), mode.value)
        try:
            async with aiofiles.open(path, _OPEN_MODES[mode]) as fh:
                written = await fh.write(payload)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return written

    async def append_async(self, path: Path, data) -> int:
        payload = _as_bytes(data)
        await self._checker.require_present_async(path)
        logger.debug("append_async %s (%s bytes)", path, len(payload))
        try:
            async with aiofiles.open(path, "ab", opener=_append_opener) as fh:
                written = await fh.write(payload)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return written

    async def remove_async(self, path: Path) -> None:
        await self._checker.require_present_async(path, follow_symlinks=False)
        logger.debug("remove_async %s", path)
        try:
            await aiofiles.os.remove(path)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
