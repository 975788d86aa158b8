"""Centralized existence checks shared by every guarded operation."""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Optional

import aiofiles.os

from .errors import AlreadyExists, NotFound, translate_os_error

logger = logging.getLogger(__name__)


class ExistenceChecker:
    """Answers "is something at this path" without conflating absence and failure.

    ``exists`` returns ``False`` only when the OS reports the entry missing.
    Permission problems and other I/O errors surface as ``AccessDenied`` or
    ``IOFailure`` so callers can tell them apart from a plain miss.
    """

    def exists(self, path: Path) -> bool:
        return self._stat(path) is not None

    def is_file(self, path: Path) -> bool:
        st = self._stat(path)
        return st is not None and stat.S_ISREG(st.st_mode)

    def is_dir(self, path: Path) -> bool:
        st = self._stat(path)
        return st is not None and stat.S_ISDIR(st.st_mode)

    def require_present(self, path: Path, *, follow_symlinks: bool = True) -> None:
        if self._stat(path, follow_symlinks=follow_symlinks) is None:
            raise NotFound(path)

    def require_absent(self, path: Path) -> None:
        if self.exists(path):
            raise AlreadyExists(path)

    async def exists_async(self, path: Path) -> bool:
        return await self._stat_async(path) is not None

    async def is_dir_async(self, path: Path) -> bool:
        st = await self._stat_async(path)
        return st is not None and stat.S_ISDIR(st.st_mode)

    async def require_present_async(self, path: Path, *, follow_symlinks: bool = True) -> None:
        if await self._stat_async(path, follow_symlinks=follow_symlinks) is None:
            raise NotFound(path)

    async def require_absent_async(self, path: Path) -> None:
        if await self.exists_async(path):
            raise AlreadyExists(path)

    def _stat(self, path: Path, follow_symlinks: bool = True) -> Optional[os.stat_result]:
        try:
            return os.stat(path, follow_symlinks=follow_symlinks)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            logger.debug("stat failed for %s: %s", path, exc)
            raise translate_os_error(exc, path) from exc

    async def _stat_async(self, path: Path, follow_symlinks: bool = True) -> Optional[os.stat_result]:
        try:
            return await aiofiles.os.stat(path, follow_symlinks=follow_symlinks)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            logger.debug("stat failed for %s: %s", path, exc)
            raise translate_os_error(exc, path) from exc
