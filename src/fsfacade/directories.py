"""Directory create, list and recursive removal."""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

import aiofiles.os

from .errors import NotFound, translate_os_error
from .existence import ExistenceChecker

logger = logging.getLogger(__name__)

_rmtree_async = aiofiles.os.wrap(shutil.rmtree)


class DirectoryManager:
    """Lifecycle operations on a single directory.

    ``create`` refuses an existing target instead of silently succeeding.
    ``remove_recursive`` has no rollback: if a nested entry cannot be removed
    the tree is left partially deleted and the first failure is raised.
    """

    def __init__(self, checker: Optional[ExistenceChecker] = None):
        self._checker = checker or ExistenceChecker()

    def create(self, path: Path, *, parents: bool = False) -> None:
        self._checker.require_absent(path)
        logger.debug("mkdir %s (parents=%s)", path, parents)
        try:
            if parents:
                os.makedirs(path)
            else:
                os.mkdir(path)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    def list(self, path: Path) -> List[str]:
        if not self._checker.is_dir(path):
            raise NotFound(path, "not a directory")
        try:
            return os.listdir(path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFound(path, "not a directory") from exc
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    def remove_recursive(self, path: Path) -> None:
        if not self._checker.is_dir(path):
            raise NotFound(path, "not a directory")
        logger.debug("rmtree %s", path)
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise translate_os_error(exc, exc.filename or path) from exc

    async def create_async(self, path: Path, *, parents: bool = False) -> None:
        await self._checker.require_absent_async(path)
        logger.debug("mkdir_async %s (parents=%s)", path, parents)
        try:
            if parents:
                await aiofiles.os.makedirs(path)
            else:
                await aiofiles.os.mkdir(path)
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    async def list_async(self, path: Path) -> List[str]:
        if not await self._checker.is_dir_async(path):
            raise NotFound(path, "not a directory")
        try:
            return await aiofiles.os.listdir(path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFound(path, "not a directory") from exc
        except OSError as exc:
            raise translate_os_error(exc, path) from exc

    async def remove_recursive_async(self, path: Path) -> None:
        if not await self._checker.is_dir_async(path):
            raise NotFound(path, "not a directory")
        logger.debug("rmtree_async %s", path)
        try:
            await _rmtree_async(path)
        except OSError as exc:
            raise translate_os_error(exc, exc.filename or path) from exc
