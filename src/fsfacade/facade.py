"""One object bundling every file operation behind raw path arguments."""
from __future__ import annotations

from typing import List, Optional

from .config import WatchConfig
from .directories import DirectoryManager
from .existence import ExistenceChecker
from .files import FileAccess, WriteMode
from .paths import PathResolver, RawPath
from .watcher import ChangeConsumer, ChangeWatcher, WatchSubscription


class FileOperations:
    """Facade over the path, file, directory and watch components.

    Every method resolves its path argument first, so a malformed path fails
    with ``InvalidPath`` before any OS call is made. The facade holds no state
    between calls beyond its collaborators.
    """

    def __init__(
        self,
        *,
        watch_config: Optional[WatchConfig] = None,
        resolver: Optional[PathResolver] = None,
        checker: Optional[ExistenceChecker] = None,
    ):
        self.resolver = resolver or PathResolver()
        self.checker = checker or ExistenceChecker()
        self.files = FileAccess(self.checker)
        self.directories = DirectoryManager(self.checker)
        self.watcher = ChangeWatcher(watch_config, self.checker)

    def exists(self, raw: RawPath) -> bool:
        return self.checker.exists(self.resolver.resolve(raw))

    def read(self, raw: RawPath) -> bytes:
        return self.files.read(self.resolver.resolve(raw))

    def write(self, raw: RawPath, data, mode: WriteMode = WriteMode.OVERWRITE) -> int:
        return self.files.write(self.resolver.resolve(raw), data, mode)

    def append(self, raw: RawPath, data) -> int:
        return self.files.append(self.resolver.resolve(raw), data)

    def remove(self, raw: RawPath) -> None:
        self.files.remove(self.resolver.resolve(raw))

    def mkdir(self, raw: RawPath, *, parents: bool = False) -> None:
        self.directories.create(self.resolver.resolve(raw), parents=parents)

    def listdir(self, raw: RawPath) -> List[str]:
        return self.directories.list(self.resolver.resolve(raw))

    def rmtree(self, raw: RawPath) -> None:
        self.directories.remove_recursive(self.resolver.resolve(raw))

    def watch(self, raw: RawPath, consumer: ChangeConsumer) -> WatchSubscription:
        return self.watcher.start(self.resolver.resolve(raw), consumer)

    def cancel(self, subscription: WatchSubscription) -> None:
        self.watcher.cancel(subscription)

    async def exists_async(self, raw: RawPath) -> bool:
        return await self.checker.exists_async(self.resolver.resolve(raw))

    async def read_async(self, raw: RawPath) -> bytes:
        return await self.files.read_async(self.resolver.resolve(raw))

    async def write_async(self, raw: RawPath, data, mode: WriteMode = WriteMode.OVERWRITE) -> int:
        return await self.files.write_async(self.resolver.resolve(raw), data, mode)

    async def append_async(self, raw: RawPath, data) -> int:
        return await self.files.append_async(self.resolver.resolve(raw), data)

    async def remove_async(self, raw: RawPath) -> None:
        await self.files.remove_async(self.resolver.resolve(raw))

    async def mkdir_async(self, raw: RawPath, *, parents: bool = False) -> None:
        await self.directories.create_async(self.resolver.resolve(raw), parents=parents)

    async def listdir_async(self, raw: RawPath) -> List[str]:
        return await self.directories.list_async(self.resolver.resolve(raw))

    async def rmtree_async(self, raw: RawPath) -> None:
        await self.directories.remove_recursive_async(self.resolver.resolve(raw))
