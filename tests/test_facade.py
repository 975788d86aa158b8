"""
Unit tests for the FileOperations facade.
"""

import asyncio

import pytest

from fsfacade.config import WatchConfig
from fsfacade.errors import AlreadyExists, InvalidPath, NotFound
from fsfacade.events import WatchState
from fsfacade.facade import FileOperations
from fsfacade.files import WriteMode


class TestFileOperations:
    """Tests for FileOperations."""

    def test_invalid_path_fails_before_any_os_call(self):
        ops = FileOperations()
        for call in (ops.read, ops.remove, ops.listdir, ops.rmtree, ops.exists):
            with pytest.raises(InvalidPath):
                call("")

    def test_string_paths_end_to_end(self, tmp_path):
        ops = FileOperations()
        directory = str(tmp_path / "d")
        ops.mkdir(directory)
        assert ops.listdir(directory) == []
        with pytest.raises(AlreadyExists):
            ops.mkdir(directory)

        target = f"{directory}/a.txt"
        ops.write(target, b"hello", WriteMode.OVERWRITE)
        ops.append(target, b"!")
        assert ops.read(target) == b"hello!"
        assert ops.listdir(directory) == ["a.txt"]

        ops.rmtree(directory)
        assert ops.exists(directory) is False
        assert ops.exists(target) is False

    def test_async_end_to_end(self, tmp_path):
        ops = FileOperations()
        directory = tmp_path / "d"
        target = directory / "a.txt"

        async def scenario():
            await ops.mkdir_async(directory)
            await ops.write_async(target, b"hello")
            await ops.append_async(target, b"!")
            assert await ops.read_async(target) == b"hello!"
            assert await ops.listdir_async(directory) == ["a.txt"]
            await ops.remove_async(target)
            assert await ops.exists_async(target) is False
            await ops.rmtree_async(directory)
            with pytest.raises(NotFound):
                await ops.read_async(target)

        asyncio.run(scenario())

    def test_watch_and_cancel(self, tmp_path):
        target = tmp_path / "w.txt"
        target.write_bytes(b"x")
        ops = FileOperations(watch_config=WatchConfig(poll_interval=0.02))
        subscription = ops.watch(str(target), lambda event: None)
        assert subscription.state is WatchState.WATCHING
        ops.cancel(subscription)
        ops.cancel(subscription)
        assert subscription.state is WatchState.CANCELLED
