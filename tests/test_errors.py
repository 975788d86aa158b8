"""
Unit tests for error translation and result capture.
"""

import asyncio
import errno

import pytest

from fsfacade.errors import (
    EXIT_CODES,
    AccessDenied,
    AlreadyExists,
    ErrorKind,
    FacadeError,
    IOFailure,
    NotFound,
    exit_code_for,
    translate_os_error,
)
from fsfacade.results import OperationResult, attempt, attempt_async


class TestTranslateOsError:
    """Tests for translate_os_error."""

    @pytest.mark.parametrize(
        "exc, expected",
        [
            (FileNotFoundError(errno.ENOENT, "No such file or directory"), NotFound),
            (NotADirectoryError(errno.ENOTDIR, "Not a directory"), NotFound),
            (FileExistsError(errno.EEXIST, "File exists"), AlreadyExists),
            (PermissionError(errno.EACCES, "Permission denied"), AccessDenied),
            (PermissionError(errno.EPERM, "Operation not permitted"), AccessDenied),
            (OSError(errno.ENOSPC, "No space left on device"), IOFailure),
            (IsADirectoryError(errno.EISDIR, "Is a directory"), IOFailure),
            (OSError("no errno at all"), IOFailure),
        ],
    )
    def test_maps_errno_to_kind(self, exc, expected):
        error = translate_os_error(exc, "/some/path")
        assert type(error) is expected
        assert error.path == "/some/path"
        assert error.__cause__ is exc

    def test_defaults_to_exception_filename(self):
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", "/from/exc")
        assert translate_os_error(exc).path == "/from/exc"

    def test_message_names_kind_and_path(self):
        error = NotFound("a.txt")
        assert str(error) == "NotFound: no such file or directory: a.txt"

    def test_every_kind_has_distinct_nonzero_exit_code(self):
        codes = [EXIT_CODES[kind] for kind in ErrorKind]
        assert len(set(codes)) == len(codes)
        assert 0 not in codes
        assert exit_code_for(AccessDenied("x")) == 6


class TestOperationResult:
    """Tests for attempt and OperationResult."""

    def test_success_captures_value(self):
        result = attempt(lambda: 5)
        assert result.ok
        assert result.kind is None
        assert result.unwrap() == 5

    def test_failure_captures_typed_error(self):
        def fail():
            raise NotFound("gone.txt")

        result = attempt(fail)
        assert not result.ok
        assert result.kind is ErrorKind.NOT_FOUND
        with pytest.raises(NotFound):
            result.unwrap()

    def test_programming_errors_propagate(self):
        def broken():
            raise TypeError("bad call")

        with pytest.raises(TypeError):
            attempt(broken)

    def test_async_capture(self):
        async def fail():
            raise IOFailure("disk")

        result = asyncio.run(attempt_async(fail))
        assert isinstance(result, OperationResult)
        assert isinstance(result.error, FacadeError)
        assert result.kind is ErrorKind.IO_FAILURE

