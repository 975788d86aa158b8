"""Typed failures raised by every facade operation."""
from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Type, Union


class ErrorKind(str, Enum):
    """Failure kinds callers can branch on."""

    INVALID_PATH = "InvalidPath"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    ACCESS_DENIED = "AccessDenied"
    IO_FAILURE = "IOFailure"


class FacadeError(Exception):
    """Base class for all facade failures."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, path: Union[str, Path, None], message: Optional[str] = None):
        self.path = path
        self.message = message or _DEFAULT_MESSAGES[self.kind]
        super().__init__(f"{self.kind.value}: {self.message}: {path}")


class InvalidPath(FacadeError):
    """Raised when a path is syntactically malformed."""

    kind = ErrorKind.INVALID_PATH


class NotFound(FacadeError):
    """Raised when the target is absent but must be present."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExists(FacadeError):
    """Raised when the target is present but must be absent."""

    kind = ErrorKind.ALREADY_EXISTS


class AccessDenied(FacadeError):
    """Raised on an OS-level permission failure."""

    kind = ErrorKind.ACCESS_DENIED


class IOFailure(FacadeError):
    """Raised for any other OS-level failure."""

    kind = ErrorKind.IO_FAILURE


_DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.INVALID_PATH: "invalid path",
    ErrorKind.NOT_FOUND: "no such file or directory",
    ErrorKind.ALREADY_EXISTS: "path already exists",
    ErrorKind.ACCESS_DENIED: "permission denied",
    ErrorKind.IO_FAILURE: "i/o failure",
}

EXIT_CODES: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_PATH: 3,
    ErrorKind.NOT_FOUND: 4,
    ErrorKind.ALREADY_EXISTS: 5,
    ErrorKind.ACCESS_DENIED: 6,
    ErrorKind.IO_FAILURE: 7,
}

_ERRNO_TYPES: Dict[int, Type[FacadeError]] = {
    errno.ENOENT: NotFound,
    errno.ENOTDIR: NotFound,
    errno.EEXIST: AlreadyExists,
    errno.EACCES: AccessDenied,
    errno.EPERM: AccessDenied,
}


def translate_os_error(exc: OSError, path: Union[str, Path, None] = None) -> FacadeError:
    """Map an ``OSError`` onto the facade's error taxonomy.

    The original exception is attached as ``__cause__`` so the OS detail is
    never lost. ``path`` defaults to the filename recorded on the exception.
    """

    target = path if path is not None else exc.filename
    error_type = _ERRNO_TYPES.get(exc.errno, IOFailure) if exc.errno is not None else IOFailure
    message = exc.strerror.lower() if exc.strerror else None
    error = error_type(target, message)
    error.__cause__ = exc
    return error


def exit_code_for(error: FacadeError) -> int:
    return EXIT_CODES[error.kind]
