"""Value-style capture of facade outcomes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from .errors import ErrorKind, FacadeError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a success value or the typed failure that replaced it."""

    value: Optional[T] = None
    error: Optional[FacadeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the captured failure if there is one."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(operation: Callable[..., T], *args: Any, **kwargs: Any) -> OperationResult[T]:
    """Run a blocking operation and capture its outcome.

    Only ``FacadeError`` is captured; programming errors such as ``TypeError``
    still propagate.
    """

    try:
        return OperationResult(value=operation(*args, **kwargs))
    except FacadeError as exc:
        return OperationResult(error=exc)


async def attempt_async(
    operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
) -> OperationResult[T]:
    try:
        return OperationResult(value=await operation(*args, **kwargs))
    except FacadeError as exc:
        return OperationResult(error=exc)
