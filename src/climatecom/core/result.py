"""Success-or-error wrapper for API calls."""

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from climatecom.core.errors import ClimateError

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of a single API operation.

    Exactly one of `value` and `error` is meaningful; check `ok` first.
    """

    value: T | None = None
    error: ClimateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def capture(call: Awaitable[T]) -> ApiResult[T]:
    """Await an API operation, turning handled client errors into a result.

    Errors outside the ClimateError hierarchy propagate unchanged.
    """
    try:
        return ApiResult(value=await call)
    except ClimateError as e:
        return ApiResult(error=e)
