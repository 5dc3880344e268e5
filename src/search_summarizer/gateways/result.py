"""Tagged success/failure value shared by both gateways."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..exceptions import UpstreamError

T = TypeVar("T")


@dataclass(frozen=True)
class GatewayResult(Generic[T]):
    """Outcome of a single upstream call.

    Exactly one of ``value`` and ``error`` is set. Gateways never raise for
    upstream failures; callers branch on ``ok`` or call ``unwrap()``.
    """

    value: T | None = None
    error: UpstreamError | None = None

    @classmethod
    def success(cls, value: T) -> "GatewayResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: UpstreamError) -> "GatewayResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the captured UpstreamError on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
