"""Errors raised by the Novu adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx


class NovuAPIError(RuntimeError):
    """Raised when the Novu API answers a chained request with a non-success status."""

    def __init__(self, message: str, *, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


class DeviceTokenBatchError(NovuAPIError):
    """Raised when at least one subscriber of a batch replacement failed.

    ``outcomes`` maps every subscriber id of the batch to ``None`` when its chain
    completed, or to the exception that ended it.
    """

    def __init__(self, message: str, *, outcomes: Mapping[str, BaseException | None]) -> None:
        first_failure = next((exc for exc in outcomes.values() if exc is not None), None)
        response = first_failure.response if isinstance(first_failure, NovuAPIError) else None
        super().__init__(message, response=response)
        self.outcomes = dict(outcomes)

    @property
    def failed(self) -> dict[str, BaseException]:
        return {key: exc for key, exc in self.outcomes.items() if exc is not None}

    @property
    def succeeded(self) -> list[str]:
        return [key for key, exc in self.outcomes.items() if exc is None]
