from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ApiFailure(Exception):
    """Base class for every failure surfaced by the auth API client."""


class ClientError(ApiFailure):
    """The server rejected the request (HTTP 400).

    ``str(exc)`` is the server-supplied numeric code; the server message is
    kept on ``message``.
    """

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(str(code))
        self.code = code
        self.message = message


class ServerError(ApiFailure):
    """Any status other than 200/400, or a transport-level failure."""

    def __init__(self, status_code: Optional[int] = None) -> None:
        super().__init__("internal error")
        self.status_code = status_code


class DecodeError(ApiFailure):
    """A response body could not be decoded into the expected shape."""


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[ApiFailure] = None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: ApiFailure) -> "ApiResult[T]":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        if self.failure is not None:
            raise self.failure
        if self.value is None:
            raise DecodeError("empty result")
        return self.value
