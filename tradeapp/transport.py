from __future__ import annotations

from dataclasses import dataclass
from http.client import HTTPException
import logging
from typing import Mapping, Protocol
from urllib import error as urlerror
from urllib import request as urlrequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes = b""

    def text(self) -> str:
        return self.body.decode("utf-8")


class TransportError(Exception):
    """The request failed before an HTTP status was obtained."""


class HttpTransport(Protocol):
    """Sends one blocking POST and returns the raw status and body."""

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        ...


class UrllibTransport:
    """POST over ``urllib.request``; HTTP error statuses come back as responses."""

    def __init__(self, *, timeout_seconds: int = 30) -> None:
        self._timeout_seconds = timeout_seconds

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        req = urlrequest.Request(
            url,
            method="POST",
            data=body,
            headers=dict(headers),
        )
        try:
            with urlrequest.urlopen(req, timeout=self._timeout_seconds) as resp:
                return TransportResponse(status_code=resp.status, body=resp.read())
        except urlerror.HTTPError as exc:
            payload = exc.read() if exc.fp else b""
            return TransportResponse(status_code=exc.code, body=payload)
        except urlerror.URLError as exc:
            logger.debug("POST %s failed: %s", url, exc.reason)
            raise TransportError(f"request to {url} failed") from exc
        except (TimeoutError, ConnectionError, HTTPException) as exc:
            raise TransportError(f"request to {url} failed") from exc
