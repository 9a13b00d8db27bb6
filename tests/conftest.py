from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import sys
from threading import Lock
from typing import Callable, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tradeapp import settings as settings_module  # noqa: E402
from tradeapp.settings import ApiEndpoints  # noqa: E402
from tradeapp.transport import TransportResponse  # noqa: E402


@dataclass
class SentRequest:
    url: str
    headers: dict[str, str]
    body: bytes


@dataclass
class RecordingTransport:
    """In-memory transport: records every POST and answers via ``responder``."""

    responder: Callable[[SentRequest], TransportResponse]
    sent: list[SentRequest] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock)

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        request = SentRequest(url=url, headers=dict(headers), body=body)
        with self._lock:
            self.sent.append(request)
        return self.responder(request)


def respond_with(
    status_code: int = 200,
    body: str | bytes = b"",
    *,
    responder: Callable[[SentRequest], TransportResponse] | None = None,
) -> RecordingTransport:
    if responder is not None:
        return RecordingTransport(responder=responder)
    payload = body.encode("utf-8") if isinstance(body, str) else body
    return RecordingTransport(
        responder=lambda _: TransportResponse(status_code=status_code, body=payload)
    )


@pytest.fixture
def endpoints() -> ApiEndpoints:
    return ApiEndpoints(
        base_url="https://trade.example",
        registration_path="/auth/registration",
        login_path="/auth/login",
        approve_by_email_path="/auth/approve/email",
        approve_by_push_path="/auth/approve/push",
        aid_header_name="X-App-Instance-Id",
        authorization_header_name="Authorization",
        json_media_type="application/json; charset=utf-8",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    settings_module.get_trade_api_settings.cache_clear()
    yield
    settings_module.get_trade_api_settings.cache_clear()


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    return respond_with
