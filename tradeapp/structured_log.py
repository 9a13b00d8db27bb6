from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from typing import Any, Final
from uuid import uuid4

REDACTED: Final[str] = "***"

_SENSITIVE_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "password",
        "token",
        "auth_token",
        "app_instance_id",
        "email_code",
        "secret_key",
    }
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_request_id() -> str:
    return uuid4().hex


def redact_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        key: (REDACTED if key in _SENSITIVE_FIELDS and value else value)
        for key, value in fields.items()
    }


def log_event(
    logger: logging.Logger,
    *,
    event: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit one compact JSON line; credential-bearing fields are masked."""
    if not logger.isEnabledFor(level):
        return
    payload = {"ts": _now_iso(), "event": event, **redact_fields(fields)}
    logger.log(
        level,
        json.dumps(payload, ensure_ascii=True, separators=(",", ":")),
    )
