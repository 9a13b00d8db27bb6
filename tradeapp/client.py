from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Final, Literal, Optional, Protocol, cast

from pydantic import ValidationError

from .errors import ApiFailure, ApiResult, ClientError, DecodeError, ServerError
from .schemas import (
    ApiErrorBody,
    ApiModel,
    ApiResponseModel,
    ApproveByEmailRequest,
    ApproveByPushRequest,
    LoginRequest,
    LoginResponse,
    RegistrationRequest,
    RegistrationResponse,
    ResponseT,
)
from .settings import ApiEndpoints, get_trade_api_settings
from .structured_log import log_event, new_request_id
from .transport import HttpTransport, TransportError, TransportResponse, UrllibTransport

logger = logging.getLogger(__name__)

OperationName = Literal["register", "login", "approve_by_email", "approve_by_push"]
CredentialKind = Literal["aid", "authorization"]


@dataclass(frozen=True)
class _Operation:
    path_field: str
    credential: CredentialKind
    request_type: type[ApiModel]
    response_type: type[ApiResponseModel]


_OPERATIONS: Final[dict[OperationName, _Operation]] = {
    "register": _Operation(
        path_field="registration_path",
        credential="aid",
        request_type=RegistrationRequest,
        response_type=RegistrationResponse,
    ),
    "login": _Operation(
        path_field="login_path",
        credential="aid",
        request_type=LoginRequest,
        response_type=LoginResponse,
    ),
    "approve_by_email": _Operation(
        path_field="approve_by_email_path",
        credential="authorization",
        request_type=ApproveByEmailRequest,
        response_type=LoginResponse,
    ),
    "approve_by_push": _Operation(
        path_field="approve_by_push_path",
        credential="authorization",
        request_type=ApproveByPushRequest,
        response_type=LoginResponse,
    ),
}


class TradeApiClient(Protocol):
    """The four authentication calls of the trading platform API."""

    def register(
        self, request: RegistrationRequest, app_instance_id: str
    ) -> RegistrationResponse:
        ...

    def login(self, request: LoginRequest, app_instance_id: str) -> LoginResponse:
        ...

    def approve_by_email(
        self, request: ApproveByEmailRequest, auth_token: str
    ) -> LoginResponse:
        ...

    def approve_by_push(
        self, request: ApproveByPushRequest, auth_token: str
    ) -> LoginResponse:
        ...


def decode_response(
    response: TransportResponse, response_type: type[ResponseT]
) -> ApiResult[ResponseT]:
    """Map a raw transport response onto a typed value or an ``ApiFailure``."""

    if response.status_code == 200:
        try:
            return ApiResult.success(response_type.model_validate_json(response.body))
        except ValidationError as exc:
            return _failed(DecodeError(f"invalid {response_type.__name__} body"), exc)
    if response.status_code == 400:
        try:
            error_body = ApiErrorBody.model_validate_json(response.body)
        except ValidationError as exc:
            return _failed(DecodeError("invalid error body"), exc)
        return ApiResult.failed(ClientError(error_body.code, error_body.message))
    return ApiResult.failed(ServerError(response.status_code))


def _failed(failure: ApiFailure, cause: BaseException) -> ApiResult[ResponseT]:
    failure.__cause__ = cause
    return ApiResult.failed(failure)


def _check_header_value(value: str) -> None:
    if "\r" in value or "\n" in value:
        raise ValueError("credential must not contain line breaks")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError("credential must be latin-1 encodable") from exc


class AuthApiClient:
    """Blocking client for registration, login and second-factor approval.

    The client holds only immutable configuration and the transport, so one
    instance may be shared between threads.
    """

    def __init__(
        self,
        endpoints: Optional[ApiEndpoints] = None,
        *,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        if endpoints is None or transport is None:
            settings = get_trade_api_settings()
            if endpoints is None:
                endpoints = settings.endpoints()
            if transport is None:
                transport = UrllibTransport(
                    timeout_seconds=settings.request_timeout_seconds
                )
        self._endpoints = endpoints
        self._transport = transport

    @property
    def endpoints(self) -> ApiEndpoints:
        return self._endpoints

    def register(
        self, request: RegistrationRequest, app_instance_id: str
    ) -> RegistrationResponse:
        result = self.call("register", request, app_instance_id)
        return cast(RegistrationResponse, result.unwrap())

    def login(self, request: LoginRequest, app_instance_id: str) -> LoginResponse:
        result = self.call("login", request, app_instance_id)
        return cast(LoginResponse, result.unwrap())

    def approve_by_email(
        self, request: ApproveByEmailRequest, auth_token: str
    ) -> LoginResponse:
        result = self.call("approve_by_email", request, auth_token)
        return cast(LoginResponse, result.unwrap())

    def approve_by_push(
        self, request: ApproveByPushRequest, auth_token: str
    ) -> LoginResponse:
        result = self.call("approve_by_push", request, auth_token)
        return cast(LoginResponse, result.unwrap())

    def call(
        self,
        operation: OperationName,
        request: ApiModel,
        credential: str,
    ) -> ApiResult[ApiResponseModel]:
        """Run one operation and return its outcome instead of raising.

        Args:
            operation: Which of the four auth calls to issue.
            request: The request model matching ``operation``.
            credential: App instance id for register/login, auth token for
                the approve calls. Sent verbatim as the header value.

        Returns:
            An ``ApiResult`` holding either the decoded response or the
            ``ClientError``/``ServerError``/``DecodeError`` failure.
        """
        spec = _OPERATIONS.get(operation)
        if spec is None:
            raise ValueError(f"unknown operation: {operation}")
        if not isinstance(request, spec.request_type):
            raise TypeError(
                f"{operation} expects {spec.request_type.__name__}, "
                f"got {type(request).__name__}"
            )

        _check_header_value(credential)

        path = cast(str, getattr(self._endpoints, spec.path_field))
        url = self._endpoints.url_for(path)
        headers = {
            "Content-Type": self._endpoints.json_media_type,
            self._credential_header(spec.credential): credential,
        }
        request_id = new_request_id()
        log_event(
            logger,
            event="trade_api_request",
            operation=operation,
            path=path,
            request_id=request_id,
        )

        started = time.monotonic()
        try:
            response = self._transport.post(
                url,
                headers=headers,
                body=request.to_json().encode("utf-8"),
            )
        except TransportError as exc:
            log_event(
                logger,
                event="trade_api_failure",
                level=logging.WARNING,
                operation=operation,
                request_id=request_id,
                failure="transport",
                error_message=str(exc),
            )
            return _failed(ServerError(), exc)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        result = decode_response(response, spec.response_type)
        if result.failure is None:
            log_event(
                logger,
                event="trade_api_response",
                operation=operation,
                request_id=request_id,
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
            )
        else:
            log_event(
                logger,
                event="trade_api_failure",
                level=logging.WARNING,
                operation=operation,
                request_id=request_id,
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
                failure=type(result.failure).__name__,
            )
        return result

    def _credential_header(self, kind: CredentialKind) -> str:
        if kind == "aid":
            return self._endpoints.aid_header_name
        return self._endpoints.authorization_header_name
