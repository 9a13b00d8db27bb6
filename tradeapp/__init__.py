from .client import AuthApiClient, TradeApiClient, decode_response
from .errors import ApiFailure, ApiResult, ClientError, DecodeError, ServerError
from .schemas import (
    ApiErrorBody,
    ApproveByEmailRequest,
    ApproveByPushRequest,
    LoginRequest,
    LoginResponse,
    RegistrationRequest,
    RegistrationResponse,
)
from .settings import ApiEndpoints, TradeApiSettings, get_trade_api_settings
from .transport import HttpTransport, TransportError, TransportResponse, UrllibTransport

__all__ = [
    "ApiEndpoints",
    "ApiErrorBody",
    "ApiFailure",
    "ApiResult",
    "ApproveByEmailRequest",
    "ApproveByPushRequest",
    "AuthApiClient",
    "ClientError",
    "DecodeError",
    "HttpTransport",
    "LoginRequest",
    "LoginResponse",
    "RegistrationRequest",
    "RegistrationResponse",
    "ServerError",
    "TradeApiClient",
    "TradeApiSettings",
    "TransportError",
    "TransportResponse",
    "UrllibTransport",
    "decode_response",
    "get_trade_api_settings",
]
