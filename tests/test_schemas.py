from __future__ import annotations

import json

from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError
import pytest

from tradeapp.schemas import (
    ApiErrorBody,
    ApproveByEmailRequest,
    ApproveByPushRequest,
    LoginRequest,
    LoginResponse,
    RegistrationRequest,
    RegistrationResponse,
    to_camel,
)

_TEXT = st.text(max_size=40)
_INT = st.integers(min_value=-(2**31), max_value=2**31 - 1)


def test_to_camel_matches_wire_names() -> None:
    assert to_camel("email_code") == "emailCode"
    assert to_camel("approve_type") == "approveType"
    assert to_camel("login") == "login"


@given(login=_TEXT, password=_TEXT, email=_TEXT)
def test_registration_request_wire_fields_reproduce_values(
    login: str, password: str, email: str
) -> None:
    body = json.loads(
        RegistrationRequest(login=login, password=password, email=email).to_json()
    )

    assert body == {"login": login, "password": password, "email": email}


@given(code=_TEXT, secret=_TEXT)
def test_approve_requests_use_declared_wire_names(code: str, secret: str) -> None:
    assert json.loads(ApproveByEmailRequest(email_code=code).to_json()) == {
        "emailCode": code
    }
    assert json.loads(ApproveByPushRequest(secret_key=secret).to_json()) == {
        "secretKey": secret
    }


@given(token=_TEXT, approve_type=_INT, expire_at=_INT)
def test_login_response_decodes_fields_exactly(
    token: str, approve_type: int, expire_at: int
) -> None:
    raw = json.dumps(
        {"token": token, "approveType": approve_type, "expireAt": expire_at}
    )

    decoded = LoginResponse.model_validate_json(raw)

    assert decoded.token == token
    assert decoded.approve_type == approve_type
    assert decoded.expire_at == expire_at


def test_request_serialization_is_compact() -> None:
    assert LoginRequest(login="a", password="b").to_json() == (
        '{"login":"a","password":"b"}'
    )


def test_requests_accept_wire_names_and_reject_unknown_fields() -> None:
    assert ApproveByEmailRequest.model_validate({"emailCode": "1"}).email_code == "1"
    with pytest.raises(ValidationError):
        LoginRequest.model_validate({"login": "a", "password": "b", "otp": "c"})


def test_responses_are_lenient_about_missing_and_unknown_fields() -> None:
    assert RegistrationResponse.model_validate_json("{}") == RegistrationResponse(
        token="", expire_at=0
    )
    assert ApiErrorBody.model_validate_json('{"message":"x","trace":"y"}') == (
        ApiErrorBody(code=0, message="x")
    )


def test_models_are_immutable() -> None:
    response = LoginResponse(token="t")
    with pytest.raises(ValidationError):
        response.token = "other"  # type: ignore[misc]


def test_responses_treat_null_fields_as_defaults() -> None:
    decoded = LoginResponse.model_validate_json(
        '{"token":null,"approveType":1,"expireAt":null}'
    )

    assert decoded == LoginResponse(token="", approve_type=1, expire_at=0)
    assert ApiErrorBody.model_validate_json('{"code":5,"message":null}') == (
        ApiErrorBody(code=5, message="")
    )
