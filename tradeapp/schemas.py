from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


def to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class ApiResponseModel(ApiModel):
    """Inbound body: unknown keys are dropped, missing or null keys take defaults."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return value


ResponseT = TypeVar("ResponseT", bound=ApiResponseModel)


class RegistrationRequest(ApiModel):
    login: str
    password: str
    email: str


class RegistrationResponse(ApiResponseModel):
    token: str = ""
    expire_at: int = 0


class LoginRequest(ApiModel):
    login: str
    password: str


class LoginResponse(ApiResponseModel):
    token: str = ""
    approve_type: int = 0
    expire_at: int = 0


class ApproveByEmailRequest(ApiModel):
    email_code: str


class ApproveByPushRequest(ApiModel):
    secret_key: str


class ApiErrorBody(ApiResponseModel):
    code: int = 0
    message: str = ""
