"""Request and response shapes exchanged with the credential gate.

Only the shapes are modelled here; hashing, token issuance and session
expiry belong to whatever implements
:class:`~smartcal.auth.CredentialGate`.
"""

from __future__ import annotations

from datetime import date

from pydantic import ConfigDict, Field, SecretStr, field_validator

from smartcal.models.event import RawInputModel


def _check_email(value: str) -> str:
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValueError(f"not a valid email address: {value!r}")
    return value.lower()


class RegistrationRequest(RawInputModel):
    """Fields required to register a new user; all are mandatory."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: SecretStr
    birthdate: date

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def _non_empty_password(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("password must not be empty")
        return value


class LoginRequest(RawInputModel):
    """Credentials presented at login."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    email: str = Field(min_length=3)
    password: SecretStr

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        return _check_email(value)


class LoginResponse(RawInputModel):
    """Bearer token and display name returned by a successful login."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1)
    name: str
