"""Login and signup form definitions."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from ...services.auth import MIN_PASSWORD_LENGTH
from ..forms import FormModel


class LoginForm(FormModel):
    username: str = Field(default="", max_length=64)
    password: str = Field(default="")

    @field_validator("username")
    @classmethod
    def require_username(cls, value: str) -> str:
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def require_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class SignupForm(LoginForm):
    """Signup adds a confirmation field and a minimum password length."""

    confirm_password: str = Field(default="")

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


__all__ = ["LoginForm", "SignupForm"]
