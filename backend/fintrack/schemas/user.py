"""User schemas for request/response validation."""

from decimal import Decimal

from pydantic import field_validator

from fintrack.core.security import PASSWORD_POLICY_MESSAGE, is_valid_email, is_valid_password
from fintrack.schemas.base import CamelModel


class AuthUser(CamelModel):
    id: str
    username: str
    email: str
    net_salary_usd: Decimal


class UserLogin(CamelModel):
    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username and password are required.")
        return v


class UserRegister(CamelModel):
    username: str
    email: str
    password: str
    net_salary_usd: Decimal

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username is required.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("Please enter a valid email address.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not is_valid_password(v):
            raise ValueError(PASSWORD_POLICY_MESSAGE)
        return v

    @field_validator("net_salary_usd")
    @classmethod
    def validate_salary(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Net salary must be greater than zero.")
        return v
