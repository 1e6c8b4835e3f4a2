"""
Account Schemas

Validation models for signup, login and compare bodies, and session views.
"""

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

NAME_PATTERN = r"^[A-Za-z0-9]{3,24}$"
PASSWORD_PATTERN = r"^[A-Za-z0-9]{3,30}$"
DEFAULT_ALLOWED_TLDS = ("com", "net")


def check_tld(email: str, info: ValidationInfo) -> str:
    """Reject emails whose top-level domain is not in the allowed set.

    The allowed set comes from the validation context (``allowed_tlds``).
    """
    allowed = DEFAULT_ALLOWED_TLDS
    if info.context and info.context.get("allowed_tlds"):
        allowed = tuple(info.context["allowed_tlds"])

    domain = email.rsplit("@", 1)[-1]
    if "." not in domain:
        raise ValueError("email domain must have at least two segments")

    tld = domain.rsplit(".", 1)[-1].lower()
    if tld not in allowed:
        raise ValueError(f"email top-level domain must be one of: {', '.join(allowed)}")
    return email


class SignupRequest(BaseModel):
    """Body of POST /signup."""

    name: str = Field(..., pattern=NAME_PATTERN)
    email: EmailStr
    password: str = Field(..., pattern=PASSWORD_PATTERN)

    @field_validator("email")
    @classmethod
    def email_tld(cls, value: str, info: ValidationInfo) -> str:
        return check_tld(value, info)


class LoginRequest(BaseModel):
    """Body of POST /login."""

    email: EmailStr
    password: str = Field(..., pattern=PASSWORD_PATTERN)

    @field_validator("email")
    @classmethod
    def email_tld(cls, value: str, info: ValidationInfo) -> str:
        return check_tld(value, info)


class CompareRequest(BaseModel):
    """Body of GET /compare."""

    email: str
    password: str


class SessionView(BaseModel):
    token: str
    userId: str
    user: str
