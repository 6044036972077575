"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Login with username and password."""

    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class TokenResponse(BaseModel):
    """JWT token response."""

    token: str


class ForgotPasswordRequest(BaseModel):
    """Reset a password using the security code chosen at signup."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(None, max_length=255)
    security_code: str | None = Field(None, alias="securityCode", max_length=255)
    new_password: str | None = Field(None, alias="newPassword", max_length=128)
    confirm_password: str | None = Field(None, alias="confirmPassword", max_length=128)
