"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """
    Credentials for login. The admin UI sends the identity as `email` even
    when it is a username, so `identity`, `email` and `username` are all accepted.
    """

    identity: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=AliasChoices("identity", "email", "username"),
        description="Email address or username",
    )
    password: str | None = Field(default=None, max_length=1024, description="Password")


class AccountView(BaseModel):
    """Account as returned to clients (never includes the credential)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | str
    email: str | None = None
    username: str | None = None
    name: str | None = None
    role: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AccountResponse(BaseModel):
    """Response for login and GET /auth/me."""

    user: AccountView


class LogoutResponse(BaseModel):
    ok: bool = True
