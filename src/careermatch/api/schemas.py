from __future__ import annotations

from pydantic import BaseModel, Field

from careermatch.types import AuthUser, UserProfile


class SignUpRequest(BaseModel):
    email: str
    password: str = Field(min_length=6)
    display_name: str = ""


class SignUpResponse(BaseModel):
    message: str
    user_id: str | None = None


class SignInRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    access_token: str
    refresh_token: str = ""
    expires_at: int | None = None
    user: AuthUser


class SuggestJobsRequest(BaseModel):
    profile: UserProfile = Field(default_factory=UserProfile)


class SuggestJobsResponse(BaseModel):
    success: bool = True
    suggestions: int


class ErrorResponse(BaseModel):
    error: str
