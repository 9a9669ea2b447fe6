from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

Education = Literal["high-school", "bachelors", "masters", "phd", "bootcamp", "self-taught"]
SessionEventKind = Literal["SIGNED_IN", "SIGNED_OUT", "TOKEN_REFRESHED"]

EDUCATION_LABELS: dict[str, str] = {
    "high-school": "High School",
    "bachelors": "Bachelor's Degree",
    "masters": "Master's Degree",
    "phd": "PhD",
    "bootcamp": "Bootcamp/Certification",
    "self-taught": "Self-taught",
}

TARGET_MATCH_RANGE = (65, 95)


def add_unique(items: list[str], value: str) -> list[str]:
    """Return ``items`` with ``value`` appended unless it is blank or already present."""
    candidate = value.strip()
    if not candidate or candidate in items:
        return list(items)
    return [*items, candidate]


def remove_item(items: list[str], value: str) -> list[str]:
    return [item for item in items if item != value]


def unique_ordered(values: list[str]) -> list[str]:
    result: list[str] = []
    for value in values:
        result = add_unique(result, str(value))
    return result


class UserProfile(BaseModel):
    name: str = ""
    education: Education | None = None
    specialization: str = ""
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    resume: str | None = None

    @field_validator("education", mode="before")
    @classmethod
    def blank_education_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("resume", mode="before")
    @classmethod
    def attachment_reference(cls, value: Any) -> Any:
        # Browser clients serialise a File object as {}; only a stored path or URL is kept.
        if isinstance(value, str):
            return value.strip() or None
        return None

    @field_validator("name", "specialization", mode="before")
    @classmethod
    def none_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def dedupe_entries(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return unique_ordered([str(item) for item in value])
        return value

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip() and self.education and self.skills)


class SuggestionDraft(BaseModel):
    """One entry of the model's JSON array."""

    job_title: str
    match_percentage: int
    reason: str
    required_skills: list[str]
    salary_range: str
    location: str

    @field_validator("match_percentage")
    @classmethod
    def clamp_percentage(cls, value: int) -> int:
        low, high = TARGET_MATCH_RANGE
        if value < low or value > high:
            logger.info("Model returned match_percentage=%s outside %s-%s", value, low, high)
        return max(0, min(100, value))


class JobSuggestion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    user_id: str
    generation_id: str = ""
    job_title: str
    match_percentage: int
    reason: str
    required_skills: list[str] = Field(default_factory=list)
    salary_range: str = ""
    location: str = ""
    job_type: str = "Full-time"
    company: str = "Various Companies"
    description: str = ""
    created_at: datetime | None = None


class AuthUser(BaseModel):
    id: str
    email: str = ""
    display_name: str = ""


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str = ""
    expires_at: int | None = None
    user: AuthUser


class SessionEvent(BaseModel):
    kind: SessionEventKind
    session: AuthSession | None = None


class GenerationResult(BaseModel):
    count: int


class ModelResponse(BaseModel):
    content: str
    raw: dict[str, Any] = Field(default_factory=dict)
