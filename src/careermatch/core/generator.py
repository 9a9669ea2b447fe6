from __future__ import annotations

import logging
from typing import Protocol

from pydantic import ValidationError

from careermatch.config import Settings, get_settings
from careermatch.db.repositories import ProfileStore
from careermatch.errors import AuthError, InvalidModelOutput, PersistenceError, StoreError, Unauthorized
from careermatch.llm.prompts import (
    CAREER_ADVISOR_SYSTEM_PROMPT,
    JOB_SUGGESTION_PROMPT,
    SUGGESTION_DESCRIPTION_TEMPLATE,
)
from careermatch.llm.providers import LLMProvider, build_provider, parse_json_array
from careermatch.types import AuthUser, GenerationResult, JobSuggestion, SuggestionDraft, UserProfile

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
NONE_SPECIFIED = "None specified"
DEFAULT_JOB_TYPE = "Full-time"
DEFAULT_COMPANY = "Various Companies"


class IdentityResolver(Protocol):
    def get_user(self, access_token: str) -> AuthUser: ...


def render_prompt(profile: UserProfile) -> str:
    return JOB_SUGGESTION_PROMPT.format(
        education=profile.education or NOT_SPECIFIED,
        specialization=profile.specialization.strip() or NOT_SPECIFIED,
        skills=", ".join(profile.skills) or NONE_SPECIFIED,
        interests=", ".join(profile.interests) or NONE_SPECIFIED,
    )


def parse_suggestions(content: str) -> list[SuggestionDraft]:
    entries = parse_json_array(content)
    try:
        return [SuggestionDraft.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        logger.warning("Model output entries do not match the suggestion shape: %s", exc)
        raise InvalidModelOutput("Invalid AI response format: missing or malformed fields") from exc


def build_suggestions(owner_id: str, drafts: list[SuggestionDraft]) -> list[JobSuggestion]:
    return [
        JobSuggestion(
            user_id=owner_id,
            job_title=draft.job_title,
            match_percentage=draft.match_percentage,
            reason=draft.reason,
            required_skills=draft.required_skills,
            salary_range=draft.salary_range,
            location=draft.location,
            job_type=DEFAULT_JOB_TYPE,
            company=DEFAULT_COMPANY,
            description=SUGGESTION_DESCRIPTION_TEMPLATE.format(
                reason=draft.reason,
                skills=", ".join(draft.required_skills),
                salary_range=draft.salary_range,
            ),
        )
        for draft in drafts
    ]


class SuggestionGenerator:
    def __init__(
        self,
        *,
        identity: IdentityResolver,
        store: ProfileStore,
        provider: LLMProvider | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.identity = identity
        self.store = store
        self.provider = provider or build_provider(self.settings)

    def generate(self, profile: UserProfile, bearer_token: str | None) -> GenerationResult:
        user = self._resolve_user(bearer_token)
        logger.info("Generating job suggestions for user=%s", user.id)

        completion = self.provider.complete_chat(
            model=self.settings.openai_model,
            system=CAREER_ADVISOR_SYSTEM_PROMPT,
            prompt=render_prompt(profile),
            max_tokens=self.settings.suggestion_max_tokens,
            temperature=self.settings.suggestion_temperature,
        )
        drafts = parse_suggestions(completion.content)
        rows = build_suggestions(user.id, drafts)

        try:
            count = self.store.replace_suggestions(user.id, rows)
        except StoreError as exc:
            raise PersistenceError(str(exc)) from exc

        return GenerationResult(count=count)

    def _resolve_user(self, bearer_token: str | None) -> AuthUser:
        if not bearer_token:
            raise Unauthorized("No authorization header")
        try:
            return self.identity.get_user(bearer_token)
        except AuthError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise Unauthorized("Invalid token") from exc
