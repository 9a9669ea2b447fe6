from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from careermatch.config import get_settings
from careermatch.core.generator import SuggestionGenerator
from careermatch.db.repositories import ProfileStore
from careermatch.db.session import get_db_session
from careermatch.errors import AuthError
from careermatch.identity.gateway import IdentityGateway
from careermatch.llm.providers import LLMProvider, build_provider
from careermatch.types import AuthUser


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_identity_gateway() -> Generator[IdentityGateway, None, None]:
    gateway = IdentityGateway(get_settings())
    try:
        yield gateway
    finally:
        gateway.close()


@lru_cache(maxsize=1)
def get_llm_provider() -> LLMProvider:
    return build_provider(get_settings())


def get_generator(
    db: Session = Depends(get_db),
    identity: IdentityGateway = Depends(get_identity_gateway),
    provider: LLMProvider = Depends(get_llm_provider),
) -> SuggestionGenerator:
    return SuggestionGenerator(
        identity=identity,
        store=ProfileStore(db),
        provider=provider,
        settings=get_settings(),
    )


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user(
    authorization: str | None = Header(default=None),
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> AuthUser:
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="No authorization header")
    try:
        return identity.get_user(token)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
