from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from careermatch.api.deps import get_current_user, get_db, get_identity_gateway
from careermatch.api.schemas import SessionResponse, SignInRequest, SignUpRequest, SignUpResponse
from careermatch.db.repositories import ProfileStore
from careermatch.errors import AuthError, StoreError
from careermatch.identity.gateway import IdentityGateway
from careermatch.types import AuthUser, JobSuggestion, UserProfile

router = APIRouter(prefix="/api", tags=["api"])


@router.post("/auth/signup", response_model=SignUpResponse)
def sign_up(
    payload: SignUpRequest,
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> SignUpResponse:
    try:
        user = identity.sign_up(payload.email, payload.password, payload.display_name)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code or 400, detail=exc.message) from exc
    return SignUpResponse(
        message="Account created! Please check your email to verify your account.",
        user_id=user.id if user else None,
    )


@router.post("/auth/signin", response_model=SessionResponse)
def sign_in(
    payload: SignInRequest,
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> SessionResponse:
    try:
        session = identity.sign_in(payload.email, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code or 400, detail=exc.message) from exc
    return SessionResponse.model_validate(session.model_dump())


@router.get("/profile", response_model=UserProfile)
def get_profile(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    profile = ProfileStore(db).get_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/profile", response_model=UserProfile)
def put_profile(
    payload: UserProfile,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    store = ProfileStore(db)
    try:
        store.upsert_profile(user.id, payload)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return store.get_profile(user.id) or payload


@router.get("/suggestions", response_model=list[JobSuggestion])
def list_suggestions(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[JobSuggestion]:
    return ProfileStore(db).list_suggestions(user.id)
