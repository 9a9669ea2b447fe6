from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from careermatch.api.deps import get_db, get_generator, get_identity_gateway
from careermatch.config import get_settings
from careermatch.core.generator import SuggestionGenerator
from careermatch.db.repositories import ProfileStore
from careermatch.errors import AuthError, GenerationError, StoreError
from careermatch.identity.gateway import IdentityGateway
from careermatch.types import EDUCATION_LABELS, UserProfile, add_unique, remove_item
from careermatch.web.mock_data import LEARNING_COURSES, MOCK_JOBS, SKILL_GAPS
from careermatch.web.state import SessionTracker, ViewState, navigate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}


def _tracker(request: Request, identity: IdentityGateway) -> SessionTracker:
    tracker = SessionTracker(identity)
    token = request.cookies.get(get_settings().session_cookie_name)
    if token:
        try:
            identity.restore_session(token)
        except AuthError as exc:
            logger.info("Discarding stale session cookie: %s", exc)
    return tracker


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
def landing(request: Request, identity: IdentityGateway = Depends(get_identity_gateway)) -> HTMLResponse:
    state = _tracker(request, identity).state
    return templates.TemplateResponse(request, "landing.html", {"state": state})


@router.get("/auth", response_class=HTMLResponse)
def auth_page(
    request: Request,
    tab: str = "login",
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> Response:
    state = _tracker(request, identity).state
    if state.is_authenticated:
        return _redirect("/profile")
    return templates.TemplateResponse(request, "auth.html", {"state": state, "tab": tab})


@router.post("/auth/signin")
def web_sign_in(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> Response:
    tracker = SessionTracker(identity)
    try:
        session = identity.sign_in(email, password)
    except AuthError as exc:
        return templates.TemplateResponse(
            request,
            "auth.html",
            {"state": tracker.state, "tab": "login", "error": exc.message},
            status_code=400,
        )

    settings = get_settings()
    response = _redirect(f"/{tracker.state.step}")
    response.set_cookie(
        settings.session_cookie_name,
        session.access_token,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.post("/auth/signup", response_class=HTMLResponse)
def web_sign_up(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    identity: IdentityGateway = Depends(get_identity_gateway),
) -> HTMLResponse:
    context: dict[str, object] = {"state": ViewState(step="auth"), "tab": "signup"}
    try:
        identity.sign_up(email, password, name)
    except AuthError as exc:
        context["error"] = exc.message
        return templates.TemplateResponse(request, "auth.html", context, status_code=400)

    context["tab"] = "login"
    context["notice"] = "Account created! Please check your email to verify your account."
    return templates.TemplateResponse(request, "auth.html", context)


@router.get("/profile", response_class=HTMLResponse)
def profile_page(
    request: Request,
    identity: IdentityGateway = Depends(get_identity_gateway),
    db: Session = Depends(get_db),
) -> Response:
    state = navigate(_tracker(request, identity).state, "profile")
    if state.step != "profile":
        return _redirect("/auth")

    profile = ProfileStore(db).get_profile(state.session.user.id)
    if profile is None:
        profile = UserProfile(name=state.session.user.display_name)
    return _render_profile(request, state, profile)


@router.post("/profile", response_class=HTMLResponse)
def profile_submit(
    request: Request,
    action: str = Form(""),
    name: str = Form(""),
    education: str = Form(""),
    specialization: str = Form(""),
    skills: list[str] = Form([]),
    interests: list[str] = Form([]),
    new_skill: str = Form(""),
    new_interest: str = Form(""),
    remove_skill: str = Form(""),
    remove_interest: str = Form(""),
    resume: str = Form(""),
    resume_file: UploadFile | None = File(None),
    identity: IdentityGateway = Depends(get_identity_gateway),
    generator: SuggestionGenerator = Depends(get_generator),
    db: Session = Depends(get_db),
) -> Response:
    state = navigate(_tracker(request, identity).state, "profile")
    if state.step != "profile":
        return _redirect("/auth")

    if remove_skill:
        skills = remove_item(skills, remove_skill)
    elif remove_interest:
        interests = remove_item(interests, remove_interest)
    elif action in ("add", "add_skill", "add_interest"):
        if action != "add_interest":
            skills = add_unique(skills, new_skill)
        if action != "add_skill":
            interests = add_unique(interests, new_interest)

    if resume_file is not None and resume_file.filename:
        try:
            resume = _store_resume(state.session.user.id, resume_file)
        except ValueError as exc:
            profile = UserProfile(
                name=name, specialization=specialization, skills=skills, interests=interests, resume=resume
            )
            return _render_profile(request, state, profile, error=str(exc))

    try:
        profile = UserProfile(
            name=name,
            education=education or None,
            specialization=specialization,
            skills=skills,
            interests=interests,
            resume=resume,
        )
    except ValueError:
        profile = UserProfile(
            name=name, specialization=specialization, skills=skills, interests=interests, resume=resume
        )
        return _render_profile(request, state, profile, error="Please choose an education level.")

    if action != "submit":
        return _render_profile(request, state, profile)

    if not profile.is_complete:
        return _render_profile(
            request, state, profile, error="Name, education and at least one skill are required."
        )

    try:
        ProfileStore(db).upsert_profile(state.session.user.id, profile)
    except StoreError as exc:
        return _render_profile(request, state, profile, error=f"Error saving profile: {exc}")

    notice = "Profile saved! Your personalized job suggestions are ready."
    try:
        generator.generate(profile, state.session.access_token)
    except GenerationError as exc:
        logger.warning("Suggestion generation failed for user=%s: %s", state.session.user.id, exc)
        notice = f"Profile saved, but job suggestions could not be refreshed: {exc}"

    return _redirect(f"/dashboard?{urlencode({'notice': notice})}")


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    notice: str = "",
    identity: IdentityGateway = Depends(get_identity_gateway),
    db: Session = Depends(get_db),
) -> Response:
    state = navigate(_tracker(request, identity).state, "dashboard")
    if state.step != "dashboard":
        return _redirect("/auth")

    store = ProfileStore(db)
    profile = store.get_profile(state.session.user.id)
    if profile is None:
        return _redirect("/profile")

    suggestions = store.list_suggestions(state.session.user.id)
    average = round(sum(item.match_percentage for item in suggestions) / len(suggestions)) if suggestions else 0
    stats = [
        {"title": "Profile Completeness", "value": f"{_completeness(profile)}%"},
        {"title": "Job Matches", "value": len(suggestions) or len(MOCK_JOBS)},
        {"title": "Avg. Match Rate", "value": f"{average}%" if suggestions else "78%"},
        {"title": "Saved Jobs", "value": 0},
    ]
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "state": state,
            "profile": profile,
            "education_label": EDUCATION_LABELS.get(profile.education or "", "Not specified"),
            "suggestions": suggestions,
            "mock_jobs": MOCK_JOBS,
            "courses": LEARNING_COURSES,
            "skill_gaps": SKILL_GAPS,
            "stats": stats,
            "notice": notice,
        },
    )


@router.post("/signout")
def sign_out(request: Request, identity: IdentityGateway = Depends(get_identity_gateway)) -> Response:
    _tracker(request, identity)
    identity.sign_out()
    response = _redirect("/")
    response.delete_cookie(get_settings().session_cookie_name)
    return response


def _render_profile(
    request: Request,
    state,
    profile: UserProfile,
    *,
    error: str | None = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "profile.html",
        {
            "state": state,
            "profile": profile,
            "education_options": EDUCATION_LABELS,
            "error": error,
        },
        status_code=400 if error else 200,
    )


def _completeness(profile: UserProfile) -> int:
    fields = [
        bool(profile.name.strip()),
        bool(profile.education),
        bool(profile.specialization.strip()),
        bool(profile.skills),
        bool(profile.interests),
    ]
    return round(100 * sum(fields) / len(fields))


def _store_resume(owner_id: str, upload: UploadFile) -> str:
    settings = get_settings()
    filename = Path(upload.filename or "").name
    if Path(filename).suffix.lower() not in RESUME_EXTENSIONS:
        raise ValueError("Resume must be a PDF or Word document.")

    content = upload.file.read(settings.max_resume_bytes + 1)
    if len(content) > settings.max_resume_bytes:
        raise ValueError("Resume file is too large.")

    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    target = settings.upload_dir / f"{owner_id}-{filename}"
    target.write_bytes(content)
    logger.info("Stored resume for user=%s at %s", owner_id, target)
    return str(target)
