from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn

from careermatch.api.app import create_app
from careermatch.config import get_settings
from careermatch.core.generator import SuggestionGenerator
from careermatch.db.init import init_database
from careermatch.db.repositories import ProfileStore
from careermatch.db.session import session_scope
from careermatch.errors import AuthError, GenerationError
from careermatch.identity.gateway import IdentityGateway
from careermatch.logging_config import configure_logging
from careermatch.types import UserProfile

app = typer.Typer(help="CareerMatch CLI")
profile_app = typer.Typer(help="Inspect and edit stored profiles")
auth_app = typer.Typer(help="Identity provider commands")

app.add_typer(profile_app, name="profile")
app.add_typer(auth_app, name="auth")


@app.command("init")
def init_cmd() -> None:
    """Create the profile and suggestion tables."""
    configure_logging()
    result = init_database()
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(None, "--host"),
    port: int = typer.Option(None, "--port"),
) -> None:
    configure_logging()
    settings = get_settings()
    uvicorn.run(create_app(), host=host or settings.app_host, port=port or settings.app_port)


@auth_app.command("signup")
def auth_signup(
    email: str = typer.Option(..., "--email"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    name: str = typer.Option("", "--name"),
) -> None:
    configure_logging()
    try:
        with IdentityGateway() as identity:
            user = identity.sign_up(email, password, name)
    except AuthError as exc:
        typer.echo(f"Sign-up failed: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps({"created": True, "user_id": user.id if user else None}, indent=2))
    typer.echo("Check your email to verify your account.")


@profile_app.command("show")
def profile_show(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    init_database()
    with session_scope() as db:
        store = ProfileStore(db)
        profile = store.get_profile(user_id)
        if profile is None:
            raise typer.BadParameter(f"no profile stored for user {user_id}")
        payload = {
            "profile": profile.model_dump(),
            "suggestions": [item.model_dump(mode="json") for item in store.list_suggestions(user_id)],
        }
    typer.echo(json.dumps(payload, indent=2))


@profile_app.command("suggest")
def profile_suggest(
    email: str = typer.Option(..., "--email"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    file: Path = typer.Option(..., "--file", exists=True, readable=True),
) -> None:
    """Sign in, store the profile from FILE and refresh its job suggestions."""
    configure_logging()
    init_database()
    profile = UserProfile.model_validate(json.loads(file.read_text(encoding="utf-8")))

    with IdentityGateway() as identity:
        try:
            session = identity.sign_in(email, password)
        except AuthError as exc:
            typer.echo(f"Sign-in failed: {exc.message}", err=True)
            raise typer.Exit(code=1) from exc

        with session_scope() as db:
            store = ProfileStore(db)
            store.upsert_profile(session.user.id, profile)
            generator = SuggestionGenerator(identity=identity, store=store)
            try:
                result = generator.generate(profile, session.access_token)
            except GenerationError as exc:
                typer.echo(f"{type(exc).__name__}: {exc}", err=True)
                raise typer.Exit(code=1) from exc
            finally:
                identity.sign_out()

    typer.echo(json.dumps({"success": True, "suggestions": result.count}, indent=2))


if __name__ == "__main__":
    app()
