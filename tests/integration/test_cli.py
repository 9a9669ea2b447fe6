from typer.testing import CliRunner

from careermatch.cli.app import app
from careermatch.db.repositories import ProfileStore
from careermatch.db.session import SessionLocal
from careermatch.types import UserProfile

runner = CliRunner()


def test_init_reports_tables() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert "job_suggestions" in result.output
    assert "profiles" in result.output


def test_profile_show_prints_stored_profile() -> None:
    with SessionLocal() as db:
        ProfileStore(db).upsert_profile("owner-9", UserProfile(name="Linus", skills=["C"]))

    result = runner.invoke(app, ["profile", "show", "--user-id", "owner-9"])
    assert result.exit_code == 0
    assert '"name": "Linus"' in result.output


def test_profile_show_rejects_unknown_user() -> None:
    result = runner.invoke(app, ["profile", "show", "--user-id", "ghost"])
    assert result.exit_code != 0
