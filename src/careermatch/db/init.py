from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import make_url

from careermatch.config import get_settings
from careermatch.db import models  # noqa: F401
from careermatch.db.base import Base
from careermatch.db.session import engine


def ensure_data_directories() -> None:
    settings = get_settings()
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    url = make_url(settings.database_url)
    if url.drivername.startswith("sqlite") and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def init_database() -> dict[str, list[str]]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)
    return {"tables": sorted(Base.metadata.tables)}
