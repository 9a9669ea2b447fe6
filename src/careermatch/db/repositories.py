from __future__ import annotations

import logging
import threading
import uuid
import zlib

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careermatch.db.models import Profile, Suggestion
from careermatch.errors import StoreError
from careermatch.types import JobSuggestion, UserProfile

logger = logging.getLogger(__name__)

OWNER_LOCK_STRIPES = 64
_OWNER_LOCKS = tuple(threading.Lock() for _ in range(OWNER_LOCK_STRIPES))


def owner_lock(owner_id: str) -> threading.Lock:
    # Fixed pool: distinct owners may share a stripe, the same owner always maps to one lock.
    return _OWNER_LOCKS[zlib.crc32(owner_id.encode("utf-8")) % OWNER_LOCK_STRIPES]


class ProfileStore:
    def __init__(self, session: Session):
        self.session = session

    def upsert_profile(self, owner_id: str, profile: UserProfile) -> Profile:
        values = {
            "name": profile.name,
            "education": profile.education,
            "specialization": profile.specialization,
            "skills": list(profile.skills),
            "interests": list(profile.interests),
            "resume": profile.resume,
        }
        try:
            existing = self.session.scalar(select(Profile).where(Profile.user_id == owner_id))
            if existing:
                for key, value in values.items():
                    setattr(existing, key, value)
                row = existing
            else:
                row = Profile(user_id=owner_id, **values)
                self.session.add(row)

            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Profile upsert failed user_id=%s error=%s", owner_id, exc)
            raise StoreError("Failed to save profile") from exc
        return row

    def get_profile(self, owner_id: str) -> UserProfile | None:
        row = self.session.scalar(select(Profile).where(Profile.user_id == owner_id))
        if row is None:
            return None
        return UserProfile.model_validate(
            {
                "name": row.name,
                "education": row.education,
                "specialization": row.specialization,
                "skills": row.skills or [],
                "interests": row.interests or [],
                "resume": row.resume,
            }
        )

    def replace_suggestions(self, owner_id: str, suggestions: list[JobSuggestion]) -> int:
        """Swap the owner's suggestion batch for ``suggestions`` in one transaction.

        Calls for the same owner are serialized, so concurrent generations never
        interleave their delete and insert. On failure the previous batch is kept.
        """
        generation_id = str(uuid.uuid4())
        rows = [
            Suggestion(
                user_id=owner_id,
                generation_id=generation_id,
                job_title=item.job_title,
                match_percentage=item.match_percentage,
                reason=item.reason,
                required_skills=list(item.required_skills),
                salary_range=item.salary_range,
                location=item.location,
                job_type=item.job_type,
                company=item.company,
                description=item.description,
            )
            for item in suggestions
        ]

        with owner_lock(owner_id):
            try:
                self.session.execute(delete(Suggestion).where(Suggestion.user_id == owner_id))
                self.session.add_all(rows)
                self.session.commit()
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.error("Suggestion replace failed user_id=%s error=%s", owner_id, exc)
                raise StoreError("Failed to save job suggestions") from exc

        logger.info(
            "Stored %d job suggestions user_id=%s generation_id=%s", len(rows), owner_id, generation_id
        )
        return len(rows)

    def list_suggestions(self, owner_id: str) -> list[JobSuggestion]:
        statement = (
            select(Suggestion)
            .where(Suggestion.user_id == owner_id)
            .order_by(Suggestion.match_percentage.desc(), Suggestion.id.asc())
        )
        return [JobSuggestion.model_validate(row) for row in self.session.scalars(statement).all()]
