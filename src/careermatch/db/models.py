from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from careermatch.db.base import Base, TimestampMixin


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    education: Mapped[str | None] = mapped_column(String(40), nullable=True)
    specialization: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    skills: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    interests: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    resume: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Suggestion(TimestampMixin, Base):
    __tablename__ = "job_suggestions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    generation_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    match_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, default="", nullable=False)
    required_skills: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    salary_range: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    location: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    job_type: Mapped[str] = mapped_column(String(40), default="Full-time", nullable=False)
    company: Mapped[str] = mapped_column(String(255), default="Various Companies", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
