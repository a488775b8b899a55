"""Database models for the application."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from goalsync.database import Base

DEFAULT_NAME = "Architect"
DEFAULT_COUNTRY = "Unknown"

# Saved collections tracked on a goal, reported by the debug summary
GOAL_COLLECTIONS = (
    "savedCurriculum",
    "savedCourses",
    "savedFeed",
    "savedProducts",
    "savedVideos",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User record.

    Profile and learning state live in ``document``, a schema-flexible JSON
    object keyed by the camelCase field names clients sync. The password hash
    is kept in its own column so it never leaks into the document.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(Text)
    document: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    @classmethod
    def new(
        cls,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
        country: Optional[str] = None,
    ) -> "User":
        """Build a freshly registered user with default profile state."""
        created_at = _utcnow()
        return cls(
            email=email,
            password_hash=password_hash,
            created_at=created_at,
            updated_at=created_at,
            document={
                "name": name or DEFAULT_NAME,
                "country": country or DEFAULT_COUNTRY,
                "createdAt": int(created_at.timestamp() * 1000),
                "allGoals": [],
            },
        )

    def apply_patch(self, patch: dict[str, Any]) -> None:
        """Shallow ``$set`` merge: each key replaces the stored field wholesale."""
        if not patch:
            return
        # A new dict so the JSON column registers the change
        self.document = {**(self.document or {}), **patch}
        self.updated_at = _utcnow()

    def to_public_dict(self) -> dict[str, Any]:
        """Stripped user object: everything except the credential hash."""
        public = dict(self.document or {})
        public.pop("password", None)
        public["id"] = self.id
        public["email"] = self.email
        return public

    def goal_summary(self) -> dict[str, Any]:
        """Field-presence and length summary of the stored goal data."""
        document = self.document or {}
        goal = document.get("goal")
        all_goals = document.get("allGoals")

        collections = {}
        for field in GOAL_COLLECTIONS:
            value = goal.get(field) if isinstance(goal, dict) else None
            collections[field] = len(value) if isinstance(value, list) else None

        return {
            "email": self.email,
            "hasGoal": isinstance(goal, dict),
            "goalTitle": goal.get("title") if isinstance(goal, dict) else None,
            "goal": collections,
            "allGoalsCount": len(all_goals) if isinstance(all_goals, list) else 0,
            "fields": sorted(document.keys()),
        }
