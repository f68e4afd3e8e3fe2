"""Profile table model: one row per candidate."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from recruiting_db.profiles.models import Profile

from .base import Base


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class ProfileRecord(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_resolved: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_company: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    years_experience: Mapped[float | None] = mapped_column(Float, nullable=True)
    years_at_current_company: Mapped[float | None] = mapped_column(Float, nullable=True)

    skills_tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    focus_area_tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    excellence_tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    domain_tags: Mapped[list | None] = mapped_column(JSON, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_profile(self) -> Profile:
        """Convert DB row to the Profile dataclass used by the views."""
        return Profile.from_dict({
            "id": self.id,
            "linkedin_url": self.linkedin_url,
            "full_name": self.full_name,
            "location_resolved": self.location_resolved,
            "current_company": self.current_company,
            "current_title": self.current_title,
            "years_experience": self.years_experience,
            "years_at_current_company": self.years_at_current_company,
            "skills_tags": self.skills_tags,
            "focus_area_tags": self.focus_area_tags,
            "excellence_tags": self.excellence_tags,
            "domain_tags": self.domain_tags,
            "notes": self.notes,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        })
