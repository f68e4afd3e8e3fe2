"""Profile data model."""

from dataclasses import dataclass, fields
from typing import Any, Optional, Union

Number = Union[int, float]

TAG_CATEGORIES = ("skills_tags", "focus_area_tags", "excellence_tags", "domain_tags")

TAG_LABELS = {
    "skills_tags": "Skills",
    "focus_area_tags": "Focus Areas",
    "excellence_tags": "Excellence",
    "domain_tags": "Domains",
}

# Free-text fields matched by the table search box
SEARCH_FIELDS = ("full_name", "current_company", "current_title", "location_resolved")

NUMERIC_FIELDS = ("years_experience", "years_at_current_company")


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _to_number(value: Any) -> Optional[Number]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


def _to_tags(value: Any) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Tag column must be a list, got {type(value).__name__}")
    seen = []
    for tag in value:
        tag = str(tag)
        if tag not in seen:
            seen.append(tag)
    return tuple(seen)


@dataclass(frozen=True)
class Profile:
    """One candidate record as returned by the store. Read-only."""

    id: str
    linkedin_url: Optional[str] = None
    full_name: Optional[str] = None
    location_resolved: Optional[str] = None
    current_company: Optional[str] = None
    current_title: Optional[str] = None
    years_experience: Optional[Number] = None
    years_at_current_company: Optional[Number] = None
    skills_tags: Optional[tuple[str, ...]] = None
    focus_area_tags: Optional[tuple[str, ...]] = None
    excellence_tags: Optional[tuple[str, ...]] = None
    domain_tags: Optional[tuple[str, ...]] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Build a Profile from a store row, ignoring unknown columns."""
        if data.get("id") is None:
            raise ValueError("Profile row has no id")

        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if f.name in TAG_CATEGORIES:
                values[f.name] = _to_tags(raw)
            elif f.name in NUMERIC_FIELDS:
                values[f.name] = _to_number(raw)
            else:
                values[f.name] = _to_text(raw)
        return cls(**values)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in TAG_CATEGORIES and value is not None:
                value = list(value)
            d[f.name] = value
        return d

    def tags(self, category: str) -> tuple[str, ...]:
        """Tags of one category; empty when the profile has none."""
        if category not in TAG_CATEGORIES:
            raise KeyError(f"Unknown tag category: {category}")
        return getattr(self, category) or ()
