"""ORM models for direct database access to the profiles table."""

from .base import Base, make_session_factory, normalize_database_url
from .profile_record import ProfileRecord

__all__ = [
    "Base",
    "make_session_factory",
    "normalize_database_url",
    "ProfileRecord",
]
