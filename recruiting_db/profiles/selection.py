"""Which profile is shown in detail: the table's drawer, or the dedicated page."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from recruiting_db.errors import AmbiguousResult, NotFound, RecruitingDBError
from recruiting_db.profiles.models import Profile

logger = logging.getLogger("recruiting_db.selection")


@dataclass(frozen=True)
class DrawerState:
    profile: Optional[Profile] = None
    is_open: bool = False

    def open(self, profile: Profile) -> "DrawerState":
        return DrawerState(profile=profile, is_open=True)

    def close(self) -> "DrawerState":
        # Flag and reference go together so a closed drawer never shows a stale profile
        return DrawerState()

    @property
    def visible(self) -> bool:
        return self.is_open and self.profile is not None


class DetailStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class DetailState:
    profile_id: str
    status: DetailStatus = DetailStatus.LOADING
    profile: Optional[Profile] = None


def load_detail(store, profile_id: str) -> DetailState:
    """Fetch one profile for the detail page.

    Always a fresh store call, independent of anything the table loaded.
    Every failure ends in the not-found state; nothing is raised.
    """
    try:
        profile = store.fetch_one(profile_id)
    except (NotFound, AmbiguousResult) as e:
        logger.info("Profile %s not found: %s", profile_id, e)
        return DetailState(profile_id=profile_id, status=DetailStatus.NOT_FOUND)
    except (RecruitingDBError, ValueError) as e:
        logger.error("Error fetching profile %s: %s", profile_id, e)
        return DetailState(profile_id=profile_id, status=DetailStatus.NOT_FOUND)

    return DetailState(profile_id=profile_id, status=DetailStatus.READY, profile=profile)
