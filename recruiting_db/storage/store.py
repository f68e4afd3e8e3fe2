"""Profile store clients: load all profiles, or exactly one by id."""

import logging
from typing import Optional

import requests

from recruiting_db.config import AppConfig, require_store_credentials
from recruiting_db.errors import AmbiguousResult, NotFound, RecruitingDBError, StoreUnavailable
from recruiting_db.profiles.models import Profile
from recruiting_db.utils.http_client import create_session

logger = logging.getLogger("recruiting_db.store")


class ProfileStore:
    """Read-only source of profile records."""

    def fetch_all(self) -> list[Profile]:
        """All profiles, newest first (created_at descending)."""
        raise NotImplementedError

    def fetch_one(self, profile_id: str) -> Profile:
        """The single profile with this id. Raises NotFound or AmbiguousResult."""
        raise NotImplementedError


def single_row(rows: list, profile_id: str):
    """Return the only row, or raise when the match count is not exactly one."""
    if not rows:
        raise NotFound(f"No profile with id {profile_id}")
    if len(rows) > 1:
        raise AmbiguousResult(f"{len(rows)} profiles match id {profile_id}")
    return rows[0]


class RestProfileStore(ProfileStore):
    """Reads the profiles table through the managed database's REST API."""

    def __init__(self, config: AppConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or create_session()

    def _endpoint(self) -> str:
        return f"{self.config.store.url.rstrip('/')}/rest/v1/{self.config.store.table}"

    def _headers(self) -> dict:
        key = self.config.store.anon_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
        }

    def _get_rows(self, params: dict) -> list:
        require_store_credentials(self.config)
        try:
            response = self.session.get(
                self._endpoint(),
                params=params,
                headers=self._headers(),
                timeout=self.config.store.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise StoreUnavailable(f"Profile store request failed: {e}") from e
        except ValueError as e:
            raise StoreUnavailable(f"Profile store returned invalid JSON: {e}") from e

        if not isinstance(rows, list):
            raise StoreUnavailable(f"Expected a list of rows, got {type(rows).__name__}")
        return rows

    def fetch_all(self) -> list[Profile]:
        rows = self._get_rows({"select": "*", "order": "created_at.desc"})
        profiles = [Profile.from_dict(row) for row in rows]
        logger.info("Loaded %d profiles from REST store", len(profiles))
        return profiles

    def fetch_one(self, profile_id: str) -> Profile:
        rows = self._get_rows({"select": "*", "id": f"eq.{profile_id}"})
        return Profile.from_dict(single_row(rows, profile_id))


def create_store(config: AppConfig) -> ProfileStore:
    """Build the store client selected by ``store.backend``."""
    backend = config.store.backend
    if backend == "rest":
        return RestProfileStore(config)
    if backend == "sql":
        from recruiting_db.storage.sql_store import SqlProfileStore
        return SqlProfileStore(config.store.database_url)
    raise ValueError(f"Unknown store backend: {backend}")


def load_profiles(store: ProfileStore) -> list[Profile]:
    """Fetch every profile, falling back to an empty list if the store fails.

    Views call this instead of ``fetch_all`` so an outage renders as
    "0 results" rather than an error page.
    """
    try:
        return store.fetch_all()
    except (RecruitingDBError, ValueError) as e:
        logger.error("Error fetching profiles: %s", e)
        return []
