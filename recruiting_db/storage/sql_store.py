"""Profile store reading the profiles table directly over SQLAlchemy."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from recruiting_db.errors import ConfigMissing, StoreUnavailable
from recruiting_db.models import ProfileRecord, make_session_factory
from recruiting_db.profiles.models import Profile

from .store import ProfileStore, single_row

logger = logging.getLogger("recruiting_db.store")


class SqlProfileStore(ProfileStore):
    """Same contract as the REST store, backed by a database URL.

    The engine is created on first use so a missing DATABASE_URL only
    fails the request that needs it.
    """

    def __init__(self, database_url: str = "", session_factory: Optional[sessionmaker] = None):
        self.database_url = database_url
        self._session_factory = session_factory

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            if not self.database_url:
                raise ConfigMissing("Missing database configuration: DATABASE_URL")
            try:
                self._session_factory = make_session_factory(self.database_url)
            except (SQLAlchemyError, ImportError) as e:
                # Unparseable URL or missing DB driver
                raise StoreUnavailable(f"Cannot create database engine: {e}") from e
        return self._session_factory

    def fetch_all(self) -> list[Profile]:
        db = self.session_factory()
        try:
            rows = db.query(ProfileRecord).order_by(ProfileRecord.created_at.desc()).all()
            profiles = [row.to_profile() for row in rows]
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"Profile query failed: {e}") from e
        finally:
            db.close()

        logger.info("Loaded %d profiles from SQL store", len(profiles))
        return profiles

    def fetch_one(self, profile_id: str) -> Profile:
        db = self.session_factory()
        try:
            rows = db.query(ProfileRecord).filter(ProfileRecord.id == profile_id).limit(2).all()
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"Profile query failed: {e}") from e
        finally:
            db.close()

        return single_row(rows, profile_id).to_profile()
