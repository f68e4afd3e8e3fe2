"""Shared fixtures: a fixed working set of profiles and in-memory stores."""

from unittest.mock import MagicMock

import pytest
import requests

from recruiting_db.config import AppConfig, IngestConfig, StoreConfig
from recruiting_db.errors import StoreUnavailable
from recruiting_db.profiles.models import Profile
from recruiting_db.storage.store import ProfileStore, single_row

# Newest first, the order the store returns them in
PROFILE_ROWS = [
    {
        "id": "p1",
        "linkedin_url": "https://www.linkedin.com/in/ada",
        "full_name": "Ada Lovelace",
        "location_resolved": "London, UK",
        "current_company": "Analytical Engines",
        "current_title": "Lead Engineer",
        "years_experience": 12,
        "years_at_current_company": 3,
        "skills_tags": ["python", "math"],
        "focus_area_tags": ["backend"],
        "excellence_tags": ["founder"],
        "domain_tags": ["fintech"],
        "notes": "Strong on numerical methods.",
        "created_at": "2024-05-05T10:00:00+00:00",
        "updated_at": "2024-05-06T10:00:00+00:00",
    },
    {
        "id": "p2",
        "linkedin_url": None,
        "full_name": "Grace Hopper",
        "location_resolved": "New York, NY",
        "current_company": "US Navy",
        "current_title": "Rear Admiral",
        "years_experience": 40,
        "years_at_current_company": None,
        "skills_tags": ["cobol", "compilers"],
        "focus_area_tags": ["languages"],
        "excellence_tags": None,
        "domain_tags": ["defense"],
        "notes": None,
        "created_at": "2024-05-04T10:00:00+00:00",
        "updated_at": None,
    },
    {
        "id": "p3",
        "linkedin_url": "https://www.linkedin.com/in/linus",
        "full_name": "Linus Torvalds",
        "location_resolved": "Portland, OR",
        "current_company": "Linux Foundation",
        "current_title": "Fellow",
        "years_experience": None,
        "years_at_current_company": 20,
        "skills_tags": ["c", "git"],
        "focus_area_tags": ["systems"],
        "excellence_tags": ["founder", "oss"],
        "domain_tags": None,
        "notes": None,
        "created_at": "2024-05-03T10:00:00+00:00",
        "updated_at": None,
    },
    {
        "id": "p4",
        "linkedin_url": None,
        "full_name": None,
        "location_resolved": None,
        "current_company": "Acme Robotics",
        "current_title": "Engineer",
        "years_experience": 5,
        "years_at_current_company": 5,
        "skills_tags": ["python"],
        "focus_area_tags": None,
        "excellence_tags": None,
        "domain_tags": ["robotics"],
        "notes": None,
        "created_at": "2024-05-02T10:00:00+00:00",
        "updated_at": None,
    },
    {
        "id": "p5",
        "linkedin_url": "https://www.linkedin.com/in/margaret",
        "full_name": "Margaret Hamilton",
        "location_resolved": "Boston, MA",
        "current_company": "MIT",
        "current_title": "Director of Software Engineering",
        "years_experience": 12,
        "years_at_current_company": None,
        "skills_tags": None,
        "focus_area_tags": ["flight software"],
        "excellence_tags": ["apollo"],
        "domain_tags": ["aerospace", "defense"],
        "notes": None,
        "created_at": "2024-05-01T10:00:00+00:00",
        "updated_at": None,
    },
]


class FakeStore(ProfileStore):
    """In-memory store that counts calls and can be told to fail."""

    def __init__(self, profiles=None, fail=False):
        self.profiles = list(profiles or [])
        self.fail = fail
        self.fetch_all_calls = 0
        self.fetch_one_calls = 0

    def fetch_all(self):
        self.fetch_all_calls += 1
        if self.fail:
            raise StoreUnavailable("connection refused")
        return list(self.profiles)

    def fetch_one(self, profile_id):
        self.fetch_one_calls += 1
        if self.fail:
            raise StoreUnavailable("connection refused")
        return single_row([p for p in self.profiles if p.id == profile_id], profile_id)


@pytest.fixture
def profile_rows():
    return [dict(row) for row in PROFILE_ROWS]


@pytest.fixture
def profiles():
    return [Profile.from_dict(row) for row in PROFILE_ROWS]


@pytest.fixture
def store(profiles):
    return FakeStore(profiles)


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def failing_store():
    return FakeStore(fail=True)


@pytest.fixture
def config():
    """Config with store credentials set; never touches the environment."""
    return AppConfig(
        store=StoreConfig(url="https://proj.supabase.co", anon_key="anon-key"),
        ingest=IngestConfig(),
    )


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""

    def _make(json_data=None, status=200, text=""):
        response = MagicMock()
        response.status_code = status
        response.ok = status < 400
        response.text = text
        response.json.return_value = json_data
        if status >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
        return response

    return _make
