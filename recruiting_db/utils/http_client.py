"""HTTP session with retry logic for the store and ingestion calls."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

USER_AGENT = "recruiting-db/0.1"


def create_session(max_retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Create a requests session that retries idempotent GETs only.

    POSTs (ingestion) are never retried: a failed forward is reported to the
    caller as-is.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    })

    return session
