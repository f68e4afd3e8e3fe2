"""Ingestion proxy: forwards profile ingestion requests to the remote function."""

import logging
from typing import Any, Optional

import requests

from recruiting_db.config import AppConfig, require_store_credentials
from recruiting_db.errors import DownstreamFailure, ValidationFailed
from recruiting_db.utils.http_client import create_session

logger = logging.getLogger("recruiting_db.ingest")

REQUIRED_FIELDS = ("linkedin_url", "raw_json", "canonical_json")
MISSING_FIELDS_MESSAGE = "Missing required fields: " + ", ".join(REQUIRED_FIELDS)


def _is_missing(value: Any) -> bool:
    # Falsy scalars (and NaN) are missing; an empty object or list is present
    if isinstance(value, (dict, list)):
        return False
    return not value or value != value


def validate_payload(body: Any) -> dict:
    """Return the forwardable payload, or raise ValidationFailed."""
    if not isinstance(body, dict):
        raise ValidationFailed(MISSING_FIELDS_MESSAGE)
    if any(_is_missing(body.get(name)) for name in REQUIRED_FIELDS):
        raise ValidationFailed(MISSING_FIELDS_MESSAGE)
    return {name: body[name] for name in REQUIRED_FIELDS}


class IngestProxy:
    """One POST per call, no retry. Downstream errors are raised with their status."""

    def __init__(self, config: AppConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or create_session()

    def function_url(self) -> str:
        path = self.config.ingest.function_path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.config.store.url.rstrip('/')}{path}"

    def forward(self, body: Any) -> Any:
        payload = validate_payload(body)
        require_store_credentials(self.config)

        key = self.config.store.anon_key
        logger.info("Forwarding ingestion for %s", payload["linkedin_url"])
        response = self.session.post(
            self.function_url(),
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {key}",
                "apikey": key,
            },
            timeout=self.config.ingest.timeout,
        )

        if not response.ok:
            logger.warning("Ingestion function returned %d for %s", response.status_code, payload["linkedin_url"])
            raise DownstreamFailure(
                response.status_code,
                f"Supabase Edge Function error: {response.text}",
            )

        return response.json()
