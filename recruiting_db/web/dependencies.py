"""Shared FastAPI dependencies: profile store and ingestion proxy."""

from fastapi import Request

from recruiting_db.ingest.proxy import IngestProxy
from recruiting_db.storage.store import ProfileStore


def get_store(request: Request) -> ProfileStore:
    return request.app.state.store


def get_ingest_proxy(request: Request) -> IngestProxy:
    return request.app.state.ingest_proxy
