"""JSON API: profile queries and the ingestion pass-through."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from recruiting_db.browser import ProfileTableView
from recruiting_db.errors import ConfigMissing, DownstreamFailure, ValidationFailed
from recruiting_db.ingest.proxy import IngestProxy
from recruiting_db.profiles.query import parse_query_params
from recruiting_db.profiles.selection import DetailStatus, load_detail
from recruiting_db.storage.store import ProfileStore

from .dependencies import get_ingest_proxy, get_store

logger = logging.getLogger("recruiting_db.web")

router = APIRouter(prefix="/api")


@router.get("/profiles")
def list_profiles(request: Request, store: ProfileStore = Depends(get_store)):
    view = ProfileTableView(store, query=parse_query_params(request.query_params))
    view.load()
    view.unmount()
    return {
        "total": len(view.profiles),
        "count": len(view.visible),
        "profiles": [p.to_dict() for p in view.visible],
        "tags": view.vocabulary,
    }


@router.get("/profiles/{profile_id:path}")
def get_profile(profile_id: str, store: ProfileStore = Depends(get_store)):
    detail = load_detail(store, profile_id)
    if detail.status == DetailStatus.NOT_FOUND:
        return JSONResponse({"error": "Profile not found"}, status_code=404)
    return detail.profile.to_dict()


@router.post("/ingest")
async def ingest(request: Request, proxy: IngestProxy = Depends(get_ingest_proxy)):
    try:
        body = await request.json()
        data = await run_in_threadpool(proxy.forward, body)
    except ValidationFailed as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except ConfigMissing as e:
        logger.error("Ingest rejected: %s", e)
        return JSONResponse({"error": "Missing Supabase configuration"}, status_code=500)
    except DownstreamFailure as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)
    except Exception:
        logger.exception("Error in ingest endpoint")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    return JSONResponse(data, status_code=200)
