"""Profile pages: the filterable table with its drawer, and the detail page."""

from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Request

from recruiting_db.browser import ProfileTableView
from recruiting_db.profiles.query import (
    SortField,
    clear_filters,
    parse_query_params,
    query_params,
    toggle_sort,
)
from recruiting_db.profiles.selection import DetailStatus, load_detail
from recruiting_db.storage.store import ProfileStore

from .dependencies import get_store

router = APIRouter()


def _url(pairs: list[tuple[str, str]]) -> str:
    return "/?" + urlencode(pairs) if pairs else "/"


@router.get("/")
def profile_table(request: Request, store: ProfileStore = Depends(get_store)):
    view = ProfileTableView(store, query=parse_query_params(request.query_params))
    view.load()

    selected = request.query_params.get("selected")
    if selected:
        view.open_profile(selected)

    base_pairs = query_params(view.query)
    links = {
        "sort": {f.value: _url(query_params(toggle_sort(view.query, f))) for f in SortField},
        "clear": _url(query_params(clear_filters(view.query))),
        "close_drawer": _url(base_pairs),
        "open": {p.id: _url(base_pairs + [("selected", p.id)]) for p in view.visible},
        "detail": {p.id: "/profile/" + quote(p.id, safe="") for p in view.visible},
    }

    try:
        return request.app.state.templates.TemplateResponse("profiles/index.html", {
            "request": request,
            "view": view,
            "query": view.query,
            "links": links,
        })
    finally:
        view.unmount()


@router.get("/profile/{profile_id:path}")
def profile_detail(profile_id: str, request: Request, store: ProfileStore = Depends(get_store)):
    detail = load_detail(store, profile_id)
    if detail.status == DetailStatus.NOT_FOUND:
        return request.app.state.templates.TemplateResponse(
            "profiles/not_found.html", {"request": request, "profile_id": profile_id}, status_code=404
        )
    return request.app.state.templates.TemplateResponse("profiles/detail.html", {
        "request": request,
        "profile": detail.profile,
    })
