"""Search, tag filtering and sorting over the loaded profile list.

Every function here is pure: the visible list is always rebuilt from the
full working set and a QueryState, never patched in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Sequence

from recruiting_db.profiles.models import TAG_CATEGORIES, SEARCH_FIELDS, Profile


class SortField(str, Enum):
    YEARS_EXPERIENCE = "years_experience"
    YEARS_AT_CURRENT_COMPANY = "years_at_current_company"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# QueryState attribute holding the selection for each tag category
SELECTION_FIELDS = {
    "skills_tags": "selected_skills",
    "focus_area_tags": "selected_focus_areas",
    "excellence_tags": "selected_excellence",
    "domain_tags": "selected_domains",
}

# URL parameter name for each tag category
TAG_PARAMS = {
    "skills_tags": "skills",
    "focus_area_tags": "focus",
    "excellence_tags": "excellence",
    "domain_tags": "domain",
}


@dataclass(frozen=True)
class QueryState:
    """Current search, tag selections and sort for one table view."""

    search_query: str = ""
    selected_skills: frozenset[str] = field(default_factory=frozenset)
    selected_focus_areas: frozenset[str] = field(default_factory=frozenset)
    selected_excellence: frozenset[str] = field(default_factory=frozenset)
    selected_domains: frozenset[str] = field(default_factory=frozenset)
    sort_field: Optional[SortField] = None
    sort_direction: SortDirection = SortDirection.ASC

    def selected(self, category: str) -> frozenset[str]:
        return getattr(self, SELECTION_FIELDS[category])


def matches_search(profile: Profile, search_query: str) -> bool:
    """True if any searchable field contains the query, ignoring case."""
    needle = search_query.casefold()
    for name in SEARCH_FIELDS:
        value = getattr(profile, name)
        if value is not None and needle in value.casefold():
            return True
    return False


def matches_tags(profile: Profile, category: str, selected: frozenset[str]) -> bool:
    """True if the profile carries at least one of the selected tags."""
    return any(tag in selected for tag in profile.tags(category))


def sort_value(profile: Profile, sort_field: SortField):
    """Sort key for a numeric field. A missing value sorts as 0, not first or last."""
    value = getattr(profile, sort_field.value)
    if value is None:
        return 0
    return value


def apply_query(profiles: Sequence[Profile], query: QueryState) -> list[Profile]:
    """Return the visible profiles: search, then tag filters, then sort."""
    filtered = list(profiles)

    if query.search_query:
        filtered = [p for p in filtered if matches_search(p, query.search_query)]

    # OR within a category, AND across categories
    for category in TAG_CATEGORIES:
        selected = query.selected(category)
        if selected:
            filtered = [p for p in filtered if matches_tags(p, category, selected)]

    if query.sort_field is not None:
        # sorted() is stable, and reverse=True keeps equal keys in their prior order
        filtered = sorted(
            filtered,
            key=lambda p: sort_value(p, query.sort_field),
            reverse=query.sort_direction == SortDirection.DESC,
        )

    return filtered


def tag_vocabulary(profiles: Iterable[Profile]) -> dict[str, list[str]]:
    """Sorted set of every tag seen per category across the loaded profiles."""
    vocabulary = {category: set() for category in TAG_CATEGORIES}
    for profile in profiles:
        for category in TAG_CATEGORIES:
            vocabulary[category].update(profile.tags(category))
    return {category: sorted(tags) for category, tags in vocabulary.items()}


def with_search(query: QueryState, search_query: str) -> QueryState:
    return replace(query, search_query=search_query)


def toggle_tag(query: QueryState, category: str, tag: str) -> QueryState:
    """Return a new QueryState with the tag added to or removed from its category."""
    selected = query.selected(category)
    if tag in selected:
        selected = selected - {tag}
    else:
        selected = selected | {tag}
    return replace(query, **{SELECTION_FIELDS[category]: selected})


def toggle_sort(query: QueryState, sort_field: SortField) -> QueryState:
    """Clicking the active column flips direction; a new column starts ascending."""
    if query.sort_field == sort_field:
        direction = SortDirection.DESC if query.sort_direction == SortDirection.ASC else SortDirection.ASC
        return replace(query, sort_direction=direction)
    return replace(query, sort_field=sort_field, sort_direction=SortDirection.ASC)


def clear_filters(query: QueryState) -> QueryState:
    """Drop search text and every tag selection. Sorting is kept."""
    return QueryState(sort_field=query.sort_field, sort_direction=query.sort_direction)


def has_active_filters(query: QueryState) -> bool:
    return bool(query.search_query) or any(query.selected(c) for c in TAG_CATEGORIES)


def parse_query_params(params) -> QueryState:
    """Build a QueryState from URL query parameters.

    ``params`` is anything with ``get`` and ``getlist`` (starlette's
    QueryParams, werkzeug's MultiDict). Unknown sort values are ignored.
    """
    selections = {}
    for category, param in TAG_PARAMS.items():
        values = [v for v in params.getlist(param) if v]
        selections[SELECTION_FIELDS[category]] = frozenset(values)

    sort_field = None
    raw_sort = params.get("sort") or ""
    try:
        sort_field = SortField(raw_sort)
    except ValueError:
        sort_field = None

    direction = SortDirection.DESC if params.get("dir") == SortDirection.DESC.value else SortDirection.ASC

    return QueryState(
        search_query=(params.get("q") or "").strip(),
        sort_field=sort_field,
        sort_direction=direction,
        **selections,
    )


def query_params(query: QueryState) -> list[tuple[str, str]]:
    """Inverse of parse_query_params, as (name, value) pairs for urlencode."""
    pairs = []
    if query.search_query:
        pairs.append(("q", query.search_query))
    for category, param in TAG_PARAMS.items():
        for tag in sorted(query.selected(category)):
            pairs.append((param, tag))
    if query.sort_field is not None:
        pairs.append(("sort", query.sort_field.value))
        pairs.append(("dir", query.sort_direction.value))
    return pairs
