"""Table view model: loaded profiles, query state, visible rows and drawer."""

import logging
from typing import Optional, Sequence

from recruiting_db.profiles import query as q
from recruiting_db.profiles.models import TAG_CATEGORIES, Profile
from recruiting_db.profiles.query import QueryState, SortField
from recruiting_db.profiles.selection import DrawerState
from recruiting_db.storage.store import ProfileStore, load_profiles

logger = logging.getLogger("recruiting_db.browser")


class ProfileTableView:
    """State for one table view, from entry (load) to exit (unmount).

    ``visible`` is recomputed from ``profiles`` and ``query`` after every
    change. Query and drawer state are never shared between views.
    """

    def __init__(self, store: ProfileStore, query: Optional[QueryState] = None):
        self.store = store
        self.profiles: list[Profile] = []
        self.visible: list[Profile] = []
        self.vocabulary: dict[str, list[str]] = {category: [] for category in TAG_CATEGORIES}
        self.query = query or QueryState()
        self.drawer = DrawerState()
        self.loading = True
        self.mounted = True

    def load(self) -> bool:
        """Fetch the full profile list once. Returns False if the result was discarded."""
        return self.receive(load_profiles(self.store))

    def receive(self, profiles: Sequence[Profile]) -> bool:
        if not self.mounted:
            logger.debug("Discarding %d profiles delivered after unmount", len(profiles))
            return False
        self.profiles = list(profiles)
        self.vocabulary = q.tag_vocabulary(self.profiles)
        self.loading = False
        self._recompute()
        return True

    def unmount(self) -> None:
        self.mounted = False

    def _recompute(self) -> None:
        self.visible = q.apply_query(self.profiles, self.query)

    def set_query(self, query: QueryState) -> None:
        self.query = query
        self._recompute()

    def set_search(self, search_query: str) -> None:
        self.set_query(q.with_search(self.query, search_query))

    def toggle_tag(self, category: str, tag: str) -> None:
        self.set_query(q.toggle_tag(self.query, category, tag))

    def toggle_sort(self, sort_field: SortField) -> None:
        self.set_query(q.toggle_sort(self.query, sort_field))

    def clear_filters(self) -> None:
        self.set_query(q.clear_filters(self.query))

    @property
    def has_active_filters(self) -> bool:
        return q.has_active_filters(self.query)

    def find(self, profile_id: str) -> Optional[Profile]:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    def open_profile(self, profile_id: str) -> bool:
        """Open the drawer on a loaded profile. Unknown ids leave it closed."""
        profile = self.find(profile_id)
        if profile is None:
            return False
        self.drawer = self.drawer.open(profile)
        return True

    def close_drawer(self) -> None:
        self.drawer = self.drawer.close()
