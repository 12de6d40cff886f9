"""
Application state owned by the main window.

Holds the currently displayed users and the selected tab, and arbitrates
between overlapping folder loads: every load gets a ticket and only the
newest ticket may replace the displayed data.  A stale result is
dropped, never merged; a failed load leaves the previous data in place.
"""

from typing import Dict, List, Optional, Sequence

from .data_model import UserMeasurementSet


class AppState:
    """Loaded users keyed by pair index, plus the selected-tab cursor."""

    def __init__(self):
        self._users: Dict[int, UserMeasurementSet] = {}
        self._selected_index: Optional[int] = None
        self._latest_ticket = 0
        self._pending_ticket: Optional[int] = None
        self.root: Optional[str] = None

    # ── Load lifecycle ───────────────────────────────────────────────

    def begin_load(self) -> int:
        """Start a new load and return its ticket.

        Any load still running becomes stale.
        """
        self._latest_ticket += 1
        self._pending_ticket = self._latest_ticket
        return self._latest_ticket

    def is_current(self, ticket: int) -> bool:
        return ticket == self._pending_ticket

    @property
    def is_loading(self) -> bool:
        return self._pending_ticket is not None

    def complete_load(
        self,
        ticket: int,
        users: Sequence[UserMeasurementSet],
        root: Optional[str] = None,
    ) -> bool:
        """Replace the displayed users if *ticket* is still current.

        Returns ``False`` (and changes nothing) for a superseded load.
        """
        if not self.is_current(ticket):
            return False
        self._pending_ticket = None
        self._users = {u.index: u for u in users}
        self.root = root
        # Keep the selected user across reloads when it still exists
        if self._selected_index not in self._users:
            self._selected_index = min(self._users) if self._users else None
        return True

    def fail_load(self, ticket: int) -> bool:
        """Finish a failed load; previously loaded users are kept."""
        if not self.is_current(ticket):
            return False
        self._pending_ticket = None
        return True

    # ── Queries / cursor ─────────────────────────────────────────────

    @property
    def users(self) -> List[UserMeasurementSet]:
        """Loaded users ordered by pair index."""
        return [self._users[i] for i in sorted(self._users)]

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_index

    @property
    def selected_user(self) -> Optional[UserMeasurementSet]:
        if self._selected_index is None:
            return None
        return self._users.get(self._selected_index)

    def select(self, index: int) -> bool:
        """Move the cursor to user *index*; unknown indices are ignored."""
        if index not in self._users:
            return False
        self._selected_index = index
        return True
