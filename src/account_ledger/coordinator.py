"""Cross-widget refresh hooks invoked after successful mutations."""

from __future__ import annotations

from typing import Protocol


class AppCoordinator(Protocol):
    """Refreshes sibling widgets once the backend confirmed a mutation."""

    def refresh_all(self) -> None:
        """Reload every widget (e.g. after an account was deleted)."""

    def refresh_current(self) -> None:
        """Reload the current page and the account balances."""
