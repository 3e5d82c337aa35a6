"""Interface for the presentation side of the collections (Observer Pattern)."""
from abc import ABC, abstractmethod
from typing import Any, Sequence


class ICollectionView(ABC):
    """
    Receives incremental updates for the displayed collection.

    Implemented by whatever renders the flights/bookings lists. Callbacks
    may arrive from a worker thread.
    """

    @abstractmethod
    def render(self, tab: Any, script: Any, items: Sequence[Any]) -> None:
        """
        Apply an edit script for the active tab.

        Args:
            tab: Tab the update belongs to
            script: EditScript against the previously rendered list
            items: The full new list (already reconciled)
        """
        pass

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Report a failure to the user; the displayed list stays as is."""
        pass

    def set_loading(self, loading: bool) -> None:
        """Toggle a loading indicator. Optional."""
        return None

    def show_message(self, message: str) -> None:
        """Show a transient informational message. Optional."""
        return None
