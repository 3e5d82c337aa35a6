"""Use case coordinating the flights/bookings tabs (Use Case Pattern).

Owns the active tab and the list currently shown for each tab. Every
activation re-fetches; results are reconciled against the owned list and
pushed to the view as an edit script.
"""
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from airport_client.application.services.collection_reconciler import (
    CollectionReconciler,
    booking_reconciler,
    flight_reconciler,
)
from airport_client.domain.entities.flight import Booking, Flight
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient
from airport_client.domain.interfaces.collection_view import ICollectionView
from airport_client.domain.result import Result


logger = logging.getLogger(__name__)


class Tab(str, Enum):
    FLIGHTS = "flights"
    BOOKINGS = "bookings"


MALFORMED_LIST_MESSAGE = "Received an invalid list from the airport service"

EMPTY_MESSAGES = {
    Tab.FLIGHTS: "No flights available",
    Tab.BOOKINGS: "No bookings yet",
}


class TabCoordinator:
    """
    Tracks the active tab and keeps its list in sync with the service.

    Fetches run on the executor; a completion is applied only if its tab is
    still active and it is the most recent fetch issued for that tab. Late
    responses are dropped so one tab never overwrites the other.
    """

    def __init__(
        self,
        api_client: IAirportAPIClient,
        view: ICollectionView,
        executor: Optional[Executor] = None,
        initial_tab: Tab = Tab.FLIGHTS
    ):
        """
        Initialize the coordinator.

        Args:
            api_client: Airport API client (Dependency Injection)
            view: Presentation observer receiving edit scripts and errors
            executor: Runs fetches; defaults to a single worker thread
            initial_tab: Tab active before the first selection
        """
        self.api_client = api_client
        self.view = view
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="airport-sync")
        self._active_tab = Tab(initial_tab)
        self._fetchers: Dict[Tab, Callable[[], Result[List[Any]]]] = {
            Tab.FLIGHTS: self.api_client.list_available_flights,
            Tab.BOOKINGS: self.api_client.list_my_bookings,
        }
        self._reconcilers: Dict[Tab, CollectionReconciler] = {
            Tab.FLIGHTS: flight_reconciler(),
            Tab.BOOKINGS: booking_reconciler(),
        }
        self._snapshots: Dict[Tab, List[Any]] = {tab: [] for tab in Tab}
        self._generations: Dict[Tab, int] = {tab: 0 for tab in Tab}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def active_tab(self) -> Tab:
        return self._active_tab

    def snapshot(self, tab: Optional[Tab] = None) -> List[Any]:
        """Copy of the list last applied for ``tab`` (the active tab by default)."""
        with self._lock:
            return list(self._snapshots[tab or self._active_tab])

    def select_tab(self, tab: Tab) -> Future:
        """Make ``tab`` active and fetch its collection."""
        tab = Tab(tab)
        with self._lock:
            previous = self._active_tab
            self._active_tab = tab
        if previous != tab:
            self._logger.info(f"Switched tab {previous.value} -> {tab.value}")
        return self._fetch(tab)

    def refresh(self) -> Future:
        """Manual refresh of the active tab."""
        return self._fetch(self._active_tab)

    def on_resume(self) -> Future:
        """Re-entry into the view: always re-fetch, there is no cache policy."""
        return self._fetch(self._active_tab)

    def _fetch(self, tab: Tab) -> Future:
        with self._lock:
            self._generations[tab] += 1
            generation = self._generations[tab]
            visible = tab == self._active_tab
        self._logger.debug(f"Fetching {tab.value} (generation {generation})")
        if visible:
            self.view.set_loading(True)
        return self.executor.submit(self._run_fetch, tab, generation)

    def _run_fetch(self, tab: Tab, generation: int) -> bool:
        try:
            result = self._fetchers[tab]()
        except Exception:
            self._logger.error(f"Unexpected error fetching {tab.value}", exc_info=True)
            if self._is_current(tab, generation):
                self.view.set_loading(False)
            raise
        return self._complete(tab, generation, result)

    def _is_current(self, tab: Tab, generation: int) -> bool:
        with self._lock:
            return tab == self._active_tab and generation == self._generations[tab]

    def _complete(self, tab: Tab, generation: int, result: Result[List[Any]]) -> bool:
        """Apply a fetch result. Returns False when the result was discarded."""
        script = None
        error = None if result.is_ok else result.message
        with self._lock:
            if tab != self._active_tab or generation != self._generations[tab]:
                self._logger.debug(f"Discarding stale {tab.value} response (generation {generation})")
                return False
            if result.is_ok:
                items = list(result.unwrap())
                try:
                    script = self._reconcilers[tab].diff(self._snapshots[tab], items)
                except ValueError as e:
                    self._logger.error(f"Rejected {tab.value} response: {e}")
                    error = MALFORMED_LIST_MESSAGE
                else:
                    self._snapshots[tab] = items

        self.view.set_loading(False)
        if script is None:
            self._logger.warning(f"Failed to load {tab.value}: {error}")
            self.view.show_error(error)
            return True

        self.view.render(tab, script, items)
        if script.is_empty:
            self.view.show_message(EMPTY_MESSAGES[tab])
        return True

    @staticmethod
    def is_bookable(flight: Flight) -> bool:
        """The booking action is offered only for flights with seats left."""
        return flight.has_available_seats()

    def cancel_booking(self, booking: Booking, confirmed: bool) -> Optional[Future]:
        """
        Cancel a booking once the user has confirmed.

        On success the bookings collection is re-fetched; on failure the
        error is reported and the displayed list is left alone.

        Args:
            booking: Booking to cancel
            confirmed: Answer to the confirmation prompt

        Returns:
            Future resolving to the cancel Result, or None when not confirmed
        """
        if not confirmed:
            self._logger.debug(f"Cancellation of {booking.booking_reference} not confirmed")
            return None
        return self.executor.submit(self._run_cancel, booking)

    def _run_cancel(self, booking: Booking) -> Result[Booking]:
        self._logger.info(f"Cancelling booking {booking.booking_reference}")
        result = self.api_client.cancel_booking(booking.id)
        if not result.is_ok:
            self._logger.warning(f"Cancel of {booking.booking_reference} failed: {result.message}")
            self.view.show_error(result.message)
            return result

        self.view.show_message("Booking cancelled")
        self._fetch(Tab.BOOKINGS)
        return result

    def close(self) -> None:
        """Shut down the executor if this coordinator created it."""
        if self._owns_executor:
            self.executor.shutdown(wait=False)
