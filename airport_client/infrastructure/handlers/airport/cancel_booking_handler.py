"""Handler for the CancelBooking command."""
import logging
from concurrent.futures import Future
from typing import Optional

from airport_client.application.commands import CancelBooking
from airport_client.application.use_cases.tab_coordinator import TabCoordinator
from airport_client.domain.entities.flight import Booking
from airport_client.domain.interfaces.command_handler import ICommandHandler


logger = logging.getLogger(__name__)


class CancelBookingHandler(ICommandHandler):
    """
    Handler for the CancelBooking command.

    The presentation layer owns the confirmation prompt and passes its
    answer in the command; nothing is sent without it.
    """

    def __init__(self, coordinator: TabCoordinator):
        """
        Initialize cancel booking handler.

        Args:
            coordinator: Tab coordinator that owns the bookings list
        """
        self.coordinator = coordinator
        self._logger = logging.getLogger(__name__)

    def get_command_type(self) -> type:
        return CancelBooking

    def validate_command(self, command: CancelBooking) -> bool:
        if not isinstance(command.booking, Booking):
            self._logger.warning("CancelBooking requires a booking")
            return False

        if not isinstance(command.confirmed, bool):
            self._logger.warning(f"confirmed must be a boolean, got: {type(command.confirmed)}")
            return False

        return True

    def handle(self, command: CancelBooking) -> Optional[Future]:
        """
        Cancel the booking if the user confirmed.

        Returns:
            Future resolving to the cancel Result, None when not confirmed
        """
        if not command.confirmed:
            self._logger.info(f"Cancellation of {command.booking.booking_reference} requires confirmation")
            return None
        return self.coordinator.cancel_booking(command.booking, confirmed=True)
