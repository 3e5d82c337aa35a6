"""Handlers for starting and submitting a booking."""
import logging
from typing import Callable

from airport_client.application.commands import StartBooking, SubmitBooking
from airport_client.application.use_cases.booking_workflow import BookingOutcome, BookingWorkflow
from airport_client.domain.entities.flight import Flight
from airport_client.domain.interfaces.command_handler import ICommandHandler


logger = logging.getLogger(__name__)


class StartBookingHandler(ICommandHandler):
    """
    Opens a booking workflow for a flight.

    Full flights are refused here; the service's availability count is
    trusted as the gate for the booking action.
    """

    def __init__(self, workflow_factory: Callable[[Flight], BookingWorkflow]):
        """
        Args:
            workflow_factory: Builds a workflow for a flight
        """
        self.workflow_factory = workflow_factory
        self._logger = logging.getLogger(__name__)

    def get_command_type(self) -> type:
        return StartBooking

    def validate_command(self, command: StartBooking) -> bool:
        if not isinstance(command.flight, Flight):
            self._logger.warning("StartBooking requires a flight")
            return False
        if not command.flight.has_available_seats():
            self._logger.warning(f"Flight {command.flight.flight_number} is full")
            return False
        return True

    def handle(self, command: StartBooking) -> BookingWorkflow:
        self._logger.info(f"Starting booking for flight {command.flight.flight_number}")
        return self.workflow_factory(command.flight)


class SubmitBookingHandler(ICommandHandler):
    """Submits the passenger form of an open workflow."""

    def get_command_type(self) -> type:
        return SubmitBooking

    def validate_command(self, command: SubmitBooking) -> bool:
        return isinstance(command.workflow, BookingWorkflow) and command.form is not None

    def handle(self, command: SubmitBooking) -> BookingOutcome:
        return command.workflow.submit(command.form)
