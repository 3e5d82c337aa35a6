"""Factory for wiring command handlers (Factory Pattern).

Creates every handler the presentation layer can reach and registers
them with the command bus.
"""
import logging
from typing import Callable

from airport_client.application.services.authentication_service import AuthenticationService
from airport_client.application.use_cases.booking_workflow import BookingWorkflow
from airport_client.application.use_cases.tab_coordinator import TabCoordinator
from airport_client.domain.entities.flight import Flight
from airport_client.domain.interfaces.command_bus import ICommandBus
from airport_client.infrastructure.handlers.airport import (
    LoginHandler,
    RegisterHandler,
    LogoutHandler,
    SelectTabHandler,
    RefreshHandler,
    ResumeHandler,
    StartBookingHandler,
    SubmitBookingHandler,
    CancelBookingHandler,
)


logger = logging.getLogger(__name__)


class CommandsFactory:
    """
    Factory for registering command handlers.
    """

    @staticmethod
    def register_handlers(
        command_bus: ICommandBus,
        auth_service: AuthenticationService,
        coordinator: TabCoordinator,
        workflow_factory: Callable[[Flight], BookingWorkflow]
    ) -> None:
        """
        Create all handlers and register them with the bus.

        Args:
            command_bus: Bus to register handlers with
            auth_service: Session lifecycle service
            coordinator: Tab/refresh coordinator
            workflow_factory: Builds a booking workflow for a flight
        """
        handlers = [
            LoginHandler(auth_service),
            RegisterHandler(auth_service),
            LogoutHandler(auth_service),
            SelectTabHandler(coordinator),
            RefreshHandler(coordinator),
            ResumeHandler(coordinator),
            StartBookingHandler(workflow_factory),
            SubmitBookingHandler(),
            CancelBookingHandler(coordinator),
        ]

        for handler in handlers:
            command_bus.register_handler(handler)

        logger.info(f"Command bus initialized with {len(handlers)} handlers")
