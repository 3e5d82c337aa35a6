"""Service container for dependency injection (IoC Container Pattern)."""
import logging
from concurrent.futures import Executor
from typing import Any, Optional

from airport_client.application.services.authentication_service import AuthenticationService
from airport_client.application.use_cases.booking_workflow import BookingWorkflow
from airport_client.application.use_cases.tab_coordinator import TabCoordinator
from airport_client.config.settings import Config
from airport_client.domain.entities.flight import Booking, Flight
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient
from airport_client.domain.interfaces.collection_view import ICollectionView
from airport_client.domain.interfaces.command_bus import ICommandBus
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.infrastructure.factories.client_factory import ClientFactory
from airport_client.infrastructure.factories.commands_factory import CommandsFactory
from airport_client.infrastructure.managers.command_bus import CommandBus


class ServiceContainer:
    """
    Service container implementing Dependency Injection pattern.

    Built once at process start and passed to whoever needs it. There is no
    global instance: two containers never share a session or a client.
    """

    def __init__(
        self,
        config: type[Config] = Config,
        view: Optional[ICollectionView] = None,
        session_store: Optional[ISessionStore] = None,
        api_client: Optional[IAirportAPIClient] = None,
        executor: Optional[Executor] = None
    ):
        """
        Initialize service container.

        Args:
            config: Configuration class
            view: Presentation observer for the tab coordinator
            session_store: Pre-built session store (built from config otherwise)
            api_client: Pre-built API client (built from config otherwise)
            executor: Executor for coordinator fetches
        """
        self.config = config
        self._view = view
        self._session_store = session_store
        self._api_client = api_client
        self._executor = executor
        self._auth_service: Optional[AuthenticationService] = None
        self._coordinator: Optional[TabCoordinator] = None
        self._command_bus: Optional[ICommandBus] = None
        self._logger = logging.getLogger(__name__)

    def get_session_store(self) -> ISessionStore:
        """Get or create session store instance."""
        if self._session_store is None:
            self._session_store = ClientFactory.create_session_store("redis", config=self.config)
            self._logger.info("SessionStore created with redis")
        return self._session_store

    def get_api_client(self) -> IAirportAPIClient:
        """Get or create airport API client instance."""
        if self._api_client is None:
            self._api_client = ClientFactory.create_api_client(self.get_session_store(), config=self.config)
            self._logger.info(f"AirportAPIClient created: {self.config.API_CLIENT_TYPE}")
        return self._api_client

    def get_auth_service(self) -> AuthenticationService:
        if self._auth_service is None:
            self._auth_service = AuthenticationService(
                api_client=self.get_api_client(),
                session_store=self.get_session_store(),
            )
        return self._auth_service

    def get_coordinator(self) -> TabCoordinator:
        """Get or create the tab coordinator. Requires a view."""
        if self._coordinator is None:
            if self._view is None:
                raise ValueError("A collection view is required to create the tab coordinator")
            self._coordinator = TabCoordinator(
                api_client=self.get_api_client(),
                view=self._view,
                executor=self._executor,
            )
            self._logger.info("TabCoordinator created")
        return self._coordinator

    def create_booking_workflow(self, flight: Flight, on_success: Optional[Any] = None) -> BookingWorkflow:
        """
        Build a booking workflow for a flight, personalized with the stored profile.

        Args:
            flight: Flight to book
            on_success: Optional callback receiving the created Booking
        """
        return BookingWorkflow(
            api_client=self.get_api_client(),
            flight_id=flight.id,
            base_price=flight.base_price,
            profile=self.get_auth_service().current_user(),
            on_success=on_success or self._notify_booking_created,
        )

    def _notify_booking_created(self, booking: Booking) -> None:
        if self._view is not None:
            self._view.show_message(f"Booking confirmed! Ref: {booking.booking_reference}")

    def get_command_bus(self) -> ICommandBus:
        """Get or create the command bus with every handler registered."""
        if self._command_bus is None:
            command_bus = CommandBus()
            CommandsFactory.register_handlers(
                command_bus,
                auth_service=self.get_auth_service(),
                coordinator=self.get_coordinator(),
                workflow_factory=self.create_booking_workflow,
            )
            self._command_bus = command_bus
        return self._command_bus

    def dispatch(self, command: Any) -> Any:
        """Shortcut for ``get_command_bus().dispatch(command)``."""
        return self.get_command_bus().dispatch(command)

    def close(self) -> None:
        """Release background resources."""
        if self._coordinator is not None:
            self._coordinator.close()
