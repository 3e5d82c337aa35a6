"""Interface for airport API clients (Adapter Pattern).

This allows switching between the HTTP client and the in-memory
mock used for development and testing.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from airport_client.domain.entities.flight import Flight, Booking, BookingStats
from airport_client.domain.entities.user import Profile
from airport_client.domain.entities.booking_request import BookingRequest
from airport_client.domain.result import Result


@dataclass(frozen=True)
class LoginResult:
    """Successful login payload."""

    token: str
    user: Profile


class IAirportAPIClient(ABC):
    """
    Interface for the remote airport service following Adapter Pattern.

    Every operation returns ``Ok(payload)`` or ``Err(kind, message)``;
    implementations never raise for remote failures.
    """

    # Authentication

    @abstractmethod
    def login(self, email: str, password: str) -> Result[LoginResult]:
        """
        Exchange credentials for a bearer token and the user's profile.

        Args:
            email: Account email
            password: Account password

        Returns:
            Ok(LoginResult) or Err(AUTH) on bad credentials
        """
        pass

    @abstractmethod
    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None
    ) -> Result[Profile]:
        """
        Register a regular customer.

        Returns:
            Ok(Profile) or Err(BUSINESS) for duplicates/invalid data
        """
        pass

    @abstractmethod
    def register_frequent_flyer(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        initial_miles: int = 0
    ) -> Result[Profile]:
        """Register a frequent flyer with an initial miles balance."""
        pass

    # Flights

    @abstractmethod
    def list_all_flights(self) -> Result[List[Flight]]:
        pass

    @abstractmethod
    def list_available_flights(self) -> Result[List[Flight]]:
        """Flights with seats left, filtered by the service."""
        pass

    @abstractmethod
    def get_flight(self, flight_id: int) -> Result[Flight]:
        pass

    @abstractmethod
    def get_flight_by_number(self, flight_number: str) -> Result[Flight]:
        pass

    @abstractmethod
    def search_flights_by_destination(self, destination: str) -> Result[List[Flight]]:
        pass

    @abstractmethod
    def search_flights_by_origin(self, origin: str) -> Result[List[Flight]]:
        pass

    @abstractmethod
    def search_flights_by_route(
        self,
        origin: str,
        destination: str,
        available_only: bool = False
    ) -> Result[List[Flight]]:
        pass

    # Bookings

    @abstractmethod
    def list_my_bookings(self) -> Result[List[Booking]]:
        pass

    @abstractmethod
    def list_active_bookings(self) -> Result[List[Booking]]:
        pass

    @abstractmethod
    def get_booking(self, booking_id: int) -> Result[Booking]:
        pass

    @abstractmethod
    def get_booking_by_reference(self, reference: str) -> Result[Booking]:
        pass

    @abstractmethod
    def create_booking(self, request: BookingRequest) -> Result[Booking]:
        """
        Create a booking.

        Args:
            request: Validated booking request

        Returns:
            Ok(Booking) with server-computed prices, or Err(BUSINESS) when
            the flight is full or missing
        """
        pass

    @abstractmethod
    def cancel_booking(self, booking_id: int) -> Result[Booking]:
        """
        Cancel a booking.

        Returns:
            Ok(Booking) with status CANCELLED, or Err(BUSINESS) when the
            booking is missing or already cancelled
        """
        pass

    @abstractmethod
    def cancel_booking_by_reference(self, reference: str) -> Result[Booking]:
        pass

    @abstractmethod
    def get_booking_stats(self) -> Result[BookingStats]:
        pass
