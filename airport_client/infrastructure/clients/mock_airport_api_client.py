"""Mock implementation of the airport API client for development/testing."""
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from airport_client.domain.entities.flight import Flight, Booking, BookingStats, BookingStatus
from airport_client.domain.entities.user import Profile, CustomerType, MembershipLevel
from airport_client.domain.entities.booking_request import BookingRequest
from airport_client.domain.errors import ErrorKind
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient, LoginResult
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.domain.result import Ok, Err, Result


logger = logging.getLogger(__name__)

FREQUENT_FLYER_DISCOUNTS = {
    MembershipLevel.PLATINUM: 20,
    MembershipLevel.GOLD: 15,
    MembershipLevel.SILVER: 10,
    MembershipLevel.NONE: 0,
}

MILES_PER_BOOKING = 500

SAMPLE_FLIGHTS = [
    ("TX101", "Dallas", "Austin", "08:00 AM", 150, 199.99),
    ("TX102", "Houston", "San Antonio", "10:30 AM", 120, 149.99),
    ("TX103", "Austin", "Dallas", "02:00 PM", 150, 199.99),
    ("TX104", "El Paso", "Lubbock", "09:15 AM", 80, 129.99),
    ("TX105", "Corpus Christi", "Amarillo", "11:45 AM", 100, 179.99),
    ("TX106", "Dallas", "Houston", "07:00 AM", 180, 159.99),
    ("TX107", "San Antonio", "Austin", "09:00 AM", 100, 89.99),
    ("TX108", "Houston", "Dallas", "03:30 PM", 180, 159.99),
]


def membership_for_miles(miles: int) -> MembershipLevel:
    """Membership tier earned by a frequent flyer's miles."""
    if miles >= 50000:
        return MembershipLevel.PLATINUM
    if miles >= 25000:
        return MembershipLevel.GOLD
    if miles > 0:
        return MembershipLevel.SILVER
    return MembershipLevel.NONE


class MockAirportAPIClient(IAirportAPIClient):
    """
    Mock implementation of the airport API client.

    Keeps flights, users and bookings in memory and enforces the same
    business rules as the real service: seat availability, one-way
    cancellation and membership discounts. Like the HTTP client it reads
    the bearer token from the session store on every booking call.

    Stored entities are replaced, never mutated, so lists handed out
    earlier stay valid snapshots.
    """

    def __init__(self, session_store: ISessionStore, seed: bool = True):
        """
        Initialize mock client with in-memory storage.

        Args:
            session_store: Store holding the bearer token
            seed: Load sample flights and users
        """
        self.session_store = session_store
        self._flights: Dict[int, Flight] = {}
        self._users: Dict[str, Tuple[Profile, str]] = {}  # email -> (profile, password)
        self._tokens: Dict[str, int] = {}  # token -> user id
        self._bookings: Dict[int, Tuple[int, Booking]] = {}  # booking id -> (user id, booking)
        self._next_id = {"flight": 1, "user": 1, "booking": 1}
        self._logger = logging.getLogger(__name__)
        if seed:
            self._initialize_mock_data()

    def _allocate_id(self, kind: str) -> int:
        value = self._next_id[kind]
        self._next_id[kind] += 1
        return value

    def _initialize_mock_data(self) -> None:
        """Initialize with the sample flights and accounts."""
        for number, origin, destination, departure, capacity, price in SAMPLE_FLIGHTS:
            self.add_flight(number, origin, destination, departure, capacity, price)
        self._create_user("John Doe", "john@example.com", "password123", "555-1234")
        self._create_user("Jane Smith", "jane@example.com", "password123", "555-5678", frequent_flyer_miles=30000)

    def add_flight(
        self,
        flight_number: str,
        origin: str,
        destination: str,
        departure_time: str,
        capacity: int,
        base_price: float,
        available_seats: Optional[int] = None
    ) -> Flight:
        """Add a flight to the mock inventory (helper method for testing/demo)."""
        flight = Flight(
            id=self._allocate_id("flight"),
            flight_number=flight_number,
            origin=origin,
            destination=destination,
            departure_time=departure_time,
            capacity=capacity,
            available_seats=capacity if available_seats is None else available_seats,
            base_price=base_price,
        )
        self._flights[flight.id] = flight
        return flight

    def _create_user(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str],
        frequent_flyer_miles: Optional[int] = None
    ) -> Profile:
        if frequent_flyer_miles is None:
            profile = Profile(id=self._allocate_id("user"), name=name, email=email, phone_number=phone_number)
        else:
            level = membership_for_miles(frequent_flyer_miles)
            if level == MembershipLevel.NONE:
                level = MembershipLevel.SILVER
            profile = Profile(
                id=self._allocate_id("user"),
                name=name,
                email=email,
                phone_number=phone_number,
                customer_type=CustomerType.FREQUENT_FLYER,
                membership_level=level,
                miles_flown=frequent_flyer_miles,
                discount_percent=FREQUENT_FLYER_DISCOUNTS[level],
            )
        self._users[email.lower()] = (profile, password)
        return profile

    @staticmethod
    def _add_miles(profile: Profile, miles: int) -> Profile:
        """Credit miles; the tier only ever moves up, and the discount follows it."""
        total = profile.miles_flown + miles
        level = membership_for_miles(total)
        if level == MembershipLevel.NONE:
            level = profile.membership_level
        return replace(
            profile,
            miles_flown=total,
            membership_level=level,
            discount_percent=FREQUENT_FLYER_DISCOUNTS[level],
        )

    def _current_user(self) -> Optional[Profile]:
        token = self.session_store.get_token()
        if not token or token not in self._tokens:
            return None
        user_id = self._tokens[token]
        for profile, _ in self._users.values():
            if profile.id == user_id:
                return profile
        return None

    @staticmethod
    def _unauthorized() -> Err:
        return Err(ErrorKind.AUTH, "Authentication required", status_code=401)

    @staticmethod
    def _bad_request(message: str) -> Err:
        return Err(ErrorKind.BUSINESS, message, status_code=400)

    # Authentication

    def login(self, email: str, password: str) -> Result[LoginResult]:
        self._logger.info(f"Mock: Login attempt for {email}")
        entry = self._users.get((email or "").lower())
        if entry is None or entry[1] != password:
            return Err(ErrorKind.AUTH, "Invalid email or password", status_code=401)
        token = f"mock-{uuid.uuid4().hex}"
        self._tokens[token] = entry[0].id
        return Ok(LoginResult(token=token, user=entry[0]))

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None
    ) -> Result[Profile]:
        if (email or "").lower() in self._users:
            return self._bad_request("Email already registered")
        return Ok(self._create_user(name, email, password, phone_number))

    def register_frequent_flyer(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        initial_miles: int = 0
    ) -> Result[Profile]:
        if (email or "").lower() in self._users:
            return self._bad_request("Email already registered")
        return Ok(self._create_user(name, email, password, phone_number, frequent_flyer_miles=max(initial_miles, 0)))

    # Flights

    def list_all_flights(self) -> Result[List[Flight]]:
        return Ok(list(self._flights.values()))

    def list_available_flights(self) -> Result[List[Flight]]:
        return Ok([f for f in self._flights.values() if f.has_available_seats()])

    def get_flight(self, flight_id: int) -> Result[Flight]:
        flight = self._flights.get(flight_id)
        if flight is None:
            return Err(ErrorKind.BUSINESS, f"Flight not found with id: {flight_id}", status_code=404)
        return Ok(flight)

    def get_flight_by_number(self, flight_number: str) -> Result[Flight]:
        for flight in self._flights.values():
            if flight.flight_number.lower() == flight_number.lower():
                return Ok(flight)
        return Err(ErrorKind.BUSINESS, f"Flight not found: {flight_number}", status_code=404)

    def search_flights_by_destination(self, destination: str) -> Result[List[Flight]]:
        needle = destination.lower()
        return Ok([f for f in self._flights.values() if needle in f.destination.lower()])

    def search_flights_by_origin(self, origin: str) -> Result[List[Flight]]:
        needle = origin.lower()
        return Ok([f for f in self._flights.values() if needle in f.origin.lower()])

    def search_flights_by_route(
        self,
        origin: str,
        destination: str,
        available_only: bool = False
    ) -> Result[List[Flight]]:
        flights = [
            f for f in self._flights.values()
            if f.origin.lower() == origin.lower() and f.destination.lower() == destination.lower()
        ]
        if available_only:
            flights = [f for f in flights if f.has_available_seats()]
        return Ok(flights)

    # Bookings

    def _user_bookings(self, user_id: int) -> List[Booking]:
        return [booking for owner, booking in self._bookings.values() if owner == user_id]

    def list_my_bookings(self) -> Result[List[Booking]]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        return Ok(self._user_bookings(user.id))

    def list_active_bookings(self) -> Result[List[Booking]]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        return Ok([b for b in self._user_bookings(user.id) if b.is_active()])

    def _find_booking(self, user: Profile, booking_id: Optional[int] = None, reference: Optional[str] = None) -> Optional[Booking]:
        for owner, booking in self._bookings.values():
            if owner != user.id:
                continue
            if booking_id is not None and booking.id == booking_id:
                return booking
            if reference is not None and booking.booking_reference == reference:
                return booking
        return None

    def get_booking(self, booking_id: int) -> Result[Booking]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        booking = self._find_booking(user, booking_id=booking_id)
        if booking is None:
            return Err(ErrorKind.BUSINESS, "Booking not found", status_code=404)
        return Ok(booking)

    def get_booking_by_reference(self, reference: str) -> Result[Booking]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        booking = self._find_booking(user, reference=reference)
        if booking is None:
            return Err(ErrorKind.BUSINESS, "Booking not found", status_code=404)
        return Ok(booking)

    def create_booking(self, request: BookingRequest) -> Result[Booking]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()

        flight = self._flights.get(request.flight_id)
        if flight is None:
            return self._bad_request("Flight not found")
        if not flight.has_available_seats():
            return self._bad_request("No available seats on this flight")

        self._logger.info(f"Mock: Booking flight {flight.flight_number} for user {user.id}")

        discount_amount = flight.base_price * user.discount_percent / 100
        self._flights[flight.id] = replace(flight, available_seats=flight.available_seats - 1)
        booking = Booking(
            id=self._allocate_id("booking"),
            booking_reference=f"TXR{uuid.uuid4().int % 1000000:06d}",
            flight_number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
            departure_time=flight.departure_time,
            passenger_name=f"{request.passenger_first_name} {request.passenger_last_name}",
            seat_number=request.seat_number,
            total_price=flight.base_price - discount_amount,
            discount_amount=discount_amount,
            status=BookingStatus.CONFIRMED,
            booking_date=datetime.now().isoformat(timespec="seconds"),
        )
        self._bookings[booking.id] = (user.id, booking)

        if user.is_frequent_flyer():
            _, password = self._users[user.email.lower()]
            self._users[user.email.lower()] = (self._add_miles(user, MILES_PER_BOOKING), password)

        return Ok(booking)

    def _cancel(self, booking: Optional[Booking]) -> Result[Booking]:
        if booking is None:
            return self._bad_request("Booking not found")
        if booking.is_cancelled():
            return self._bad_request("Booking is already cancelled")

        owner, _ = self._bookings[booking.id]
        cancelled = replace(booking, status=BookingStatus.CANCELLED)
        self._bookings[booking.id] = (owner, cancelled)
        for flight in self._flights.values():
            if flight.flight_number == booking.flight_number and flight.available_seats < flight.capacity:
                self._flights[flight.id] = replace(flight, available_seats=flight.available_seats + 1)
                break
        self._logger.info(f"Mock: Cancelled booking {booking.booking_reference}")
        return Ok(cancelled)

    def cancel_booking(self, booking_id: int) -> Result[Booking]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        return self._cancel(self._find_booking(user, booking_id=booking_id))

    def cancel_booking_by_reference(self, reference: str) -> Result[Booking]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        return self._cancel(self._find_booking(user, reference=reference))

    def get_booking_stats(self) -> Result[BookingStats]:
        user = self._current_user()
        if user is None:
            return self._unauthorized()
        bookings = self._user_bookings(user.id)
        confirmed = [b for b in bookings if b.is_active()]
        return Ok(BookingStats(
            total_bookings=len(bookings),
            confirmed_bookings=len(confirmed),
            cancelled_bookings=sum(1 for b in bookings if b.is_cancelled()),
            total_spent=sum(b.total_price for b in confirmed),
        ))
