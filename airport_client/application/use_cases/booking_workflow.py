"""Use case for creating a booking (Use Case Pattern).

Covers the whole "book this flight" flow: price preview with the user's
discount, local validation of the passenger form, a single submission to
the service and the resulting state transition.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from airport_client.domain.entities.booking_request import (
    BookingRequest,
    SeatPreference,
    MIN_PASSENGER_AGE,
    MAX_PASSENGER_AGE,
)
from airport_client.domain.entities.flight import Booking
from airport_client.domain.entities.user import Profile
from airport_client.domain.errors import InvalidStateError, ValidationError
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient


logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Booking failed"


class BookingState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class PriceQuote:
    """Client-side price preview. The created booking carries the authoritative price."""

    base_price: float
    discount_percent: int
    discount_amount: float
    final_price: float

    @property
    def has_discount(self) -> bool:
        return self.discount_percent > 0


def compute_price(base_price: float, profile: Optional[Profile] = None) -> PriceQuote:
    """
    Apply the profile's percentage discount to a base price.

    A missing profile means no personalization, i.e. no discount.
    """
    discount_percent = profile.discount_percent if profile is not None else 0
    discount_amount = base_price * discount_percent / 100
    return PriceQuote(
        base_price=base_price,
        discount_percent=discount_percent,
        discount_amount=discount_amount,
        final_price=base_price - discount_amount,
    )


@dataclass
class BookingForm:
    """Raw passenger input as typed by the user."""

    first_name: str
    last_name: str
    age: Union[str, int]
    seat_number: str
    seat_preference: Union[str, SeatPreference] = SeatPreference.NO_PREFERENCE


@dataclass(frozen=True)
class BookingOutcome:
    """Result of a submission attempt."""

    state: BookingState
    message: str
    booking_reference: Optional[str] = None
    booking: Optional[Booking] = None
    field: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == BookingState.SUCCESS


class BookingWorkflow:
    """
    State machine for one booking attempt.

    IDLE -> SUBMITTING -> SUCCESS | FAILED, and FAILED -> IDLE on retry.
    SUCCESS is terminal: the caller is notified through ``on_success`` and
    leaves the booking context. No local list is touched; the bookings tab
    re-fetches when it is shown again.
    """

    def __init__(
        self,
        api_client: IAirportAPIClient,
        flight_id: int,
        base_price: float,
        profile: Optional[Profile] = None,
        on_success: Optional[Callable[[Booking], None]] = None
    ):
        """
        Initialize the workflow for a flight.

        Args:
            api_client: Airport API client (Dependency Injection)
            flight_id: Flight being booked
            base_price: Flight base price used for the preview
            profile: Logged-in user's profile, if any
            on_success: Called with the created booking
        """
        self.api_client = api_client
        self.flight_id = flight_id
        self.base_price = base_price
        self.profile = profile
        self.on_success = on_success
        self._state = BookingState.IDLE
        self._lock = threading.Lock()
        self.last_outcome: Optional[BookingOutcome] = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> BookingState:
        return self._state

    def quote(self) -> PriceQuote:
        return compute_price(self.base_price, self.profile)

    def prefill_names(self) -> Tuple[str, str]:
        """Split the profile name into first and last name for the form."""
        if self.profile is None or not self.profile.name.strip():
            return "", ""
        parts = self.profile.name.split()
        return parts[0], " ".join(parts[1:])

    def validate(self, form: BookingForm) -> BookingRequest:
        """
        Check the form and build the request.

        Raises:
            ValidationError: With the offending field name
        """
        first_name = (form.first_name or "").strip()
        last_name = (form.last_name or "").strip()
        seat_number = (form.seat_number or "").strip()

        if not first_name:
            raise ValidationError("First name is required", field="first_name")
        if not last_name:
            raise ValidationError("Last name is required", field="last_name")

        try:
            age = int(str(form.age).strip())
        except (TypeError, ValueError):
            raise ValidationError("Please enter a valid age", field="age") from None
        if not MIN_PASSENGER_AGE <= age <= MAX_PASSENGER_AGE:
            raise ValidationError(
                f"Age must be between {MIN_PASSENGER_AGE} and {MAX_PASSENGER_AGE}",
                field="age",
            )

        if not seat_number:
            raise ValidationError("Seat number is required", field="seat_number")

        try:
            preference = SeatPreference(str(getattr(form.seat_preference, "value", form.seat_preference)).upper())
        except ValueError:
            raise ValidationError("Please choose a valid seat preference", field="seat_preference") from None

        return BookingRequest(
            flight_id=self.flight_id,
            passenger_first_name=first_name,
            passenger_last_name=last_name,
            passenger_age=age,
            seat_number=seat_number.upper(),
            seat_preference=preference,
        )

    def _finish(self, outcome: BookingOutcome) -> BookingOutcome:
        with self._lock:
            self._state = outcome.state
            self.last_outcome = outcome
        return outcome

    def submit(self, form: BookingForm) -> BookingOutcome:
        """
        Validate and submit the booking.

        Invalid input fails fast without any request. Otherwise exactly one
        ``create_booking`` call is made.

        Raises:
            InvalidStateError: If a submission is in flight or already succeeded
        """
        with self._lock:
            if self._state == BookingState.SUBMITTING:
                raise InvalidStateError("A booking submission is already in progress")
            if self._state == BookingState.SUCCESS:
                raise InvalidStateError("This booking has already been confirmed")
            self._state = BookingState.IDLE

        try:
            request = self.validate(form)
        except ValidationError as e:
            self._logger.info(f"Booking form rejected ({e.field}): {e.message}")
            return self._finish(BookingOutcome(state=BookingState.FAILED, message=e.message, field=e.field))

        with self._lock:
            self._state = BookingState.SUBMITTING

        self._logger.info(f"Submitting booking for flight {self.flight_id}")
        try:
            result = self.api_client.create_booking(request)
        except Exception:
            self._logger.error(f"Unexpected error submitting booking for flight {self.flight_id}", exc_info=True)
            self._finish(BookingOutcome(state=BookingState.FAILED, message=GENERIC_FAILURE_MESSAGE))
            raise

        if not result.is_ok:
            message = result.message or GENERIC_FAILURE_MESSAGE
            self._logger.warning(f"Booking on flight {self.flight_id} failed ({result.kind.value}): {message}")
            return self._finish(BookingOutcome(state=BookingState.FAILED, message=message))

        booking = result.unwrap()
        outcome = self._finish(BookingOutcome(
            state=BookingState.SUCCESS,
            message=f"Booking confirmed! Ref: {booking.booking_reference}",
            booking_reference=booking.booking_reference,
            booking=booking,
        ))
        self._logger.info(f"Booking {booking.booking_reference} confirmed")

        if self.on_success is not None:
            self.on_success(booking)
        return outcome

    def reset(self) -> None:
        """Return to IDLE after a failure so the user can retry."""
        with self._lock:
            if self._state == BookingState.FAILED:
                self._state = BookingState.IDLE
            elif self._state != BookingState.IDLE:
                raise InvalidStateError(f"Cannot reset a workflow in state {self._state.value}")
