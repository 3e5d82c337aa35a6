"""Transient booking request sent when creating a booking."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

MIN_PASSENGER_AGE = 0
MAX_PASSENGER_AGE = 120


class SeatPreference(str, Enum):
    WINDOW = "WINDOW"
    AISLE = "AISLE"
    MIDDLE = "MIDDLE"
    NO_PREFERENCE = "NO_PREFERENCE"


@dataclass
class BookingRequest:
    """Request payload for ``POST /api/bookings``. Never persisted."""

    flight_id: int
    passenger_first_name: str
    passenger_last_name: str
    passenger_age: int
    seat_number: str
    seat_preference: SeatPreference = SeatPreference.NO_PREFERENCE

    def __post_init__(self):
        """Validate booking request."""
        if not self.passenger_first_name:
            raise ValueError("passenger_first_name is required")
        if not self.passenger_last_name:
            raise ValueError("passenger_last_name is required")
        if not self.seat_number:
            raise ValueError("seat_number is required")
        if not MIN_PASSENGER_AGE <= self.passenger_age <= MAX_PASSENGER_AGE:
            raise ValueError(
                f"passenger_age must be between {MIN_PASSENGER_AGE} and {MAX_PASSENGER_AGE}"
            )
        if not isinstance(self.seat_preference, SeatPreference):
            self.seat_preference = SeatPreference(self.seat_preference)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flightId": self.flight_id,
            "passengerFirstName": self.passenger_first_name,
            "passengerLastName": self.passenger_last_name,
            "passengerAge": self.passenger_age,
            "seatPreference": self.seat_preference.value,
            "seatNumber": self.seat_number,
        }
