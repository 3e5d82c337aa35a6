"""Flight domain entities."""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any


class BookingStatus(str, Enum):
    """Lifecycle status of a booking as reported by the service."""

    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"


@dataclass
class Flight:
    """Domain entity representing a scheduled flight."""

    id: int
    flight_number: str
    origin: str
    destination: str
    departure_time: str
    capacity: int
    available_seats: int
    base_price: float

    def __post_init__(self):
        """Validate flight entity."""
        if not self.flight_number:
            raise ValueError("flight_number is required")
        if not self.origin:
            raise ValueError("origin is required")
        if not self.destination:
            raise ValueError("destination is required")
        if self.capacity <= 0:
            raise ValueError("capacity must be positive")
        if not 0 <= self.available_seats <= self.capacity:
            raise ValueError("available_seats must be between 0 and capacity")
        if self.base_price < 0:
            raise ValueError("base_price must be non-negative")

    def has_available_seats(self) -> bool:
        """A flight is bookable only while it has seats left."""
        return self.available_seats > 0

    @property
    def route(self) -> str:
        return f"{self.origin} → {self.destination}"

    @property
    def formatted_price(self) -> str:
        return f"${self.base_price:.2f}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Flight":
        """Build a flight from the service's JSON representation."""
        return cls(
            id=int(data["id"]),
            flight_number=data["flightNumber"],
            origin=data["origin"],
            destination=data["destination"],
            departure_time=str(data["departureTime"]),
            capacity=int(data["capacity"]),
            available_seats=int(data["availableSeats"]),
            base_price=float(data["basePrice"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "flightNumber": self.flight_number,
            "origin": self.origin,
            "destination": self.destination,
            "departureTime": self.departure_time,
            "capacity": self.capacity,
            "availableSeats": self.available_seats,
            "basePrice": self.base_price,
        }


@dataclass
class Booking:
    """Domain entity representing a flight booking.

    ``total_price`` and ``discount_amount`` are computed by the service and
    kept exactly as received.
    """

    id: int
    booking_reference: str
    flight_number: str
    origin: str
    destination: str
    departure_time: str
    passenger_name: str
    seat_number: str
    total_price: float
    discount_amount: float
    status: BookingStatus
    booking_date: str

    def __post_init__(self):
        """Validate booking entity."""
        if not self.booking_reference:
            raise ValueError("booking_reference is required")
        if not isinstance(self.status, BookingStatus):
            # Raises ValueError for unknown statuses
            self.status = BookingStatus(self.status)
        if self.total_price < 0:
            raise ValueError("total_price must be non-negative")

    def is_active(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    @property
    def route(self) -> str:
        return f"{self.origin} → {self.destination}"

    @property
    def formatted_price(self) -> str:
        return f"${self.total_price:.2f}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Booking":
        """Build a booking from the service's JSON representation."""
        return cls(
            id=int(data["id"]),
            booking_reference=data["bookingReference"],
            flight_number=data["flightNumber"],
            origin=data["origin"],
            destination=data["destination"],
            departure_time=str(data["departureTime"]),
            passenger_name=data["passengerName"],
            seat_number=data["seatNumber"],
            total_price=float(data["totalPrice"]),
            discount_amount=float(data.get("discountAmount") or 0.0),
            status=BookingStatus(data["status"]),
            booking_date=str(data["bookingDate"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "bookingReference": self.booking_reference,
            "flightNumber": self.flight_number,
            "origin": self.origin,
            "destination": self.destination,
            "departureTime": self.departure_time,
            "passengerName": self.passenger_name,
            "seatNumber": self.seat_number,
            "totalPrice": self.total_price,
            "discountAmount": self.discount_amount,
            "status": self.status.value,
            "bookingDate": self.booking_date,
        }


@dataclass
class BookingStats:
    """Summary of a user's bookings."""

    total_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    total_spent: float

    def __post_init__(self):
        if min(self.total_bookings, self.confirmed_bookings, self.cancelled_bookings) < 0:
            raise ValueError("booking counts must be non-negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingStats":
        return cls(
            total_bookings=int(data["totalBookings"]),
            confirmed_bookings=int(data["confirmedBookings"]),
            cancelled_bookings=int(data["cancelledBookings"]),
            total_spent=float(data["totalSpent"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "totalBookings": data["total_bookings"],
            "confirmedBookings": data["confirmed_bookings"],
            "cancelledBookings": data["cancelled_bookings"],
            "totalSpent": data["total_spent"],
        }
