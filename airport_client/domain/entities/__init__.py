"""Domain entities - core business objects."""
from airport_client.domain.entities.flight import Flight, Booking, BookingStats, BookingStatus
from airport_client.domain.entities.user import Profile, CustomerType, MembershipLevel
from airport_client.domain.entities.booking_request import BookingRequest, SeatPreference

__all__ = [
    "Flight",
    "Booking",
    "BookingStats",
    "BookingStatus",
    "Profile",
    "CustomerType",
    "MembershipLevel",
    "BookingRequest",
    "SeatPreference",
]
