"""Command handlers for the airport client."""
from airport_client.infrastructure.handlers.airport.session_handlers import LoginHandler, RegisterHandler, LogoutHandler
from airport_client.infrastructure.handlers.airport.navigation_handlers import SelectTabHandler, RefreshHandler, ResumeHandler
from airport_client.infrastructure.handlers.airport.booking_handlers import StartBookingHandler, SubmitBookingHandler
from airport_client.infrastructure.handlers.airport.cancel_booking_handler import CancelBookingHandler

__all__ = [
    "LoginHandler",
    "RegisterHandler",
    "LogoutHandler",
    "SelectTabHandler",
    "RefreshHandler",
    "ResumeHandler",
    "StartBookingHandler",
    "SubmitBookingHandler",
    "CancelBookingHandler",
]
