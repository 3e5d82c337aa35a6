"""Command objects describing user intents.

The presentation layer creates these and hands them to the command bus
instead of calling services from widget callbacks.
"""
from dataclasses import dataclass
from typing import Optional

from airport_client.application.use_cases.booking_workflow import BookingForm, BookingWorkflow
from airport_client.application.use_cases.tab_coordinator import Tab
from airport_client.domain.entities.flight import Booking, Flight


@dataclass(frozen=True)
class Login:
    email: str
    password: str


@dataclass(frozen=True)
class Register:
    name: str
    email: str
    password: str
    phone_number: Optional[str] = None
    initial_miles: Optional[int] = None  # set to register a frequent flyer


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class SelectTab:
    tab: Tab


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class StartBooking:
    flight: Flight


@dataclass(frozen=True)
class SubmitBooking:
    workflow: BookingWorkflow
    form: BookingForm


@dataclass(frozen=True)
class CancelBooking:
    booking: Booking
    confirmed: bool = False
