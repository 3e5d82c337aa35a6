"""External API clients module."""
from airport_client.infrastructure.clients.airport_api_client import AirportAPIClient
from airport_client.infrastructure.clients.mock_airport_api_client import MockAirportAPIClient

__all__ = [
    "AirportAPIClient",
    "MockAirportAPIClient",
]
