"""Domain interfaces following Dependency Inversion Principle."""

from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient, LoginResult
from airport_client.domain.interfaces.collection_view import ICollectionView
from airport_client.domain.interfaces.command_handler import ICommandHandler
from airport_client.domain.interfaces.command_bus import ICommandBus

__all__ = [
    "ISessionStore",
    "IAirportAPIClient",
    "LoginResult",
    "ICollectionView",
    "ICommandHandler",
    "ICommandBus",
]
