"""Repository implementations (Infrastructure Layer).

These implement domain interfaces defined in airport_client.domain.interfaces.
"""
from airport_client.infrastructure.repositories.session_storage import RedisSessionStore

__all__ = [
    "RedisSessionStore",
]
