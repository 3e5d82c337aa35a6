"""Redis-based session store implementation."""
import logging
import json
from typing import Optional
import redis

from airport_client.domain.entities.user import Profile
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.config.settings import Config


class RedisSessionStore(ISessionStore):
    """
    Redis-based session store implementation.

    Follows Repository Pattern and Single Responsibility Principle.
    Keys carry no TTL: the session survives restarts until logout.
    """

    TOKEN_KEY = "jwt_token"
    USER_KEY = "user_info"

    def __init__(self, redis_client: Optional[redis.Redis], key_prefix: Optional[str] = None):
        """
        Initialize the session store.

        Args:
            redis_client: Redis client instance (Dependency Injection), None when unavailable
            key_prefix: Namespace for the two session keys (defaults to Config value)
        """
        self.redis = redis_client
        self._key_prefix = key_prefix if key_prefix is not None else Config.SESSION_KEY_PREFIX
        self._logger = logging.getLogger(__name__)

    def _get_key(self, name: str) -> str:
        """Generate Redis key for a session entry."""
        return f"{self._key_prefix}{name}"

    def _require_redis(self, action: str) -> redis.Redis:
        if not self.redis:
            self._logger.warning(f"Redis not available - cannot {action}")
            raise RuntimeError(f"Redis not available - cannot {action}")
        return self.redis

    def save_token(self, token: str) -> None:
        """Store the bearer token."""
        if not token:
            raise ValueError("token cannot be empty")
        client = self._require_redis("store token")
        try:
            client.set(self._get_key(self.TOKEN_KEY), token)
            self._logger.debug(f"Token stored ({token[:8]}...)")
        except redis.RedisError as e:
            self._logger.error(f"Failed to store token: {e}")
            raise

    def get_token(self) -> Optional[str]:
        """Read the bearer token, None when logged out or Redis is unreachable."""
        if not self.redis:
            self._logger.warning("Redis not available - cannot read token")
            return None
        try:
            token = self.redis.get(self._get_key(self.TOKEN_KEY))
        except redis.RedisError as e:
            self._logger.error(f"Failed to read token: {e}")
            return None
        return token or None

    def save_user(self, profile: Profile) -> None:
        """Store the profile as JSON."""
        client = self._require_redis("store user")
        try:
            client.set(self._get_key(self.USER_KEY), json.dumps(profile.to_dict()))
            self._logger.debug(f"Profile stored for user {profile.id}")
        except redis.RedisError as e:
            self._logger.error(f"Failed to store user: {e}")
            raise

    def save_session(self, token: str, profile: Profile) -> None:
        """Store token and profile in one MULTI/EXEC transaction."""
        if not token:
            raise ValueError("token cannot be empty")
        client = self._require_redis("store session")
        try:
            with client.pipeline(transaction=True) as pipe:
                pipe.set(self._get_key(self.TOKEN_KEY), token)
                pipe.set(self._get_key(self.USER_KEY), json.dumps(profile.to_dict()))
                pipe.execute()
            self._logger.debug(f"Session stored for user {profile.id} ({token[:8]}...)")
        except redis.RedisError as e:
            self._logger.error(f"Failed to store session: {e}")
            raise

    def get_user(self) -> Optional[Profile]:
        """Read the profile; corrupt or missing data yields None."""
        if not self.redis:
            self._logger.warning("Redis not available - cannot read user")
            return None
        try:
            data = self.redis.get(self._get_key(self.USER_KEY))
        except redis.RedisError as e:
            self._logger.error(f"Failed to read user: {e}")
            return None

        if data is None:
            return None

        try:
            return Profile.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError) as e:
            self._logger.warning(f"Discarding unreadable stored profile: {e}")
            return None

    def logout(self) -> None:
        """Delete token and profile with a single DEL command."""
        client = self._require_redis("clear session")
        try:
            client.delete(self._get_key(self.TOKEN_KEY), self._get_key(self.USER_KEY))
            self._logger.info("Session cleared")
        except redis.RedisError as e:
            self._logger.error(f"Failed to clear session: {e}")
            raise
