"""Interface for the persistent session store (Repository Pattern)."""
from abc import ABC, abstractmethod
from typing import Optional

from airport_client.domain.entities.user import Profile


class ISessionStore(ABC):
    """
    Durable key-value store for the bearer token and the user profile.

    A token being present is what "logged in" means. Both entries are
    cleared together on logout.
    """

    @abstractmethod
    def save_token(self, token: str) -> None:
        """
        Persist the bearer token.

        Args:
            token: Opaque bearer token returned by login
        """
        pass

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """
        Read the bearer token.

        Returns:
            Token string or None when logged out
        """
        pass

    @abstractmethod
    def save_user(self, profile: Profile) -> None:
        """
        Persist the profile of the logged-in user.

        Args:
            profile: Profile returned by login
        """
        pass

    @abstractmethod
    def save_session(self, token: str, profile: Profile) -> None:
        """
        Persist token and profile together; either both are written or neither.

        Args:
            token: Opaque bearer token returned by login
            profile: Profile belonging to that token
        """
        pass

    @abstractmethod
    def get_user(self) -> Optional[Profile]:
        """
        Read the persisted profile.

        Returns:
            Profile, or None when absent or unreadable
        """
        pass

    def is_logged_in(self) -> bool:
        """True iff a token is present."""
        return self.get_token() is not None

    @abstractmethod
    def logout(self) -> None:
        """Clear token and profile in a single step."""
        pass
