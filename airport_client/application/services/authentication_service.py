"""Authentication service for the airport API."""
import logging
from typing import Optional

import redis

from airport_client.domain.entities.user import Profile
from airport_client.domain.errors import ErrorKind
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient, LoginResult
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.domain.result import Err, Result


logger = logging.getLogger(__name__)

SESSION_SAVE_FAILED_MESSAGE = "Could not save your session. Please try again"


class AuthenticationService:
    """
    Service for handling the session lifecycle.

    Orchestrates:
    1. Local validation of credentials
    2. Login against the airport API
    3. Persisting token and profile in the session store
    4. Logout (clearing both entries)
    """

    def __init__(self, api_client: IAirportAPIClient, session_store: ISessionStore):
        """
        Initialize authentication service.

        Args:
            api_client: Airport API client instance (Dependency Injection)
            session_store: Session store instance (Dependency Injection)
        """
        self.api_client = api_client
        self.session_store = session_store
        self._logger = logging.getLogger(__name__)

    def login(self, email: str, password: str) -> Result[LoginResult]:
        """
        Log in and persist the session.

        Args:
            email: Account email
            password: Account password

        Returns:
            Ok(LoginResult) on success; Err(VALIDATION) for empty fields
            (no request sent); Err(TRANSPORT) when the session cannot be
            persisted, in which case the store is left logged out; the
            client's Err otherwise
        """
        email = (email or "").strip()
        password = (password or "").strip()
        if not email or not password:
            return Err(ErrorKind.VALIDATION, "Please fill all fields")

        result = self.api_client.login(email, password)
        if not result.is_ok:
            self._logger.warning(f"Login failed for {email}: {result.message}")
            return result

        login = result.unwrap()
        try:
            self.session_store.save_session(login.token, login.user)
        except (redis.RedisError, RuntimeError) as e:
            self._logger.error(f"Could not persist session for user {login.user.id}: {e}")
            self._clear_session()
            return Err(ErrorKind.TRANSPORT, SESSION_SAVE_FAILED_MESSAGE)
        self._logger.info(f"User {login.user.id} logged in")
        return result

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        initial_miles: Optional[int] = None
    ) -> Result[Profile]:
        """
        Register an account. Does not log in.

        Args:
            name: Display name
            email: Account email
            password: Account password
            phone_number: Optional phone number; blank means none
            initial_miles: When given, registers a frequent flyer

        Returns:
            Ok(Profile) or Err
        """
        name = (name or "").strip()
        email = (email or "").strip()
        password = (password or "").strip()
        phone_number = (phone_number or "").strip() or None

        if not name or not email or not password:
            return Err(ErrorKind.VALIDATION, "Please fill all required fields")

        if initial_miles is None:
            result = self.api_client.register(name, email, password, phone_number)
        else:
            if initial_miles < 0:
                return Err(ErrorKind.VALIDATION, "Initial miles must be non-negative")
            result = self.api_client.register_frequent_flyer(name, email, password, phone_number, initial_miles)

        if result.is_ok:
            self._logger.info(f"Registered account {email}")
        else:
            self._logger.warning(f"Registration failed for {email}: {result.message}")
        return result

    def logout(self) -> None:
        """Clear the persisted session."""
        self.session_store.logout()
        self._logger.info("User logged out")

    def _clear_session(self) -> None:
        try:
            self.session_store.logout()
        except (redis.RedisError, RuntimeError) as e:
            self._logger.warning(f"Could not clear session after failed save: {e}")

    def is_authenticated(self) -> bool:
        return self.session_store.is_logged_in()

    def current_user(self) -> Optional[Profile]:
        """Profile of the logged-in user, None when logged out or unreadable."""
        if not self.session_store.is_logged_in():
            return None
        return self.session_store.get_user()
