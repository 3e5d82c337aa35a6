"""Airport API client for making authenticated requests."""
import logging
import requests
from typing import Optional, Dict, Any, List, Callable, TypeVar
from urllib.parse import quote
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from airport_client.config.settings import Config
from airport_client.domain.entities.flight import Flight, Booking, BookingStats
from airport_client.domain.entities.user import Profile
from airport_client.domain.entities.booking_request import BookingRequest
from airport_client.domain.errors import AirportAPIError, TransportError, AuthError, BusinessError
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient, LoginResult
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.domain.result import Ok, Err, Result


logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "Request failed"
AUTH_STATUS_CODES = (401, 403)


class AirportAPIClient(IAirportAPIClient):
    """
    Client for interacting with the airport reservation API.

    Reads the bearer token from the session store before every request and
    attaches it as an Authorization header when present. Failures are never
    retried; every public operation returns Ok or Err.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        http_session: Optional[requests.Session] = None
    ):
        """
        Initialize the airport API client.

        Args:
            session_store: Store holding the bearer token (Dependency Injection)
            base_url: Base URL for the airport API (defaults to Config value)
            timeout: Connect/read timeout in seconds (defaults to Config value)
            http_session: Optional pre-built requests session
        """
        self.session_store = session_store
        self.base_url = base_url or Config.AIRPORT_API_BASE_URL
        self.timeout = timeout or Config.AIRPORT_API_TIMEOUT
        self._logger = logging.getLogger(__name__)

        self.session = http_session or requests.Session()
        # Mounted explicitly so no layer below retries on our behalf
        adapter = HTTPAdapter(max_retries=Retry(total=0, read=False, raise_on_status=False))
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def build_headers(self, has_body: bool = False) -> Dict[str, str]:
        """
        Build request headers, including the bearer token if one is stored.

        Args:
            has_body: Whether a JSON body will be sent

        Returns:
            Header dictionary; no Authorization key when logged out
        """
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"

        token = self.session_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an HTTP request to the airport API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (relative to base_url)
            params: Optional query parameters
            json_data: Optional JSON body

        Returns:
            Decoded JSON body

        Raises:
            TransportError: Connectivity problems, timeouts, unreadable bodies
            AuthError: 401/403 responses
            BusinessError: Any other error status
        """
        url = f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        headers = self.build_headers(has_body=json_data is not None)

        self._logger.debug(f"Request: {method} {url}")
        self._logger.debug(f"Authenticated: {'Authorization' in headers}")
        if params:
            self._logger.debug(f"Params: {params}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            self._logger.error(f"Request timed out after {self.timeout}s: {method} {url}")
            raise TransportError(f"Request timed out after {self.timeout} seconds") from e
        except requests.exceptions.ConnectionError as e:
            self._logger.error(f"Connection failed: {method} {url} - {e}")
            raise TransportError("Unable to reach the airport service") from e
        except requests.exceptions.RequestException as e:
            self._logger.error(f"API request failed: {method} {url} - {e}")
            raise TransportError(f"Request failed: {e}") from e

        self._logger.debug(f"Status Code: {response.status_code}")

        if response.status_code >= 400:
            message = self._extract_error_message(response)
            self._logger.warning(f"HTTP error {response.status_code}: {method} {url} - {message}")
            if response.status_code in AUTH_STATUS_CODES:
                raise AuthError(message, status_code=response.status_code)
            raise BusinessError(message, status_code=response.status_code)

        if not response.text:
            self._logger.error(f"Empty response from {method} {url}")
            raise TransportError(f"Empty response (status {response.status_code})")

        try:
            return response.json()
        except ValueError as json_error:
            self._logger.error(f"Non-JSON response from {method} {url}")
            self._logger.error(f"Response text (first 500 chars): {response.text[:500]}")
            raise TransportError("Expected JSON response from the airport service") from json_error

    @staticmethod
    def _extract_error_message(response: requests.Response) -> str:
        """Prefer the service's ``message`` field, then the raw body, then a generic text."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        if response.text and body is None:
            return response.text.strip()[:500]
        return f"{GENERIC_ERROR_MESSAGE} (status {response.status_code})"

    def _call(self, operation: str, func: Callable[[], T]) -> Result[T]:
        """Run an operation and fold its failure into an Err."""
        try:
            return Ok(func())
        except AirportAPIError as e:
            self._logger.info(f"{operation} failed ({e.kind.value}): {e.message}")
            return Err.from_exception(e)

    @staticmethod
    def _decode(data: Any, decoder: Callable[[Dict[str, Any]], T]) -> T:
        try:
            return decoder(data)
        except (KeyError, ValueError, TypeError) as e:
            raise TransportError(f"Malformed response from the airport service: {e}") from e

    @classmethod
    def _decode_list(cls, data: Any, decoder: Callable[[Dict[str, Any]], T]) -> List[T]:
        if not isinstance(data, list):
            raise TransportError("Malformed response from the airport service: expected a list")
        return [cls._decode(item, decoder) for item in data]

    @staticmethod
    def _segment(value: Any) -> str:
        """Quote a value for use as a single path segment."""
        return quote(str(value), safe="")

    # Authentication

    def login(self, email: str, password: str) -> Result[LoginResult]:
        """
        Authenticate with email and password.

        Returns:
            Ok(LoginResult) with the token and profile, Err(AUTH) on bad credentials
        """
        def run() -> LoginResult:
            self._logger.info("Authenticating with airport API...")
            data = self._make_request("POST", "/api/auth/login", json_data={"email": email, "password": password})
            token = data.get("token") if isinstance(data, dict) else None
            if not token:
                raise TransportError("Malformed login response: missing token")
            user = self._decode(data.get("user"), Profile.from_dict)
            self._logger.info(f"Authentication successful for user {user.id}")
            return LoginResult(token=token, user=user)

        return self._call("login", run)

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None
    ) -> Result[Profile]:
        payload = {"name": name, "email": email, "password": password, "phoneNumber": phone_number}
        return self._call(
            "register",
            lambda: self._decode(self._make_request("POST", "/api/auth/register", json_data=payload), Profile.from_dict),
        )

    def register_frequent_flyer(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        initial_miles: int = 0
    ) -> Result[Profile]:
        payload = {
            "name": name,
            "email": email,
            "password": password,
            "phoneNumber": phone_number,
            "initialMiles": initial_miles,
        }
        return self._call(
            "register_frequent_flyer",
            lambda: self._decode(
                self._make_request("POST", "/api/auth/register/frequent-flyer", json_data=payload),
                Profile.from_dict,
            ),
        )

    # Flights

    def _flights(self, operation: str, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Result[List[Flight]]:
        return self._call(
            operation,
            lambda: self._decode_list(self._make_request("GET", endpoint, params=params), Flight.from_dict),
        )

    def _flight(self, operation: str, endpoint: str) -> Result[Flight]:
        return self._call(
            operation,
            lambda: self._decode(self._make_request("GET", endpoint), Flight.from_dict),
        )

    def list_all_flights(self) -> Result[List[Flight]]:
        return self._flights("list_all_flights", "/api/flights")

    def list_available_flights(self) -> Result[List[Flight]]:
        return self._flights("list_available_flights", "/api/flights/available")

    def get_flight(self, flight_id: int) -> Result[Flight]:
        return self._flight("get_flight", f"/api/flights/{self._segment(flight_id)}")

    def get_flight_by_number(self, flight_number: str) -> Result[Flight]:
        return self._flight("get_flight_by_number", f"/api/flights/number/{self._segment(flight_number)}")

    def search_flights_by_destination(self, destination: str) -> Result[List[Flight]]:
        return self._flights(
            "search_flights_by_destination",
            f"/api/flights/search/destination/{self._segment(destination)}",
        )

    def search_flights_by_origin(self, origin: str) -> Result[List[Flight]]:
        return self._flights("search_flights_by_origin", f"/api/flights/search/origin/{self._segment(origin)}")

    def search_flights_by_route(
        self,
        origin: str,
        destination: str,
        available_only: bool = False
    ) -> Result[List[Flight]]:
        endpoint = "/api/flights/search/available" if available_only else "/api/flights/search/route"
        return self._flights(
            "search_flights_by_route",
            endpoint,
            params={"origin": origin, "destination": destination},
        )

    # Bookings

    def _bookings(self, operation: str, endpoint: str) -> Result[List[Booking]]:
        return self._call(
            operation,
            lambda: self._decode_list(self._make_request("GET", endpoint), Booking.from_dict),
        )

    def _booking(self, operation: str, method: str, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> Result[Booking]:
        return self._call(
            operation,
            lambda: self._decode(self._make_request(method, endpoint, json_data=json_data), Booking.from_dict),
        )

    def list_my_bookings(self) -> Result[List[Booking]]:
        return self._bookings("list_my_bookings", "/api/bookings")

    def list_active_bookings(self) -> Result[List[Booking]]:
        return self._bookings("list_active_bookings", "/api/bookings/active")

    def get_booking(self, booking_id: int) -> Result[Booking]:
        return self._booking("get_booking", "GET", f"/api/bookings/{self._segment(booking_id)}")

    def get_booking_by_reference(self, reference: str) -> Result[Booking]:
        return self._booking("get_booking_by_reference", "GET", f"/api/bookings/reference/{self._segment(reference)}")

    def create_booking(self, request: BookingRequest) -> Result[Booking]:
        self._logger.info(f"Creating booking on flight {request.flight_id}")
        return self._booking("create_booking", "POST", "/api/bookings", json_data=request.to_dict())

    def cancel_booking(self, booking_id: int) -> Result[Booking]:
        self._logger.info(f"Cancelling booking {booking_id}")
        return self._booking("cancel_booking", "DELETE", f"/api/bookings/{self._segment(booking_id)}")

    def cancel_booking_by_reference(self, reference: str) -> Result[Booking]:
        self._logger.info(f"Cancelling booking {reference}")
        return self._booking(
            "cancel_booking_by_reference",
            "DELETE",
            f"/api/bookings/reference/{self._segment(reference)}",
        )

    def get_booking_stats(self) -> Result[BookingStats]:
        return self._call(
            "get_booking_stats",
            lambda: self._decode(self._make_request("GET", "/api/bookings/stats"), BookingStats.from_dict),
        )
