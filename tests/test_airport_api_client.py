import pytest
import requests

from airport_client.domain.entities import BookingRequest, BookingStatus, SeatPreference
from airport_client.domain.errors import ErrorKind
from airport_client.infrastructure.clients.airport_api_client import AirportAPIClient
from conftest import DummyResp


FLIGHT_PAYLOAD = {
    "id": 1,
    "flightNumber": "TX101",
    "origin": "Dallas",
    "destination": "Austin",
    "departureTime": "08:00 AM",
    "capacity": 150,
    "availableSeats": 149,
    "basePrice": 199.99,
}

BOOKING_PAYLOAD = {
    "id": 5,
    "bookingReference": "TXR000005",
    "flightNumber": "TX101",
    "origin": "Dallas",
    "destination": "Austin",
    "departureTime": "08:00 AM",
    "passengerName": "John Doe",
    "seatNumber": "12A",
    "totalPrice": 169.99,
    "discountAmount": 30.0,
    "status": "CONFIRMED",
    "bookingDate": "2024-01-01T10:00:00",
}

USER_PAYLOAD = {
    "id": 2,
    "name": "Jane Smith",
    "email": "jane@example.com",
    "phoneNumber": "555-5678",
    "customerType": "FREQUENT_FLYER",
    "membershipLevel": "GOLD",
    "milesFlown": 30000,
    "discountPercent": 15,
}


class RecordingSession:
    """Stands in for requests.Session.request and remembers each call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, method, url, headers=None, params=None, json=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "params": params,
            "json": json,
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def client(session_store):
    return AirportAPIClient(session_store=session_store, base_url="http://api.test", timeout=5)


def install(monkeypatch, client, response=None, error=None):
    recorder = RecordingSession(response=response, error=error)
    monkeypatch.setattr(client.session, "request", recorder)
    return recorder


def test_headers_without_token_have_no_authorization(client):
    headers = client.build_headers()
    assert "Authorization" not in headers
    assert headers["Accept"] == "application/json"
    assert "Content-Type" not in headers


def test_headers_carry_bearer_token_when_logged_in(client, session_store):
    session_store.save_token("abc123")
    headers = client.build_headers(has_body=True)
    assert headers["Authorization"] == "Bearer abc123"
    assert headers["Content-Type"] == "application/json"


def test_token_is_read_on_every_request(monkeypatch, client, session_store):
    recorder = install(monkeypatch, client, DummyResp(200, [FLIGHT_PAYLOAD]))

    client.list_available_flights()
    session_store.save_token("later")
    client.list_available_flights()
    session_store.logout()
    client.list_available_flights()

    assert "Authorization" not in recorder.calls[0]["headers"]
    assert recorder.calls[1]["headers"]["Authorization"] == "Bearer later"
    assert "Authorization" not in recorder.calls[2]["headers"]


def test_list_available_flights_decodes_payload(monkeypatch, client):
    recorder = install(monkeypatch, client, DummyResp(200, [FLIGHT_PAYLOAD]))

    result = client.list_available_flights()

    assert result.is_ok
    flights = result.unwrap()
    assert flights[0].flight_number == "TX101"
    assert flights[0].available_seats == 149
    assert recorder.calls[0]["method"] == "GET"
    assert recorder.calls[0]["url"] == "http://api.test/api/flights/available"
    assert recorder.calls[0]["timeout"] == 5


def test_login_returns_token_and_profile(monkeypatch, client):
    recorder = install(monkeypatch, client, DummyResp(200, {"token": "jwt", "user": USER_PAYLOAD}))

    result = client.login("jane@example.com", "password123")

    assert result.is_ok
    login = result.unwrap()
    assert login.token == "jwt"
    assert login.user.discount_percent == 15
    assert recorder.calls[0]["json"] == {"email": "jane@example.com", "password": "password123"}
    assert recorder.calls[0]["url"].endswith("/api/auth/login")


def test_login_without_token_in_response_is_transport_error(monkeypatch, client):
    install(monkeypatch, client, DummyResp(200, {"user": USER_PAYLOAD}))
    result = client.login("jane@example.com", "password123")
    assert not result.is_ok
    assert result.kind == ErrorKind.TRANSPORT


def test_bad_credentials_map_to_auth(monkeypatch, client):
    install(monkeypatch, client, DummyResp(401, {"message": "Invalid email or password"}))

    result = client.login("jane@example.com", "wrong")

    assert not result.is_ok
    assert result.kind == ErrorKind.AUTH
    assert result.message == "Invalid email or password"
    assert result.status_code == 401


def test_forbidden_maps_to_auth(monkeypatch, client):
    install(monkeypatch, client, DummyResp(403, {"message": "Forbidden"}))
    result = client.list_my_bookings()
    assert result.kind == ErrorKind.AUTH


def test_already_cancelled_maps_to_business(monkeypatch, client):
    install(monkeypatch, client, DummyResp(400, {"message": "Booking is already cancelled"}))

    result = client.cancel_booking(5)

    assert not result.is_ok
    assert result.kind == ErrorKind.BUSINESS
    assert result.message == "Booking is already cancelled"


def test_error_without_message_gets_generic_text(monkeypatch, client):
    install(monkeypatch, client, DummyResp(500, {}))
    result = client.list_all_flights()
    assert result.kind == ErrorKind.BUSINESS
    assert result.message == "Request failed (status 500)"


def test_error_with_plain_text_body_uses_the_text(monkeypatch, client):
    install(monkeypatch, client, DummyResp(404, text="Flight not found with id: 99"))
    result = client.get_flight(99)
    assert result.kind == ErrorKind.BUSINESS
    assert result.message == "Flight not found with id: 99"


def test_timeout_maps_to_transport(monkeypatch, client):
    install(monkeypatch, client, error=requests.exceptions.Timeout("slow"))

    result = client.list_available_flights()

    assert not result.is_ok
    assert result.kind == ErrorKind.TRANSPORT
    assert "timed out" in result.message


def test_connection_error_maps_to_transport(monkeypatch, client):
    install(monkeypatch, client, error=requests.exceptions.ConnectionError("refused"))
    result = client.list_my_bookings()
    assert result.kind == ErrorKind.TRANSPORT
    assert result.message == "Unable to reach the airport service"


def test_non_json_success_body_maps_to_transport(monkeypatch, client):
    install(monkeypatch, client, DummyResp(200, text="<html>oops</html>"))
    result = client.list_available_flights()
    assert result.kind == ErrorKind.TRANSPORT


def test_malformed_entity_maps_to_transport(monkeypatch, client):
    install(monkeypatch, client, DummyResp(200, [{"id": 1, "flightNumber": "TX101"}]))
    result = client.list_available_flights()
    assert result.kind == ErrorKind.TRANSPORT
    assert "Malformed" in result.message


def test_object_where_list_expected_maps_to_transport(monkeypatch, client):
    install(monkeypatch, client, DummyResp(200, FLIGHT_PAYLOAD))
    result = client.list_available_flights()
    assert result.kind == ErrorKind.TRANSPORT


def test_failures_are_not_retried(monkeypatch, client):
    recorder = install(monkeypatch, client, error=requests.exceptions.ConnectionError("refused"))
    client.list_available_flights()
    assert len(recorder.calls) == 1


def test_create_booking_posts_request_body(monkeypatch, client, session_store):
    session_store.save_token("abc123")
    recorder = install(monkeypatch, client, DummyResp(201, BOOKING_PAYLOAD))
    request = BookingRequest(
        flight_id=1,
        passenger_first_name="John",
        passenger_last_name="Doe",
        passenger_age=30,
        seat_number="12A",
        seat_preference=SeatPreference.WINDOW,
    )

    result = client.create_booking(request)

    assert result.is_ok
    booking = result.unwrap()
    assert booking.booking_reference == "TXR000005"
    assert booking.total_price == 169.99
    assert booking.discount_amount == 30.0
    call = recorder.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://api.test/api/bookings"
    assert call["headers"]["Authorization"] == "Bearer abc123"
    assert call["json"] == {
        "flightId": 1,
        "passengerFirstName": "John",
        "passengerLastName": "Doe",
        "passengerAge": 30,
        "seatPreference": "WINDOW",
        "seatNumber": "12A",
    }


def test_cancel_booking_issues_delete(monkeypatch, client):
    cancelled = dict(BOOKING_PAYLOAD, status="CANCELLED")
    recorder = install(monkeypatch, client, DummyResp(200, cancelled))

    result = client.cancel_booking(5)

    assert result.unwrap().status == BookingStatus.CANCELLED
    assert recorder.calls[0]["method"] == "DELETE"
    assert recorder.calls[0]["url"] == "http://api.test/api/bookings/5"


def test_route_search_passes_query_params(monkeypatch, client):
    recorder = install(monkeypatch, client, DummyResp(200, [FLIGHT_PAYLOAD]))

    client.search_flights_by_route("Dallas", "Austin", available_only=True)

    assert recorder.calls[0]["url"] == "http://api.test/api/flights/search/available"
    assert recorder.calls[0]["params"] == {"origin": "Dallas", "destination": "Austin"}


def test_path_segments_are_quoted(monkeypatch, client):
    recorder = install(monkeypatch, client, DummyResp(200, [FLIGHT_PAYLOAD]))
    client.search_flights_by_destination("San Antonio")
    assert recorder.calls[0]["url"] == "http://api.test/api/flights/search/destination/San%20Antonio"


def test_booking_stats_decoded(monkeypatch, client):
    install(monkeypatch, client, DummyResp(200, {
        "totalBookings": 3,
        "confirmedBookings": 2,
        "cancelledBookings": 1,
        "totalSpent": 350.5,
    }))
    stats = client.get_booking_stats().unwrap()
    assert stats.total_bookings == 3
    assert stats.total_spent == 350.5
