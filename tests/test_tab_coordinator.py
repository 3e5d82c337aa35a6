from unittest.mock import MagicMock

import pytest

from airport_client.application.use_cases.tab_coordinator import Tab, TabCoordinator
from airport_client.domain.entities import BookingRequest, BookingStatus
from airport_client.domain.errors import ErrorKind
from airport_client.domain.result import Ok, Err
from conftest import make_booking, make_flight


@pytest.fixture
def api():
    client = MagicMock()
    client.list_available_flights.return_value = Ok([make_flight(1), make_flight(2)])
    client.list_my_bookings.return_value = Ok([make_booking(1)])
    return client


def login(mock_api, session_store, email="john@example.com"):
    token = mock_api.login(email, "password123").unwrap().token
    session_store.save_token(token)


def book(mock_api, flight_id=1):
    request = BookingRequest(
        flight_id=flight_id,
        passenger_first_name="John",
        passenger_last_name="Doe",
        passenger_age=30,
        seat_number="1A",
    )
    return mock_api.create_booking(request).unwrap()


def test_select_tab_fetches_and_renders(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)

    future = coordinator.select_tab(Tab.FLIGHTS)

    assert future.result() is True
    tab, script, items = view.renders[-1]
    assert tab == Tab.FLIGHTS
    assert [item.id for _, item in script.inserted] == [1, 2]
    assert coordinator.snapshot() == items
    assert view.loading == [True, False]


def test_every_activation_refetches(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)

    coordinator.select_tab(Tab.FLIGHTS)
    coordinator.refresh()
    coordinator.on_resume()
    coordinator.select_tab(Tab.FLIGHTS)

    assert api.list_available_flights.call_count == 4
    # Unchanged data yields an empty script after the first load
    assert not view.renders[-1][1].has_changes


def test_refresh_diffs_against_previous_snapshot(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)
    coordinator.select_tab(Tab.FLIGHTS)

    api.list_available_flights.return_value = Ok([make_flight(2), make_flight(3)])
    coordinator.refresh()

    script = view.renders[-1][1]
    assert script.removed == (1,)
    assert [item.id for _, item in script.inserted] == [3]


def test_late_response_for_inactive_tab_is_discarded(api, view, deferred_executor):
    coordinator = TabCoordinator(api, view, executor=deferred_executor)

    flights_future = coordinator.select_tab(Tab.FLIGHTS)
    bookings_future = coordinator.select_tab(Tab.BOOKINGS)

    deferred_executor.run(1)  # bookings arrive first
    deferred_executor.run(0)  # flights arrive late

    assert bookings_future.result() is True
    assert flights_future.result() is False
    assert [tab for tab, _, _ in view.renders] == [Tab.BOOKINGS]
    assert coordinator.snapshot(Tab.FLIGHTS) == []
    assert coordinator.active_tab == Tab.BOOKINGS


def test_older_fetch_of_same_tab_is_discarded(api, view, deferred_executor):
    coordinator = TabCoordinator(api, view, executor=deferred_executor)

    api.list_available_flights.side_effect = [Ok([make_flight(1)]), Ok([make_flight(9)])]
    first = coordinator.refresh()
    second = coordinator.refresh()

    deferred_executor.run(1)  # newer request answers first
    deferred_executor.run(0)

    assert second.result() is True
    assert first.result() is False
    assert [f.id for f in coordinator.snapshot(Tab.FLIGHTS)] == [1]


def test_switching_back_and_forth_only_applies_latest(api, view, deferred_executor):
    coordinator = TabCoordinator(api, view, executor=deferred_executor)

    coordinator.select_tab(Tab.FLIGHTS)
    coordinator.select_tab(Tab.BOOKINGS)
    coordinator.select_tab(Tab.FLIGHTS)
    deferred_executor.run_all()

    assert [tab for tab, _, _ in view.renders] == [Tab.FLIGHTS]


def test_fetch_error_is_shown_and_snapshot_kept(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)
    coordinator.select_tab(Tab.FLIGHTS)
    before = coordinator.snapshot()

    api.list_available_flights.return_value = Err(ErrorKind.TRANSPORT, "Unable to reach the airport service")
    coordinator.refresh()

    assert view.errors == ["Unable to reach the airport service"]
    assert coordinator.snapshot() == before
    assert len(view.renders) == 1


def test_empty_collection_shows_message(api, view, inline_executor):
    api.list_my_bookings.return_value = Ok([])
    coordinator = TabCoordinator(api, view, executor=inline_executor)

    coordinator.select_tab(Tab.BOOKINGS)

    assert view.renders[-1][1].is_empty
    assert view.messages == ["No bookings yet"]


def test_unexpected_fetch_exception_propagates_through_future(api, view, inline_executor):
    api.list_available_flights.side_effect = RuntimeError("boom")
    coordinator = TabCoordinator(api, view, executor=inline_executor)

    future = coordinator.select_tab(Tab.FLIGHTS)

    with pytest.raises(RuntimeError):
        future.result()
    assert view.loading == [True, False]


def test_is_bookable_follows_seat_count():
    assert TabCoordinator.is_bookable(make_flight(1, seats=3))
    assert not TabCoordinator.is_bookable(make_flight(1, seats=0, capacity=10))


def test_cancel_requires_confirmation(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)
    assert coordinator.cancel_booking(make_booking(1), confirmed=False) is None
    api.cancel_booking.assert_not_called()


def test_cancel_then_refetch_shows_cancelled_status(mock_api, session_store, view, inline_executor):
    login(mock_api, session_store)
    booking = book(mock_api)
    coordinator = TabCoordinator(mock_api, view, executor=inline_executor)
    coordinator.select_tab(Tab.BOOKINGS)

    result = coordinator.cancel_booking(booking, confirmed=True).result()

    assert result.is_ok
    assert "Booking cancelled" in view.messages
    tab, script, items = view.renders[-1]
    assert tab == Tab.BOOKINGS
    assert [item.id for _, item in script.changed] == [booking.id]
    assert items[0].status == BookingStatus.CANCELLED


def test_cancelling_twice_reports_business_error(mock_api, session_store, view, inline_executor):
    login(mock_api, session_store)
    booking = book(mock_api)
    coordinator = TabCoordinator(mock_api, view, executor=inline_executor)
    coordinator.select_tab(Tab.BOOKINGS)
    coordinator.cancel_booking(booking, confirmed=True).result()
    renders_before = len(view.renders)
    snapshot_before = coordinator.snapshot()

    result = coordinator.cancel_booking(booking, confirmed=True).result()

    assert result.kind == ErrorKind.BUSINESS
    assert view.errors == ["Booking is already cancelled"]
    assert len(view.renders) == renders_before
    assert coordinator.snapshot() == snapshot_before


def test_cancel_from_other_tab_discards_bookings_refetch(mock_api, session_store, view, inline_executor):
    login(mock_api, session_store)
    booking = book(mock_api)
    coordinator = TabCoordinator(mock_api, view, executor=inline_executor)
    coordinator.select_tab(Tab.FLIGHTS)
    view.loading.clear()

    coordinator.cancel_booking(booking, confirmed=True).result()

    assert all(tab == Tab.FLIGHTS for tab, _, _ in view.renders)
    assert view.loading == []


def test_logged_out_bookings_fetch_shows_auth_error(mock_api, view, inline_executor):
    coordinator = TabCoordinator(mock_api, view, executor=inline_executor)
    coordinator.select_tab(Tab.BOOKINGS)
    assert view.errors == ["Authentication required"]
    assert view.renders == []


def test_duplicate_ids_in_response_release_view_and_keep_snapshot(api, view, inline_executor):
    coordinator = TabCoordinator(api, view, executor=inline_executor)
    coordinator.select_tab(Tab.FLIGHTS)
    before = coordinator.snapshot()

    api.list_available_flights.return_value = Ok([make_flight(1), make_flight(1)])
    future = coordinator.refresh()

    assert future.result() is True
    assert view.loading == [True, False, True, False]
    assert view.errors == ["Received an invalid list from the airport service"]
    assert coordinator.snapshot() == before
    assert len(view.renders) == 1
