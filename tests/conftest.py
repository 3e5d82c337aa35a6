import json
from concurrent.futures import Future

import pytest

from airport_client.domain.entities import Flight, Booking, BookingStatus, Profile, CustomerType, MembershipLevel
from airport_client.domain.interfaces.collection_view import ICollectionView
from airport_client.infrastructure.clients.mock_airport_api_client import MockAirportAPIClient
from airport_client.infrastructure.repositories.session_storage import RedisSessionStore


class FakePipeline:
    """Buffers SETs and applies them all at once on execute, like MULTI/EXEC."""

    def __init__(self, client):
        self.client = client
        self.commands = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.commands = []
        return False

    def set(self, key, value):
        self.commands.append((key, value))
        return self

    def execute(self):
        if self.client.write_error is not None:
            raise self.client.write_error
        for key, value in self.commands:
            self.client.data[key] = value
        self.client.transactions.append([key for key, _ in self.commands])
        return [True] * len(self.commands)


class FakeRedis:
    """Just enough of redis.Redis for the session store."""

    def __init__(self):
        self.data = {}
        self.delete_calls = []
        self.transactions = []
        self.write_error = None

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        if self.write_error is not None:
            raise self.write_error
        self.data[key] = value
        return True

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    def delete(self, *keys):
        self.delete_calls.append(keys)
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


class InlineExecutor:
    """Runs submitted work immediately in the calling thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        pass


class DeferredExecutor:
    """Queues submitted work until the test runs it, to simulate late responses."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run(self, index=0):
        future, fn, args, kwargs = self.pending.pop(index)
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def run_all(self):
        while self.pending:
            self.run(0)

    def shutdown(self, wait=True):
        pass


class RecordingView(ICollectionView):
    def __init__(self):
        self.renders = []
        self.errors = []
        self.messages = []
        self.loading = []

    def render(self, tab, script, items):
        self.renders.append((tab, script, list(items)))

    def show_error(self, message):
        self.errors.append(message)

    def set_loading(self, loading):
        self.loading.append(loading)

    def show_message(self, message):
        self.messages.append(message)


class DummyResp:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(payload) if payload is not None else ""
        self.headers = {"Content-Type": "application/json"}

    def json(self):
        return json.loads(self.text)


def make_flight(flight_id=1, seats=10, price=500.0, **overrides):
    fields = dict(
        id=flight_id,
        flight_number=f"TX{100 + flight_id}",
        origin="Dallas",
        destination="Austin",
        departure_time="08:00 AM",
        capacity=max(seats, 1),
        available_seats=seats,
        base_price=price,
    )
    fields.update(overrides)
    return Flight(**fields)


def make_booking(booking_id=1, status=BookingStatus.CONFIRMED, **overrides):
    fields = dict(
        id=booking_id,
        booking_reference=f"TXR{booking_id:06d}",
        flight_number="TX101",
        origin="Dallas",
        destination="Austin",
        departure_time="08:00 AM",
        passenger_name="John Doe",
        seat_number="12A",
        total_price=199.99,
        discount_amount=0.0,
        status=status,
        booking_date="2024-01-01T10:00:00",
    )
    fields.update(overrides)
    return Booking(**fields)


def make_profile(discount=0, **overrides):
    fields = dict(
        id=7,
        name="Jane Smith",
        email="jane@example.com",
        phone_number="555-5678",
        customer_type=CustomerType.FREQUENT_FLYER if discount else CustomerType.REGULAR,
        membership_level=MembershipLevel.GOLD if discount else MembershipLevel.NONE,
        miles_flown=30000 if discount else 0,
        discount_percent=discount,
    )
    fields.update(overrides)
    return Profile(**fields)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def session_store(fake_redis):
    return RedisSessionStore(redis_client=fake_redis, key_prefix="test:")


@pytest.fixture
def mock_api(session_store):
    return MockAirportAPIClient(session_store=session_store)


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def inline_executor():
    return InlineExecutor()


@pytest.fixture
def deferred_executor():
    return DeferredExecutor()
