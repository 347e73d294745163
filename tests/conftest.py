from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from stayhub.core.app_factory import create_application
from stayhub.core.config import Settings
from stayhub.infrastructure.persistence.json_store import JsonFileRecordStore
from stayhub.infrastructure.repositories.booking_repository import BookingRepository
from stayhub.infrastructure.repositories.property_repository import PropertyRepository
from stayhub.infrastructure.repositories.subscription_repository import SubscriptionRepository
from stayhub.services.booking_service import BookingService
from stayhub.services.listing_service import ListingService
from stayhub.services.subscription_service import SubscriptionService


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path):
    record_store = JsonFileRecordStore(tmp_path / "data")
    record_store.initialize()
    return record_store


@pytest.fixture
def property_repository(store):
    return PropertyRepository(store)


@pytest.fixture
def subscription_service(store, clock):
    return SubscriptionService(SubscriptionRepository(store), clock=clock)


@pytest.fixture
def listing_service(property_repository, clock):
    return ListingService(property_repository, clock=clock)


@pytest.fixture
def booking_service(store, property_repository, clock):
    return BookingService(BookingRepository(store), property_repository, clock=clock)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "api-data"))
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("JWT_SECRET", "test-secret-with-enough-bytes-for-hs256")
    monkeypatch.delenv("DATABASE_PATH", raising=False)
    app = create_application(Settings())
    with TestClient(app) as test_client:
        yield test_client
