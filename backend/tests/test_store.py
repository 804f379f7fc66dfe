"""Tests for the in-memory alert, outage and reading stores."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from spas.schemas.alert import AlertCreate, AlertUpdate
from spas.schemas.outage import OutageCreate, OutageUpdate
from spas.schemas.reading import ReadingCreate
from spas.services import seed
from spas.services.readings import InMemoryReadingStore
from spas.services.store import (
    ConflictError,
    IdGenerator,
    InMemoryAlertStore,
    InMemoryOutageStore,
    NotFoundError,
    paginate,
)

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def _alert(**kwargs) -> AlertCreate:
    defaults = {
        "type": "undervoltage",
        "severity": "high",
        "location": "East Legon",
        "region": "Greater Accra",
        "message": "UNDERVOLTAGE: Risk of appliance malfunction",
        "affected_users": 100,
    }
    defaults.update(kwargs)
    return AlertCreate(**defaults)


def _outage(start: datetime = T0, **kwargs) -> OutageCreate:
    defaults = {
        "location": "Kumasi Central",
        "region": "Ashanti",
        "start_time": start,
        "estimated_end_time": start + timedelta(hours=2),
        "cause": "Power line fault",
        "status": "active",
        "affected_users": 500,
    }
    defaults.update(kwargs)
    return OutageCreate(**defaults)


# --- Pagination / ids ---

def test_paginate_second_page():
    items = list(range(1, 26))
    page, pagination = paginate(items, page=2, limit=10)
    assert page == list(range(11, 21))
    assert pagination.total_pages == 3
    assert pagination.total_items == 25
    assert pagination.current_page == 2
    assert pagination.items_per_page == 10


def test_paginate_past_end_is_empty():
    page, pagination = paginate([1, 2, 3], page=5, limit=10)
    assert page == []
    assert pagination.total_pages == 1


def test_id_generator_unique_within_same_millisecond():
    ids = IdGenerator(FakeClock())
    generated = [ids.next() for _ in range(5)]
    assert len(set(generated)) == 5
    assert generated == sorted(generated, key=int)


# --- Alert validation ---

def test_alert_create_rejects_bad_severity():
    with pytest.raises(ValidationError):
        _alert(severity="urgent")


def test_alert_create_rejects_negative_users():
    with pytest.raises(ValidationError):
        _alert(affected_users=-1)


def test_alert_create_requires_message():
    with pytest.raises(ValidationError):
        AlertCreate(type="outage", severity="low", location="Tema", region="Greater Accra")


# --- Alert store ---

def test_alert_create_assigns_id_and_times():
    store = InMemoryAlertStore(clock=FakeClock())
    alert = store.create(_alert())
    assert alert.id
    assert alert.timestamp == T0
    assert alert.created_at == T0
    assert alert.resolved_at is None
    assert store.get(alert.id) == alert


def test_alert_get_unknown():
    with pytest.raises(NotFoundError):
        InMemoryAlertStore().get("nope")


def test_alert_query_sorted_by_severity_then_newest():
    clock = FakeClock()
    store = InMemoryAlertStore(clock=clock)
    low = store.create(_alert(severity="low"))
    clock.advance(minutes=1)
    high_old = store.create(_alert(severity="high"))
    clock.advance(minutes=1)
    critical = store.create(_alert(severity="critical"))
    clock.advance(minutes=1)
    high_new = store.create(_alert(severity="high"))

    items, _ = store.query()
    assert [a.id for a in items] == [critical.id, high_new.id, high_old.id, low.id]


def test_alert_query_filters():
    store = InMemoryAlertStore(clock=FakeClock())
    store.create(_alert(type="undervoltage", region="Greater Accra"))
    store.create(_alert(type="outage", region="Ashanti"))
    resolved = store.create(_alert(type="outage", region="Greater Accra", severity="low"))
    store.resolve(resolved.id)

    assert len(store.query(type="outage")[0]) == 2
    assert len(store.query(severity="low")[0]) == 1
    assert len(store.query(region="accra")[0]) == 2
    assert [a.id for a in store.query(status="resolved")[0]] == [resolved.id]
    assert len(store.query(status="active")[0]) == 2


def test_alert_query_pagination():
    clock = FakeClock()
    store = InMemoryAlertStore(clock=clock)
    created = []
    for _ in range(25):
        created.append(store.create(_alert()))
        clock.advance(seconds=1)

    items, pagination = store.query(page=2, limit=10)
    newest_first = list(reversed(created))
    assert [a.id for a in items] == [a.id for a in newest_first[10:20]]
    assert pagination.total_pages == 3
    assert pagination.total_items == 25


def test_alert_resolve_once():
    clock = FakeClock()
    store = InMemoryAlertStore(clock=clock)
    alert = store.create(_alert())

    clock.advance(minutes=5)
    resolved = store.resolve(alert.id)
    assert resolved.resolved_at == T0 + timedelta(minutes=5)

    clock.advance(minutes=5)
    with pytest.raises(ConflictError):
        store.resolve(alert.id)
    assert store.get(alert.id).resolved_at == T0 + timedelta(minutes=5)


def test_alert_resolve_unknown():
    with pytest.raises(NotFoundError):
        InMemoryAlertStore().resolve("missing")


def test_alert_update_is_partial():
    store = InMemoryAlertStore(clock=FakeClock())
    alert = store.create(_alert())
    updated = store.update(alert.id, AlertUpdate(severity="critical"))
    assert updated.severity == "critical"
    assert updated.message == alert.message
    assert updated.resolved_at is None


def test_alert_update_resolved_at_only_once():
    store = InMemoryAlertStore(clock=FakeClock())
    alert = store.create(_alert())
    store.update(alert.id, AlertUpdate(resolved_at=T0 + timedelta(hours=1)))
    with pytest.raises(ConflictError):
        store.update(alert.id, AlertUpdate(resolved_at=T0 + timedelta(hours=2)))
    assert store.get(alert.id).resolved_at == T0 + timedelta(hours=1)


def test_alert_update_unknown():
    with pytest.raises(NotFoundError):
        InMemoryAlertStore().update("missing", AlertUpdate(message="x"))


def test_alert_active_excludes_resolved():
    store = InMemoryAlertStore(clock=FakeClock())
    a = store.create(_alert(severity="low"))
    b = store.create(_alert(severity="critical"))
    store.resolve(a.id)
    assert [x.id for x in store.active()] == [b.id]


def test_alert_stats_window():
    clock = FakeClock()
    store = InMemoryAlertStore(clock=clock)
    store.create(_alert(type="undervoltage", severity="high", affected_users=100))
    clock.advance(hours=5)
    recent = store.create(_alert(type="outage", severity="low", affected_users=50))
    store.resolve(recent.id)
    clock.advance(minutes=30)

    stats = store.stats(period="1h")
    assert stats.total == 1
    assert stats.resolved == 1
    assert stats.by_type == {"outage": 1}

    stats = store.stats(period="24h")
    assert stats.total == 2
    assert stats.active == 1
    assert stats.by_severity == {"high": 1, "low": 1}
    assert stats.total_affected_users == 150


def test_seeded_alert_store():
    store = InMemoryAlertStore(seed.demo_alerts(T0), clock=FakeClock())
    assert len(store.active()) == 2
    assert store.stats(period="24h").resolved == 1


# --- Outage store ---

def test_outage_query_sorted_by_start_desc():
    store = InMemoryOutageStore(clock=FakeClock())
    old = store.create(_outage(start=T0 - timedelta(hours=3)))
    new = store.create(_outage(start=T0 - timedelta(hours=1)))
    items, _ = store.query()
    assert [o.id for o in items] == [new.id, old.id]


def test_outage_query_filters():
    store = InMemoryOutageStore(clock=FakeClock())
    store.create(_outage(status="active", region="Ashanti", location="Kumasi Central"))
    store.create(_outage(status="scheduled", region="Western", location="Takoradi"))
    assert len(store.query(status="scheduled")[0]) == 1
    assert len(store.query(region="ASHANTI")[0]) == 1
    assert len(store.query(location="kumasi")[0]) == 1


def test_outage_resolve_once():
    clock = FakeClock()
    store = InMemoryOutageStore(clock=clock)
    outage = store.create(_outage())
    clock.advance(hours=1)
    resolved = store.resolve(outage.id)
    assert resolved.status == "resolved"
    assert resolved.actual_end_time == T0 + timedelta(hours=1)

    with pytest.raises(ConflictError):
        store.resolve(outage.id)
    assert store.get(outage.id).actual_end_time == T0 + timedelta(hours=1)


def test_outage_update_partial():
    store = InMemoryOutageStore(clock=FakeClock())
    outage = store.create(_outage(description="initial"))
    updated = store.update(outage.id, OutageUpdate(cause="Storm damage"))
    assert updated.cause == "Storm damage"
    assert updated.description == "initial"
    assert updated.status == "active"


def test_outage_update_to_resolved_sets_end_time():
    clock = FakeClock()
    store = InMemoryOutageStore(clock=clock)
    outage = store.create(_outage())
    clock.advance(minutes=90)
    updated = store.update(outage.id, OutageUpdate(status="resolved"))
    assert updated.actual_end_time == T0 + timedelta(minutes=90)


def test_outage_update_cannot_reopen_resolved():
    store = InMemoryOutageStore(clock=FakeClock())
    outage = store.create(_outage())
    store.resolve(outage.id)
    with pytest.raises(ConflictError):
        store.update(outage.id, OutageUpdate(status="active"))


def test_outage_stats():
    clock = FakeClock()
    store = InMemoryOutageStore(clock=clock)
    done = store.create(_outage(start=T0 - timedelta(hours=2), affected_users=100))
    store.create(_outage(start=T0 - timedelta(hours=1), status="scheduled", affected_users=200))
    store.create(_outage(start=T0 - timedelta(days=3), affected_users=999))
    store.resolve(done.id)

    stats = store.stats(period="24h")
    assert stats.total == 2
    assert stats.resolved == 1
    assert stats.scheduled == 1
    assert stats.active == 0
    assert stats.avg_duration_minutes == 120
    assert stats.total_affected_users == 300


def test_outage_naive_datetimes_are_utc():
    payload = _outage(start=datetime(2026, 3, 1, 10, 0), estimated_end_time=datetime(2026, 3, 1, 12, 0))
    assert payload.start_time.tzinfo is not None
    assert payload.start_time == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


# --- Reading store ---

def _reading(location="Accra Central", region="Greater Accra", voltage=230.0, frequency=50.0) -> ReadingCreate:
    return ReadingCreate(voltage=voltage, frequency=frequency, location=location,
                         region=region, device_id="sensor-001")


def test_reading_validation_range():
    with pytest.raises(ValidationError):
        _reading(voltage=170)
    with pytest.raises(ValidationError):
        _reading(frequency=53)


def test_reading_current_is_latest_per_location():
    clock = FakeClock()
    store = InMemoryReadingStore(clock=clock)
    store.submit(_reading(voltage=220.0))
    clock.advance(minutes=1)
    latest = store.submit(_reading(voltage=225.0))
    other = store.submit(_reading(location="Tema", voltage=231.0))

    current = {r.location: r for r in store.current()}
    assert current["Accra Central"].id == latest.id
    assert current["Tema"].id == other.id


def test_reading_history_and_limit():
    clock = FakeClock()
    store = InMemoryReadingStore(clock=clock)
    for _ in range(5):
        store.submit(_reading())
        clock.advance(minutes=1)

    readings = store.history(limit=2)
    assert len(readings) == 2
    assert readings[0].timestamp > readings[1].timestamp

    readings = store.history(start=T0 + timedelta(minutes=3))
    assert len(readings) == 2


def test_reading_by_location_not_found():
    with pytest.raises(NotFoundError):
        InMemoryReadingStore().by_location("Nowhere")


def test_reading_stats():
    clock = FakeClock()
    store = InMemoryReadingStore(clock=clock)
    store.submit(_reading(voltage=220.0, frequency=49.5))
    store.submit(_reading(voltage=240.0, frequency=50.5))

    stats = store.stats(period="1h")
    assert stats.total_readings == 2
    assert stats.avg_voltage == 230.0
    assert stats.min_voltage == 220.0
    assert stats.max_frequency == 50.5


def test_reading_stats_empty():
    stats = InMemoryReadingStore().stats()
    assert stats.total_readings == 0
    assert stats.avg_voltage == 0.0
