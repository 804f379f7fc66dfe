"""FastAPI dependency providers.

Stores are process-wide singletons; tests swap them through
app.dependency_overrides.
"""

import random

from spas.config import settings
from spas.services import seed
from spas.services.readings import InMemoryReadingStore
from spas.services.region_loader import CsvRegionSource
from spas.services.store import AlertStore, InMemoryAlertStore, InMemoryOutageStore, OutageStore
from spas.services.trends import TrendSynthesizer

_alert_store = InMemoryAlertStore(seed.demo_alerts() if settings.seed_demo_data else None)
_outage_store = InMemoryOutageStore(seed.demo_outages() if settings.seed_demo_data else None)
_reading_store = InMemoryReadingStore(seed.demo_readings() if settings.seed_demo_data else None)


def get_alert_store() -> AlertStore:
    return _alert_store


def get_outage_store() -> OutageStore:
    return _outage_store


def get_reading_store() -> InMemoryReadingStore:
    return _reading_store


def get_region_source() -> CsvRegionSource:
    return CsvRegionSource(settings.power_data_csv, timeout=settings.data_read_timeout_seconds)


def get_trend_synthesizer() -> TrendSynthesizer:
    return TrendSynthesizer(random.Random(settings.trend_seed))
