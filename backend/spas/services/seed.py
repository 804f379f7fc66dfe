"""Demo records the stores start with when seed_demo_data is enabled."""

from datetime import datetime, timedelta

from spas.schemas.alert import Alert
from spas.schemas.outage import Outage
from spas.schemas.reading import PowerReading
from spas.timeutil import utcnow


def demo_alerts(now: datetime | None = None) -> list[Alert]:
    now = now or utcnow()
    return [
        Alert(
            id="1",
            type="undervoltage",
            severity="high",
            location="East Legon",
            region="Greater Accra",
            message="UNDERVOLTAGE: Risk of appliance malfunction",
            affected_users=15000,
            timestamp=now - timedelta(hours=2),
            created_at=now - timedelta(hours=2),
        ),
        Alert(
            id="2",
            type="frequency_instability",
            severity="medium",
            location="Kumasi Central",
            region="Ashanti",
            message="FREQUENCY INSTABILITY: Power quality issue detected",
            affected_users=8500,
            timestamp=now - timedelta(minutes=30),
            created_at=now - timedelta(minutes=30),
        ),
        Alert(
            id="3",
            type="maintenance",
            severity="low",
            location="Tema",
            region="Greater Accra",
            message="SCHEDULED MAINTENANCE: Planned maintenance in progress",
            affected_users=12000,
            timestamp=now - timedelta(hours=6),
            created_at=now - timedelta(hours=6),
            resolved_at=now - timedelta(hours=5),
        ),
    ]


def demo_outages(now: datetime | None = None) -> list[Outage]:
    now = now or utcnow()
    return [
        Outage(
            id="1",
            location="East Legon",
            region="Greater Accra",
            start_time=now - timedelta(hours=2),
            estimated_end_time=now + timedelta(hours=2),
            cause="Transformer maintenance",
            status="active",
            affected_users=15000,
            description="Scheduled transformer maintenance affecting East Legon area",
            created_at=now - timedelta(hours=2),
        ),
        Outage(
            id="2",
            location="Kumasi Central",
            region="Ashanti",
            start_time=now - timedelta(minutes=30),
            estimated_end_time=now + timedelta(hours=1, minutes=30),
            cause="Power line fault",
            status="active",
            affected_users=8500,
            description="Emergency repair due to power line fault",
            created_at=now - timedelta(minutes=30),
        ),
        Outage(
            id="3",
            location="Tema",
            region="Greater Accra",
            start_time=now - timedelta(hours=6),
            estimated_end_time=now - timedelta(hours=5),
            actual_end_time=now - timedelta(hours=5),
            cause="Equipment failure",
            status="resolved",
            affected_users=12000,
            description="Equipment failure resolved successfully",
            created_at=now - timedelta(hours=6),
        ),
        Outage(
            id="4",
            location="Takoradi",
            region="Western",
            start_time=now + timedelta(hours=24),
            estimated_end_time=now + timedelta(hours=30),
            cause="Planned maintenance",
            status="scheduled",
            affected_users=20000,
            description="Planned maintenance for system upgrade",
            created_at=now,
        ),
    ]


def demo_readings(now: datetime | None = None) -> list[PowerReading]:
    now = now or utcnow()
    return [
        PowerReading(
            id="1",
            device_id="sensor-001",
            location="Accra Central",
            region="Greater Accra",
            voltage=230.5,
            frequency=50.1,
            current=15.2,
            power=3500,
            timestamp=now,
            created_at=now,
        ),
        PowerReading(
            id="2",
            device_id="sensor-002",
            location="Kumasi Central",
            region="Ashanti",
            voltage=228.3,
            frequency=49.8,
            current=12.7,
            power=2900,
            timestamp=now - timedelta(minutes=5),
            created_at=now - timedelta(minutes=5),
        ),
    ]
