"""Shared test fixtures."""
import os
import struct
from datetime import datetime, timezone
from typing import Generator

# Keep the module-level app in trackfit.api.main off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from fitparse.records import Crc
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Import all models so SQLModel.metadata knows about them
from trackfit.models.activity import Activity
from trackfit.models.athlete import Athlete
from trackfit.models.track import Track, TrackDetails, TrackEffort  # noqa: F401


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine. Tables recreated fresh for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="test_session")
def test_session_fixture(engine) -> Generator[Session, None, None]:
    """Provides a DB session connected to in-memory SQLite."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    from trackfit.api.main import create_app
    from trackfit.db.engine import get_session

    app = create_app()

    def override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as c:
        yield c


@pytest.fixture(name="seeded_athlete")
def seeded_athlete_fixture(engine) -> Athlete:
    with Session(engine) as s:
        athlete = Athlete(email="rider@example.com", first_name="Sam", last_name="Rider")
        s.add(athlete)
        s.commit()
        s.refresh(athlete)
    return athlete


@pytest.fixture(name="seeded_track")
def seeded_track_fixture(engine) -> Track:
    track = Track(
        name="Tunnel Climb",
        activity_type="Ride",
        distance=4200.0,
        elevation_gain=310.0,
        start_lat_lng=[36.98, -122.03],
        end_lat_lng=[37.01, -122.05],
        city="Santa Cruz",
        state="CA",
        country="United States",
    )
    with Session(engine) as s:
        s.add(track)
        s.commit()
        s.refresh(track)
    return track


@pytest.fixture(name="seeded_activity")
def seeded_activity_fixture(engine, seeded_athlete: Athlete) -> Activity:
    activity = Activity(
        athlete_id=seeded_athlete.id,
        name="Morning Ride",
        distance=32000.0,
        elevation_gain=640.0,
        start_lat_lng=[36.97, -122.02],
        end_lat_lng=[36.97, -122.02],
        polyline="abc",
        elapsed_time=5400,
        start_date_time=datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc),
        timezone="America/Los_Angeles",
        city="Santa Cruz",
    )
    with Session(engine) as s:
        s.add(activity)
        s.commit()
        s.refresh(activity)
    return activity


@pytest.fixture(name="seeded_effort")
def seeded_effort_fixture(engine, seeded_track: Track, seeded_activity: Activity) -> TrackEffort:
    effort = TrackEffort(
        track_id=seeded_track.id,
        athlete_id=seeded_activity.athlete_id,
        activity_id=seeded_activity.id,
        start_time=datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 1, 15, 8, 14, tzinfo=timezone.utc),
        time=840,
        polyline="abc",
        streams=[],
    )
    with Session(engine) as s:
        s.add(effort)
        s.commit()
        s.refresh(effort)
    return effort


# ─── FIT bytes ────────────────────────────────────────────────────────────────

FIT_EPOCH = datetime(1989, 12, 31)

# (field def num, size, base type) of the record message written by build_fit_bytes
RECORD_FIELDS = (
    (253, 4, 0x86),  # timestamp: uint32 s since FIT_EPOCH
    (0, 4, 0x85),    # position_lat: sint32 semicircles
    (1, 4, 0x85),    # position_long: sint32 semicircles
    (2, 2, 0x84),    # altitude: uint16 (m + 500) * 5
    (5, 4, 0x86),    # distance: uint32 m * 100
    (6, 2, 0x84),    # speed: uint16 m/s * 1000
)


def build_fit_bytes(points) -> bytes:
    """
    Minimal activity file: one record definition plus one data message per point.

    Each point is a dict with "timestamp" (naive UTC) and optionally "lat",
    "lng", "altitude", "distance", "speed". Missing keys are written as the
    FIT invalid-value sentinel for the field's base type.
    """
    body = struct.pack("<BBBHB", 0x40, 0, 0, 20, len(RECORD_FIELDS))
    for field_def in RECORD_FIELDS:
        body += struct.pack("<BBB", *field_def)
    for p in points:
        body += struct.pack(
            "<BIiiHIH",
            0x00,
            int((p["timestamp"] - FIT_EPOCH).total_seconds()),
            p.get("lat", 0x7FFFFFFF),
            p.get("lng", 0x7FFFFFFF),
            round((p["altitude"] + 500) * 5) if "altitude" in p else 0xFFFF,
            round(p["distance"] * 100) if "distance" in p else 0xFFFFFFFF,
            round(p["speed"] * 1000) if "speed" in p else 0xFFFF,
        )
    header = struct.pack("<BBHI4s", 12, 0x10, 2132, len(body), b".FIT")
    return header + body + struct.pack("<H", Crc.calculate(header + body))


RIDE_POINTS = [
    {"timestamp": datetime(2025, 3, 1, 8, 0, 0), "lat": 439986234, "lng": -1223344556,
     "altitude": 105},
    {"timestamp": datetime(2025, 3, 1, 8, 0, 1), "altitude": 107},
    {"timestamp": datetime(2025, 3, 1, 8, 0, 2), "lat": 439987000, "lng": -1223345000,
     "altitude": 110, "distance": 50, "speed": 3.2},
]


@pytest.fixture(name="ride_fit_bytes")
def ride_fit_bytes_fixture() -> bytes:
    """Three records; the middle one has no position."""
    return build_fit_bytes(RIDE_POINTS)
