"""Tests for SQLModel table definitions."""
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from trackfit.models.activity import Activity
from trackfit.models.athlete import Athlete
from trackfit.models.track import Track, TrackDetails, TrackEffort


class TestAthlete:
    def test_create_and_read(self, test_session: Session):
        test_session.add(Athlete(email="a@example.com", first_name="Ada"))
        test_session.commit()
        athlete = test_session.exec(select(Athlete)).one()
        assert athlete.id is not None
        assert athlete.last_name is None
        assert isinstance(athlete.created_at, datetime)

    def test_email_unique(self, test_session: Session):
        test_session.add(Athlete(email="a@example.com"))
        test_session.commit()
        test_session.add(Athlete(email="a@example.com"))
        with pytest.raises(IntegrityError):
            test_session.commit()


class TestTrack:
    def test_lat_lng_round_trip_through_json_column(self, test_session: Session, seeded_track: Track):
        track = test_session.get(Track, seeded_track.id)
        assert track.start_lat_lng == [36.98, -122.03]
        assert track.activity_type == "Ride"
        assert track.polyline is None

    def test_details_streams_stored(self, test_session: Session, seeded_track: Track):
        streams = [{"type": "Speed", "data": [0.0, 3.2], "size": 2}]
        test_session.add(TrackDetails(track_id=seeded_track.id, streams=streams))
        test_session.commit()
        details = test_session.exec(select(TrackDetails)).one()
        assert details.streams == streams

    def test_one_details_row_per_track(self, test_session: Session, seeded_track: Track):
        test_session.add(TrackDetails(track_id=seeded_track.id, streams=[]))
        test_session.commit()
        test_session.add(TrackDetails(track_id=seeded_track.id, streams=[]))
        with pytest.raises(IntegrityError):
            test_session.commit()


class TestTrackEffort:
    def test_create(self, test_session: Session, seeded_track: Track, seeded_activity: Activity):
        effort = TrackEffort(
            track_id=seeded_track.id,
            athlete_id=seeded_activity.athlete_id,
            activity_id=seeded_activity.id,
            start_time=datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc),
            end_time=datetime(2025, 1, 15, 8, 14, tzinfo=timezone.utc),
            time=840,
            polyline="xyz",
            streams=[],
        )
        test_session.add(effort)
        test_session.commit()
        test_session.refresh(effort)
        assert effort.id is not None
        assert effort.time == 840
