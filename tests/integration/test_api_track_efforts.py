"""Integration tests for /track-efforts routes."""
from datetime import datetime, timezone

from sqlmodel import Session

from trackfit.models.track import TrackEffort


def _body(track_id, athlete_id, activity_id, **overrides):
    body = {
        "track_id": track_id,
        "athlete_id": athlete_id,
        "activity_id": activity_id,
        "start_time": "2025-01-15T08:00:00",
        "end_time": "2025-01-15T08:14:00",
        "time": 840,
        "polyline": "abc",
        "streams": [{"type": "Speed", "data": [4.0, 5.0], "size": 2}],
    }
    body.update(overrides)
    return body


def _seed_efforts(engine, track, activity, times):
    with Session(engine) as s:
        for t in times:
            s.add(TrackEffort(
                track_id=track.id,
                athlete_id=activity.athlete_id,
                activity_id=activity.id,
                start_time=datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc),
                end_time=datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc),
                time=t,
                polyline="abc",
                streams=[],
            ))
        s.commit()


class TestTrackEffortRoutes:
    def test_create_effort(self, client, seeded_track, seeded_activity):
        resp = client.post("/track-efforts/", json=_body(
            seeded_track.id, seeded_activity.athlete_id, seeded_activity.id))
        assert resp.status_code == 201
        assert resp.json()["time"] == 840
        assert resp.json()["streams"][0]["type"] == "Speed"

    def test_create_unknown_track(self, client, seeded_activity):
        resp = client.post("/track-efforts/", json=_body(
            99999, seeded_activity.athlete_id, seeded_activity.id))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Track not found"

    def test_create_unknown_activity(self, client, seeded_track, seeded_athlete):
        resp = client.post("/track-efforts/", json=_body(seeded_track.id, seeded_athlete.id, 99999))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Activity not found"

    def test_create_end_before_start(self, client, seeded_track, seeded_activity):
        resp = client.post("/track-efforts/", json=_body(
            seeded_track.id, seeded_activity.athlete_id, seeded_activity.id,
            end_time="2025-01-15T07:00:00"))
        assert resp.status_code == 422

    def test_list_fastest_first(self, client, engine, seeded_track, seeded_activity):
        _seed_efforts(engine, seeded_track, seeded_activity, [900, 700, 800])
        resp = client.get(f"/track-efforts/?track_id={seeded_track.id}")
        assert resp.status_code == 200
        assert [e["time"] for e in resp.json()] == [700, 800, 900]

    def test_list_filtered_by_athlete(self, client, engine, seeded_track, seeded_activity):
        _seed_efforts(engine, seeded_track, seeded_activity, [900])
        assert client.get("/track-efforts/?athlete_id=99999").json() == []

    def test_get_and_delete(self, client, engine, seeded_track, seeded_activity):
        _seed_efforts(engine, seeded_track, seeded_activity, [600])
        effort_id = client.get("/track-efforts/").json()[0]["id"]
        assert client.get(f"/track-efforts/{effort_id}").status_code == 200
        assert client.delete(f"/track-efforts/{effort_id}").status_code == 204
        assert client.get(f"/track-efforts/{effort_id}").status_code == 404
