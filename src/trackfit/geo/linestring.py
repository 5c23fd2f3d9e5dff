"""
ActivityRecord → GeoJSON LineString Feature.

Two steps:

  build_track_points()      records → aligned TrackPoint list (one per record
                            with a GPS fix, every channel kept per point)
  track_points_to_feature() TrackPoints → Feature whose properties carry
                            independent channel arrays for the map and
                            elevation chart clients

The independent arrays are NOT co-indexed with the coordinates: timestamps
and altitudes are only appended when the point has them, distances only when
the device reported one. Speeds are appended for every point (default 0).
Consumers that need per-point alignment should use TrackPoints directly.

Altitude quirk: the clients have always dropped altitude readings of exactly
0 m (the reading was tested for truthiness). That stays the default so the
channel lengths don't change under existing consumers; pass
keep_zero_altitude=True to keep 0 m readings.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from trackfit.fit.records import ActivityRecord
from trackfit.geo.coordinates import first_present, is_number, semicircles_to_degrees

# A line needs two vertices
MIN_LINE_POINTS = 2


@dataclass
class TrackPoint:
    """One positioned sample. lng/lat in decimal degrees."""

    lng: float
    lat: float
    timestamp: Optional[datetime] = None
    altitude: Optional[float] = None  # enhanced_altitude, else altitude
    speed: float = 0.0                # enhanced_speed, else speed, else 0
    distance: Optional[float] = None


def has_position(record: ActivityRecord) -> bool:
    return is_number(record.position_lat) and is_number(record.position_long)


def build_track_points(records: Iterable[ActivityRecord]) -> List[TrackPoint]:
    """
    Keep records that carry both position fields and resolve their channels.

    Records without a full position contribute nothing, not even partial
    channel data. Input order is preserved.
    """
    points: List[TrackPoint] = []
    for record in records:
        if not has_position(record):
            continue
        points.append(TrackPoint(
            lng=semicircles_to_degrees(record.position_long),
            lat=semicircles_to_degrees(record.position_lat),
            timestamp=record.timestamp,
            altitude=first_present(record.enhanced_altitude, record.altitude),
            speed=first_present(record.enhanced_speed, record.speed, 0),
            distance=record.distance,
        ))
    return points


def track_points_to_feature(
    points: List[TrackPoint],
    keep_zero_altitude: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Serialize TrackPoints into a GeoJSON LineString Feature.

    Returns None when there are fewer than two points (nothing to draw).
    """
    if len(points) < MIN_LINE_POINTS:
        return None

    coordinates: List[List[float]] = []
    timestamps: List[datetime] = []
    altitudes: List[float] = []
    speeds: List[float] = []
    distances: List[float] = []

    for pt in points:
        coordinates.append([pt.lng, pt.lat])  # GeoJSON axis order

        if pt.timestamp is not None:
            timestamps.append(pt.timestamp)

        if keep_zero_altitude:
            if is_number(pt.altitude):
                altitudes.append(pt.altitude)
        elif pt.altitude:
            altitudes.append(pt.altitude)

        if is_number(pt.speed):
            speeds.append(pt.speed)

        if is_number(pt.distance):
            distances.append(pt.distance)

    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": coordinates,
        },
        "properties": {
            "timestamps": timestamps,
            "altitudes": altitudes,
            "speeds": speeds,
            "distances": distances,
        },
    }


def fit_records_to_geojson(
    records: List[ActivityRecord],
    keep_zero_altitude: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Build the LineString Feature for a decoded activity.

    Returns None for an empty record list or when fewer than two records
    have a GPS position. Never raises for missing or partial fields.
    """
    if not records:
        return None
    return track_points_to_feature(
        build_track_points(records), keep_zero_altitude=keep_zero_altitude
    )
