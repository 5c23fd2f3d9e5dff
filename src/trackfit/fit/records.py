"""
ActivityRecord / SessionSummary dataclasses and conversion from fitparse values.

ActivityRecord is the in-memory form of one FIT 'record' message. It is a
plain dataclass with no fitparse dependency so the geometry builder can be
fed from tests or from any other decoder.

Field mapping from FIT to ActivityRecord:
  FIT field             → our field
  position_lat          → position_lat (semicircles, int)
  position_long         → position_long (semicircles, int)
  timestamp             → timestamp (datetime)
  altitude              → altitude (m)
  enhanced_altitude     → enhanced_altitude (m, higher resolution)
  speed                 → speed (m/s)
  enhanced_speed        → enhanced_speed (m/s, higher resolution)
  distance              → distance (m, cumulative)
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ActivityRecord:
    """
    One sample from a device-recorded activity.
    Every field is optional; position is only present while the device had a GPS fix.
    """

    position_lat: Optional[int] = None
    position_long: Optional[int] = None
    timestamp: Optional[datetime] = None
    altitude: Optional[float] = None
    enhanced_altitude: Optional[float] = None
    speed: Optional[float] = None
    enhanced_speed: Optional[float] = None
    distance: Optional[float] = None


@dataclass
class SessionSummary:
    """Totals from a FIT 'session' message (one per sport in the file)."""

    sport: Optional[str] = None
    sub_sport: Optional[str] = None
    start_time: Optional[datetime] = None
    total_elapsed_time: Optional[float] = None  # seconds
    total_timer_time: Optional[float] = None    # seconds, excludes pauses
    total_moving_time: Optional[float] = None   # seconds
    total_distance: Optional[float] = None      # meters


def record_from_values(values: Dict[str, Any]) -> ActivityRecord:
    """Build an ActivityRecord from a fitparse `get_values()` dict."""
    return ActivityRecord(
        position_lat=values.get("position_lat"),
        position_long=values.get("position_long"),
        timestamp=values.get("timestamp"),
        altitude=values.get("altitude"),
        enhanced_altitude=values.get("enhanced_altitude"),
        speed=values.get("speed"),
        enhanced_speed=values.get("enhanced_speed"),
        distance=values.get("distance"),
    )


def session_from_values(values: Dict[str, Any]) -> SessionSummary:
    sport = values.get("sport")
    sub_sport = values.get("sub_sport")
    return SessionSummary(
        # fitparse yields the enum name, or the raw int for values missing from its profile
        sport=str(sport) if sport is not None else None,
        sub_sport=str(sub_sport) if sub_sport is not None else None,
        start_time=values.get("start_time"),
        total_elapsed_time=values.get("total_elapsed_time"),
        total_timer_time=values.get("total_timer_time"),
        total_moving_time=values.get("total_moving_time"),
        total_distance=values.get("total_distance"),
    )
