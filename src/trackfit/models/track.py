"""Track data models: predefined routes, their streams, and timed efforts on them."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from trackfit.models.timestamps import utc_now


class Track(SQLModel, table=True):
    """A predefined route segment athletes can ride."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    activity_type: str = "Ride"
    distance: float  # meters
    elevation_gain: float  # meters
    elevation_loss: Optional[float] = None

    # [lat, lng] pairs
    start_lat_lng: List[float] = Field(sa_column=Column(JSON, nullable=False))
    end_lat_lng: List[float] = Field(sa_column=Column(JSON, nullable=False))
    polyline: Optional[str] = None  # encoded polyline

    city: str
    state: str
    country: str

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TrackDetails(SQLModel, table=True):
    """
    Full-resolution streams for a Track (at most one row per track).
    streams is a list of {"type", "data", "size"} dicts, see geo.streams.
    """

    id: Optional[int] = Field(default=None, primary_key=True)
    track_id: int = Field(foreign_key="track.id", unique=True, index=True)
    streams: List[Dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TrackEffort(SQLModel, table=True):
    """One timed attempt at a Track, cut out of an athlete's Activity."""

    id: Optional[int] = Field(default=None, primary_key=True)
    track_id: int = Field(foreign_key="track.id", index=True)
    athlete_id: int = Field(foreign_key="athlete.id", index=True)
    activity_id: int = Field(foreign_key="activity.id", index=True)

    start_time: datetime
    end_time: datetime
    time: int  # seconds
    polyline: str
    streams: List[Dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
