"""Activity model: one recorded ride imported from an external source."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from trackfit.models.timestamps import utc_now


class Activity(SQLModel, table=True):
    """One row per imported activity (rides from Strava for now)."""

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(foreign_key="athlete.id", index=True)
    name: str
    type: str = "ride"
    source: str = "strava"
    source_id: Optional[str] = None  # ID on the source platform

    distance: float  # meters
    elevation_gain: float  # meters
    elevation_loss: Optional[float] = None
    average_speed: Optional[float] = None  # m/s
    max_speed: Optional[float] = None  # m/s

    start_lat_lng: List[float] = Field(sa_column=Column(JSON, nullable=False))
    end_lat_lng: List[float] = Field(sa_column=Column(JSON, nullable=False))
    polyline: str  # encoded polyline

    elapsed_time: int  # seconds
    start_date_time: datetime = Field(index=True)
    timezone: str
    city: str

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
