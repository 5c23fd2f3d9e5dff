"""Request bodies for the CRUD routes."""
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trackfit.geo.streams import validate_streams
from trackfit.models.timestamps import as_utc

# [lat, lng]
LatLng = Annotated[List[float], Field(min_length=2, max_length=2)]


# ─── Athletes ─────────────────────────────────────────────────────────────────

class AthleteCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class AthleteUpdate(BaseModel):
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


# ─── Tracks ───────────────────────────────────────────────────────────────────

class StreamsBody(BaseModel):
    streams: List[Dict[str, Any]]

    @field_validator("streams")
    @classmethod
    def _check_streams(cls, v):
        return validate_streams(v)


class TrackCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    activity_type: Literal["Ride"]
    distance: float = Field(ge=0)
    elevation_gain: float = Field(ge=0)
    elevation_loss: Optional[float] = Field(default=None, ge=0)
    start_lat_lng: LatLng
    end_lat_lng: LatLng
    polyline: Optional[str] = Field(default=None, max_length=1000)
    city: str = Field(max_length=100)
    state: str = Field(max_length=2)
    country: str = Field(max_length=100)
    track_details: Optional[StreamsBody] = None


class TrackUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    activity_type: Optional[Literal["Ride"]] = None
    distance: Optional[float] = Field(default=None, ge=0)
    elevation_gain: Optional[float] = Field(default=None, ge=0)
    elevation_loss: Optional[float] = Field(default=None, ge=0)
    start_lat_lng: Optional[LatLng] = None
    end_lat_lng: Optional[LatLng] = None
    polyline: Optional[str] = Field(default=None, max_length=1000)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=2)
    country: Optional[str] = Field(default=None, max_length=100)


class TrackDetailsCreate(StreamsBody):
    track_id: int = Field(ge=1)


class TrackDetailsUpdate(StreamsBody):
    pass


# ─── Activities ───────────────────────────────────────────────────────────────

class ActivityCreate(BaseModel):
    """Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    athlete_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=255)
    type: Literal["ride"]
    distance: float = Field(ge=0)
    elevation_gain: float = Field(ge=0)
    elevation_loss: Optional[float] = Field(default=None, ge=0)
    average_speed: Optional[float] = Field(default=None, ge=0)
    max_speed: Optional[float] = Field(default=None, ge=0)
    start_lat_lng: LatLng
    end_lat_lng: LatLng
    polyline: str = Field(max_length=5000)
    elapsed_time: int = Field(ge=0)
    start_date_time: datetime
    timezone: str = Field(max_length=50)
    source: Literal["strava"] = "strava"
    source_id: Optional[str] = Field(default=None, max_length=50)
    city: str = Field(max_length=100)

    start_date_time_utc = field_validator("start_date_time")(as_utc)


class ActivityUpdate(BaseModel):
    """Same fields as ActivityCreate minus athlete_id, all optional."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[Literal["ride"]] = None
    distance: Optional[float] = Field(default=None, ge=0)
    elevation_gain: Optional[float] = Field(default=None, ge=0)
    elevation_loss: Optional[float] = Field(default=None, ge=0)
    average_speed: Optional[float] = Field(default=None, ge=0)
    max_speed: Optional[float] = Field(default=None, ge=0)
    start_lat_lng: Optional[LatLng] = None
    end_lat_lng: Optional[LatLng] = None
    polyline: Optional[str] = Field(default=None, max_length=5000)
    elapsed_time: Optional[int] = Field(default=None, ge=0)
    start_date_time: Optional[datetime] = None
    timezone: Optional[str] = Field(default=None, max_length=50)
    source: Optional[Literal["strava"]] = None
    source_id: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=100)

    start_date_time_utc = field_validator("start_date_time")(as_utc)


# ─── Track efforts ────────────────────────────────────────────────────────────

class TrackEffortCreate(StreamsBody):
    track_id: int = Field(ge=1)
    athlete_id: int = Field(ge=1)
    activity_id: int = Field(ge=1)
    start_time: datetime
    end_time: datetime
    time: int = Field(ge=0)
    polyline: str
    streams: List[Dict[str, Any]] = Field(default_factory=list)

    window_utc = field_validator("start_time", "end_time")(as_utc)

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not precede start_time")
        return self
