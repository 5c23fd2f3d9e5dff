"""
Typed data streams stored on TrackDetails / TrackEffort rows.

A stream is one channel of an activity: {"type": ..., "data": [...], "size": n}.
LatLng streams hold [lat, lng] pairs (Strava's order, unlike GeoJSON);
every other type holds plain numbers.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

StreamType = Literal["LatLng", "Elevation", "Distance", "Speed", "Altitude"]


class LatLngStream(BaseModel):
    type: Literal["LatLng"]
    data: List[List[float]]
    size: int = Field(ge=0)


class Stream(BaseModel):
    type: StreamType
    data: List[Union[float, List[float]]]
    size: int = Field(ge=0)


StreamsAdapter = TypeAdapter(List[Union[LatLngStream, Stream]])


def validate_streams(value: Any) -> List[Dict[str, Any]]:
    """
    Validate a list of streams and return it as plain dicts (JSON column ready).

    Raises:
        pydantic.ValidationError: unknown stream type, negative size, bad data.
    """
    return [s.model_dump() for s in StreamsAdapter.validate_python(value)]


def feature_to_streams(feature: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Convert a LineString Feature (see geo.linestring) into streams.

    The LatLng stream is always emitted; Altitude/Speed/Distance only when the
    channel has data. Returns [] for a None feature.
    """
    if feature is None:
        return []

    coordinates = feature["geometry"]["coordinates"]
    props = feature.get("properties") or {}

    streams: List[Dict[str, Any]] = [{
        "type": "LatLng",
        "data": [[lat, lng] for lng, lat in coordinates],
        "size": len(coordinates),
    }]
    for stream_type, key in (("Altitude", "altitudes"), ("Speed", "speeds"), ("Distance", "distances")):
        data = list(props.get(key) or [])
        if data:
            streams.append({"type": stream_type, "data": data, "size": len(data)})
    return streams
