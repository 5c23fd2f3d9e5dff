"""Track and TrackDetails routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from sqlmodel import Session, select

from trackfit.api.routes.uploads import read_fit_upload, run_blocking
from trackfit.api.schemas import TrackCreate, TrackDetailsCreate, TrackDetailsUpdate, TrackUpdate
from trackfit.config import Settings, get_settings
from trackfit.db.engine import get_session
from trackfit.geo.linestring import fit_records_to_geojson
from trackfit.geo.streams import feature_to_streams
from trackfit.models.timestamps import utc_now
from trackfit.models.track import Track, TrackDetails, TrackEffort

router = APIRouter()


def _get_track_or_404(session: Session, track_id: int) -> Track:
    track = session.get(Track, track_id)
    if not track:
        raise HTTPException(status_code=404, detail="Track not found")
    return track


def _details_for(session: Session, track_id: int) -> Optional[TrackDetails]:
    return session.exec(
        select(TrackDetails).where(TrackDetails.track_id == track_id)
    ).first()


# ─── TrackDetails ─────────────────────────────────────────────────────────────
# Declared before /{track_id} routes so "details" is never read as a track id.

@router.get("/details/{track_id}", response_model=TrackDetails)
def get_track_details(track_id: int, session: Session = Depends(get_session)):
    details = _details_for(session, track_id)
    if not details:
        raise HTTPException(status_code=404, detail="Track details not found")
    return details


@router.post("/details", response_model=TrackDetails, status_code=201)
def create_track_details(payload: TrackDetailsCreate, session: Session = Depends(get_session)):
    _get_track_or_404(session, payload.track_id)
    if _details_for(session, payload.track_id):
        raise HTTPException(status_code=400, detail="Track details already exist for this track")
    details = TrackDetails(track_id=payload.track_id, streams=payload.streams)
    session.add(details)
    session.commit()
    session.refresh(details)
    return details


@router.patch("/details/{track_id}", response_model=TrackDetails)
def update_track_details(
    track_id: int,
    payload: TrackDetailsUpdate,
    session: Session = Depends(get_session),
):
    details = _details_for(session, track_id)
    if not details:
        raise HTTPException(status_code=404, detail="Track details not found")
    details.streams = payload.streams
    details.updated_at = utc_now()
    session.add(details)
    session.commit()
    session.refresh(details)
    return details


# ─── Tracks ───────────────────────────────────────────────────────────────────

@router.post("/", response_model=Track, status_code=201)
def create_track(payload: TrackCreate, session: Session = Depends(get_session)):
    track = Track(**payload.model_dump(exclude={"track_details"}))
    session.add(track)
    session.commit()
    session.refresh(track)
    if payload.track_details is not None:
        session.add(TrackDetails(track_id=track.id, streams=payload.track_details.streams))
        session.commit()
        session.refresh(track)
    return track


@router.get("/", response_model=List[Track])
def list_tracks(session: Session = Depends(get_session)):
    return session.exec(select(Track).order_by(Track.id)).all()


@router.get("/{track_id}", response_model=Track)
def get_track(track_id: int, session: Session = Depends(get_session)):
    return _get_track_or_404(session, track_id)


@router.get("/{track_id}/details")
def get_track_with_details(track_id: int, session: Session = Depends(get_session)):
    """The track plus its details row (null when no streams were stored)."""
    track = _get_track_or_404(session, track_id)
    details = _details_for(session, track_id)
    return {
        **track.model_dump(),
        "track_details": details.model_dump() if details else None,
    }


@router.post("/{track_id}/details/fit", response_model=TrackDetails)
async def store_track_details_from_fit(
    track_id: int,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Decode a FIT file and store its streams as this track's details (create or replace)."""
    _get_track_or_404(session, track_id)
    decoded = await read_fit_upload(file, settings)
    feature = await run_blocking(fit_records_to_geojson, decoded.records)
    if feature is None:
        raise HTTPException(status_code=422, detail="FIT file has no usable position data")

    streams = feature_to_streams(feature)
    details = _details_for(session, track_id)
    if details is None:
        details = TrackDetails(track_id=track_id, streams=streams)
    else:
        details.streams = streams
        details.updated_at = utc_now()
    session.add(details)
    session.commit()
    session.refresh(details)
    return details


@router.patch("/{track_id}", response_model=Track)
def update_track(
    track_id: int,
    payload: TrackUpdate,
    session: Session = Depends(get_session),
):
    track = _get_track_or_404(session, track_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(track, key, value)
    track.updated_at = utc_now()
    session.add(track)
    session.commit()
    session.refresh(track)
    return track


@router.delete("/{track_id}", status_code=204)
def delete_track(track_id: int, session: Session = Depends(get_session)):
    track = _get_track_or_404(session, track_id)
    details = _details_for(session, track_id)
    if details:
        session.delete(details)
    for effort in session.exec(select(TrackEffort).where(TrackEffort.track_id == track_id)).all():
        session.delete(effort)
    session.delete(track)
    session.commit()
    return Response(status_code=204)
