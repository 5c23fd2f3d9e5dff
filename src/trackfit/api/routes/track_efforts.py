"""TrackEffort routes: timed attempts at a track."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from trackfit.api.schemas import TrackEffortCreate
from trackfit.db.engine import get_session
from trackfit.models.activity import Activity
from trackfit.models.athlete import Athlete
from trackfit.models.track import Track, TrackEffort

router = APIRouter()


def _get_or_404(session: Session, effort_id: int) -> TrackEffort:
    effort = session.get(TrackEffort, effort_id)
    if not effort:
        raise HTTPException(status_code=404, detail="Track effort not found")
    return effort


@router.post("/", response_model=TrackEffort, status_code=201)
def create_track_effort(payload: TrackEffortCreate, session: Session = Depends(get_session)):
    for model, key, label in (
        (Track, payload.track_id, "Track"),
        (Athlete, payload.athlete_id, "Athlete"),
        (Activity, payload.activity_id, "Activity"),
    ):
        if not session.get(model, key):
            raise HTTPException(status_code=404, detail=f"{label} not found")

    effort = TrackEffort(**payload.model_dump())
    session.add(effort)
    session.commit()
    session.refresh(effort)
    return effort


@router.get("/", response_model=List[TrackEffort])
def list_track_efforts(
    track_id: Optional[int] = None,
    athlete_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    """List efforts, fastest first, filtered by track and/or athlete."""
    query = select(TrackEffort)
    if track_id is not None:
        query = query.where(TrackEffort.track_id == track_id)
    if athlete_id is not None:
        query = query.where(TrackEffort.athlete_id == athlete_id)
    return session.exec(query.order_by(TrackEffort.time, TrackEffort.id)).all()


@router.get("/{effort_id}", response_model=TrackEffort)
def get_track_effort(effort_id: int, session: Session = Depends(get_session)):
    return _get_or_404(session, effort_id)


@router.delete("/{effort_id}", status_code=204)
def delete_track_effort(effort_id: int, session: Session = Depends(get_session)):
    effort = _get_or_404(session, effort_id)
    session.delete(effort)
    session.commit()
    return Response(status_code=204)
