"""Activity CRUD routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from trackfit.api.schemas import ActivityCreate, ActivityUpdate
from trackfit.db.engine import get_session
from trackfit.models.activity import Activity
from trackfit.models.athlete import Athlete
from trackfit.models.timestamps import utc_now
from trackfit.models.track import TrackEffort

router = APIRouter()


def _get_or_404(session: Session, activity_id: int) -> Activity:
    activity = session.get(Activity, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.get("/", response_model=List[Activity])
def list_activities(
    athlete_id: Optional[int] = None,
    limit: int = 20,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    """List activities, newest first, optionally for one athlete."""
    query = select(Activity)
    if athlete_id is not None:
        query = query.where(Activity.athlete_id == athlete_id)
    return session.exec(
        query.order_by(Activity.start_date_time.desc()).offset(offset).limit(limit)
    ).all()


@router.get("/{activity_id}", response_model=Activity)
def get_activity(activity_id: int, session: Session = Depends(get_session)):
    """Fetch a single activity by primary key."""
    return _get_or_404(session, activity_id)


@router.post("/", response_model=Activity, status_code=201)
def create_activity(payload: ActivityCreate, session: Session = Depends(get_session)):
    if not session.get(Athlete, payload.athlete_id):
        raise HTTPException(status_code=404, detail="Athlete not found")
    activity = Activity(**payload.model_dump())
    session.add(activity)
    session.commit()
    session.refresh(activity)
    return activity


@router.patch("/{activity_id}", response_model=Activity)
def update_activity(
    activity_id: int,
    payload: ActivityUpdate,
    session: Session = Depends(get_session),
):
    activity = _get_or_404(session, activity_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(activity, key, value)
    activity.updated_at = utc_now()
    session.add(activity)
    session.commit()
    session.refresh(activity)
    return activity


@router.delete("/{activity_id}", status_code=204)
def delete_activity(activity_id: int, session: Session = Depends(get_session)):
    """Delete an activity and the track efforts cut from it."""
    activity = _get_or_404(session, activity_id)
    for effort in session.exec(select(TrackEffort).where(TrackEffort.activity_id == activity_id)).all():
        session.delete(effort)
    session.delete(activity)
    session.commit()
    return Response(status_code=204)
