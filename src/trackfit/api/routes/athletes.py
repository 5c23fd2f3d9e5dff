"""Athlete CRUD routes."""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from trackfit.api.schemas import AthleteCreate, AthleteUpdate
from trackfit.db.engine import get_session
from trackfit.models.activity import Activity
from trackfit.models.athlete import Athlete
from trackfit.models.timestamps import utc_now
from trackfit.models.track import TrackEffort

router = APIRouter()


def _get_or_404(session: Session, athlete_id: int) -> Athlete:
    athlete = session.get(Athlete, athlete_id)
    if not athlete:
        raise HTTPException(status_code=404, detail="Athlete not found")
    return athlete


def _check_email_free(session: Session, email: str) -> None:
    existing = session.exec(select(Athlete).where(Athlete.email == email)).first()
    if existing:
        raise HTTPException(status_code=409, detail="Email already registered")


@router.post("/", response_model=Athlete, status_code=201)
def create_athlete(payload: AthleteCreate, session: Session = Depends(get_session)):
    _check_email_free(session, payload.email)
    athlete = Athlete(**payload.model_dump())
    session.add(athlete)
    session.commit()
    session.refresh(athlete)
    return athlete


@router.get("/{athlete_id}", response_model=Athlete)
def get_athlete(athlete_id: int, session: Session = Depends(get_session)):
    return _get_or_404(session, athlete_id)


@router.patch("/{athlete_id}", response_model=Athlete)
def update_athlete(
    athlete_id: int,
    payload: AthleteUpdate,
    session: Session = Depends(get_session),
):
    athlete = _get_or_404(session, athlete_id)
    changes = payload.model_dump(exclude_unset=True)
    if "email" in changes and changes["email"] != athlete.email:
        _check_email_free(session, changes["email"])
    for key, value in changes.items():
        setattr(athlete, key, value)
    athlete.updated_at = utc_now()
    session.add(athlete)
    session.commit()
    session.refresh(athlete)
    return athlete


@router.delete("/{athlete_id}", status_code=204)
def delete_athlete(athlete_id: int, session: Session = Depends(get_session)):
    """Delete an athlete together with their activities and track efforts."""
    athlete = _get_or_404(session, athlete_id)
    for model in (TrackEffort, Activity):
        for row in session.exec(select(model).where(model.athlete_id == athlete_id)).all():
            session.delete(row)
    session.delete(athlete)
    session.commit()
    return Response(status_code=204)
