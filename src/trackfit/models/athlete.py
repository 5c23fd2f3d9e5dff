"""Athlete model."""
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from trackfit.models.timestamps import utc_now


class Athlete(SQLModel, table=True):
    """One row per registered athlete. Login identities live with the auth provider."""

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
