from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

from .timestamps import utcnow


class Challenge(SQLModel, table=True):
    """A sustainability activity users can join."""
    __tablename__ = "challenges"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: Optional[str] = Field(default=None, index=True)
    category: Optional[str] = Field(default=None, index=True)
    description: Optional[str] = None
    duration: Optional[int] = None
    target: Optional[str] = None
    # Only moved by joins; nullable for rows imported without a counter
    participants: Optional[int] = Field(default=0)
    impact_metric: Optional[str] = None
    created_by: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    image_url: Optional[str] = None
    status: str = Field(default="active")

    created_date: datetime = Field(default_factory=utcnow, index=True)
    updated_on: Optional[datetime] = None
