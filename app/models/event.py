from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: datetime = Field(index=True)
    image_url: Optional[str] = None
