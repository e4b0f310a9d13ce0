from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

from .timestamps import utcnow


class Tip(SQLModel, table=True):
    __tablename__ = "tips"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: Optional[str] = None
    category: Optional[str] = None
    author: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, index=True)
