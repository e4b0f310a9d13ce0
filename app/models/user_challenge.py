from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field, UniqueConstraint

from .timestamps import utcnow


class UserChallenge(SQLModel, table=True):
    """One user's participation in one challenge."""
    __tablename__ = "user_challenges"
    __table_args__ = (UniqueConstraint("user_id", "challenge_id", name="unique_user_challenge"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    # Plain reference: links outlive a deleted challenge
    challenge_id: int = Field(index=True)

    status: str = Field(default="Not Started")
    progress: float = Field(default=0)

    join_date: datetime = Field(default_factory=utcnow)
    update_date: Optional[datetime] = None
