from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from ..database import get_session
from ..dependencies import get_link_id
from ..errors import database_errors
from ..services.user_challenges import (
    get_joined_challenge,
    get_user_activities,
    get_user_challenge,
    link_to_dict,
    update_progress,
)

router = APIRouter(tags=["activities"])


class ProgressUpdate(BaseModel):
    """Schema for updating a user's progress on a joined challenge."""
    model_config = ConfigDict(allow_inf_nan=False)

    status: str
    progress: float = Field(ge=0)


@router.get("/my-activities/{user_id}")
def my_activities(user_id: str, db: Session = Depends(get_session)):
    """Challenges the user joined, with title/category/image/description."""
    with database_errors("Failed to fetch activities"):
        activities = get_user_activities(db, user_id)

    return {"success": True, "count": len(activities), "data": activities}


@router.get("/user-challenges/{user_id}/{link_id}")
def user_challenge_detail(
    user_id: str,
    link_id: int = Depends(get_link_id),
    db: Session = Depends(get_session)
):
    with database_errors("Failed to fetch user challenge"):
        data = get_user_challenge(db, user_id, link_id)

    return {"success": True, "data": data}


@router.get("/joined/challenges/{link_id}")
def joined_challenge_detail(
    link_id: int = Depends(get_link_id),
    db: Session = Depends(get_session)
):
    """A joined challenge by its user-challenge identifier."""
    with database_errors("Failed to fetch joined challenge"):
        data = get_joined_challenge(db, link_id)

    return {"success": True, "data": data}


@router.patch("/user-challenges/{user_id}/{link_id}")
def patch_progress(
    progress_data: ProgressUpdate,
    user_id: str,
    link_id: int = Depends(get_link_id),
    db: Session = Depends(get_session)
):
    with database_errors("Failed to update progress"):
        link = update_progress(db, user_id, link_id, progress_data.status, progress_data.progress)

    return {
        "success": True,
        "message": "Progress updated successfully",
        "data": link_to_dict(link)
    }
