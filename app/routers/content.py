from fastapi import APIRouter, Depends
from sqlmodel import Session

from ..database import get_session
from ..errors import database_errors
from ..services.content import event_to_dict, list_events, list_tips, tip_to_dict

router = APIRouter(tags=["content"])


@router.get("/events")
def get_events(db: Session = Depends(get_session)):
    """Upcoming events, soonest first."""
    with database_errors("Failed to fetch events"):
        events = list_events(db)

    return {
        "success": True,
        "count": len(events),
        "data": [event_to_dict(e) for e in events]
    }


@router.get("/tips")
def get_tips(db: Session = Depends(get_session)):
    """Latest tips, newest first."""
    with database_errors("Failed to fetch tips"):
        tips = list_tips(db)

    return {
        "success": True,
        "count": len(tips),
        "data": [tip_to_dict(t) for t in tips]
    }
