from typing import Any, Dict, List

from sqlmodel import Session, select

from ..config import EVENTS_LIMIT, TIPS_LIMIT
from ..models import Event, Tip


def event_to_dict(event: Event) -> Dict[str, Any]:
    return {
        "_id": event.id,
        "title": event.title,
        "description": event.description,
        "location": event.location,
        "date": event.date,
        "imageUrl": event.image_url,
    }


def tip_to_dict(tip: Tip) -> Dict[str, Any]:
    return {
        "_id": tip.id,
        "title": tip.title,
        "content": tip.content,
        "category": tip.category,
        "author": tip.author,
        "createdAt": tip.created_at,
    }


def list_events(db: Session, limit: int = EVENTS_LIMIT) -> List[Event]:
    """Soonest events first."""
    statement = select(Event).order_by(Event.date, Event.id).limit(limit)
    return db.exec(statement).all()


def list_tips(db: Session, limit: int = TIPS_LIMIT) -> List[Tip]:
    """Newest tips first."""
    statement = select(Tip).order_by(Tip.created_at.desc(), Tip.id.desc()).limit(limit)
    return db.exec(statement).all()
