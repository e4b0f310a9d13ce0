from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from ..errors import NotFound
from ..models import Challenge, UserChallenge
from ..models.timestamps import utcnow
from .challenges import challenge_to_dict


def link_to_dict(link: UserChallenge) -> Dict[str, Any]:
    return {
        "_id": link.id,
        "userId": link.user_id,
        "challengeId": link.challenge_id,
        "status": link.status,
        "progress": link.progress,
        "joinDate": link.join_date,
        "updateDate": link.update_date,
    }


def get_user_activities(db: Session, user_id: str) -> List[Dict[str, Any]]:
    """Every challenge a user joined, flattened with the challenge's display fields."""
    statement = (
        select(UserChallenge, Challenge)
        .join(Challenge, Challenge.id == UserChallenge.challenge_id)
        .where(UserChallenge.user_id == user_id)
        .order_by(UserChallenge.join_date.desc(), UserChallenge.id.desc())
    )
    rows = db.exec(statement).all()

    activities = []
    for link, challenge in rows:
        activity = link_to_dict(link)
        activity.update({
            "title": challenge.title,
            "category": challenge.category,
            "imageUrl": challenge.image_url,
            "description": challenge.description,
        })
        activities.append(activity)
    return activities


def get_user_challenge(db: Session, user_id: str, link_id: int) -> Dict[str, Any]:
    """One of a user's links with the full challenge attached (two lookups)."""
    link = db.exec(
        select(UserChallenge).where(
            UserChallenge.id == link_id,
            UserChallenge.user_id == user_id
        )
    ).first()
    if not link:
        raise NotFound("User challenge not found")

    # The challenge may have been deleted after the user joined it
    challenge: Optional[Challenge] = db.get(Challenge, link.challenge_id)

    data = link_to_dict(link)
    data["challenge"] = challenge_to_dict(challenge) if challenge else None
    return data


def get_joined_challenge(db: Session, link_id: int) -> Dict[str, Any]:
    """A link and its challenge's detail fields in one joined query."""
    statement = (
        select(UserChallenge, Challenge)
        .join(Challenge, Challenge.id == UserChallenge.challenge_id)
        .where(UserChallenge.id == link_id)
    )
    row = db.exec(statement).first()
    if not row:
        raise NotFound("Joined challenge not found")

    link, challenge = row
    data = link_to_dict(link)
    data.update({
        "title": challenge.title,
        "category": challenge.category,
        "description": challenge.description,
        "duration": challenge.duration,
        "target": challenge.target,
        "impactMetric": challenge.impact_metric,
        "startDate": challenge.start_date,
        "endDate": challenge.end_date,
        "imageUrl": challenge.image_url,
        "updatedOn": challenge.updated_on,
    })
    return data


def update_progress(
    db: Session,
    user_id: str,
    link_id: int,
    status: str,
    progress: float
) -> UserChallenge:
    link = db.exec(
        select(UserChallenge).where(
            UserChallenge.id == link_id,
            UserChallenge.user_id == user_id
        )
    ).first()
    if not link:
        raise NotFound("User challenge not found")

    link.status = status
    link.progress = progress
    link.update_date = utcnow()

    db.add(link)
    db.commit()
    db.refresh(link)
    return link
