import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from ..config import RECENT_CHALLENGES_LIMIT, WEEKLY_IMPACT
from ..errors import Conflict, NotFound
from ..models import Challenge, UserChallenge
from ..models.timestamps import utcnow

log = logging.getLogger(__name__)

# JSON key -> model attribute for the fields clients may write
CHALLENGE_FIELDS = {
    "title": "title",
    "category": "category",
    "description": "description",
    "duration": "duration",
    "target": "target",
    "impactMetric": "impact_metric",
    "createdBy": "created_by",
    "startDate": "start_date",
    "endDate": "end_date",
    "imageUrl": "image_url",
    "status": "status",
}


def challenge_to_dict(challenge: Challenge) -> Dict[str, Any]:
    data = {"_id": challenge.id}
    for key, attr in CHALLENGE_FIELDS.items():
        data[key] = getattr(challenge, attr)
    data["participants"] = challenge.participants
    data["createdDate"] = challenge.created_date
    data["updatedOn"] = challenge.updated_on
    return data


def list_challenges(db: Session, title_contains: Optional[str] = None) -> List[Challenge]:
    """All challenges, optionally filtered by a case-insensitive title substring."""
    statement = select(Challenge)
    if title_contains:
        statement = statement.where(
            func.lower(Challenge.title).contains(title_contains.lower(), autoescape=True)
        )
    return db.exec(statement.order_by(Challenge.id)).all()


def get_challenge(db: Session, challenge_id: int) -> Challenge:
    challenge = db.get(Challenge, challenge_id)
    if not challenge:
        raise NotFound("Challenge not found")
    return challenge


def list_recent_challenges(db: Session, limit: int = RECENT_CHALLENGES_LIMIT) -> List[Challenge]:
    statement = (
        select(Challenge)
        .order_by(Challenge.created_date.desc(), Challenge.id.desc())
        .limit(limit)
    )
    return db.exec(statement).all()


def get_challenge_stats(db: Session) -> Dict[str, int]:
    """Challenge count, participants summed over all challenges, weekly impact."""
    total_challenges = db.exec(select(func.count(Challenge.id))).one()
    total_participants = db.exec(
        select(func.coalesce(func.sum(Challenge.participants), 0))
    ).one()

    return {
        "totalChallenges": total_challenges,
        "totalParticipants": total_participants,
        "weeklyImpact": WEEKLY_IMPACT
    }


def create_challenge(db: Session, fields: Dict[str, Any]) -> Challenge:
    """Insert a new challenge from client fields (JSON keys)."""
    values = {
        CHALLENGE_FIELDS[key]: value
        for key, value in fields.items()
        if key in CHALLENGE_FIELDS and key != "status"
    }
    challenge = Challenge(**values, participants=0, status="active")
    db.add(challenge)
    db.commit()
    db.refresh(challenge)
    return challenge


def update_challenge(db: Session, challenge_id: int, fields: Dict[str, Any]) -> Challenge:
    """Merge the given fields into a challenge and stamp updatedOn."""
    challenge = get_challenge(db, challenge_id)

    for key, value in fields.items():
        # participants is only moved by join_challenge
        if key not in CHALLENGE_FIELDS:
            continue
        setattr(challenge, CHALLENGE_FIELDS[key], value)
    challenge.updated_on = utcnow()

    db.add(challenge)
    db.commit()
    db.refresh(challenge)
    return challenge


def delete_challenge(db: Session, challenge_id: int) -> None:
    challenge = get_challenge(db, challenge_id)
    db.delete(challenge)
    db.commit()
    log.info("Deleted challenge %s", challenge_id)


def find_link(db: Session, user_id: str, challenge_id: int) -> Optional[UserChallenge]:
    return db.exec(
        select(UserChallenge).where(
            UserChallenge.user_id == user_id,
            UserChallenge.challenge_id == challenge_id
        )
    ).first()


def join_challenge(db: Session, user_id: str, challenge_id: int) -> UserChallenge:
    """
    Record that a user joined a challenge and bump its participant counter.

    The link insert and the counter increment share one transaction; the
    unique (user_id, challenge_id) constraint rejects a second join even when
    two requests race past the existence check.
    """
    get_challenge(db, challenge_id)

    if find_link(db, user_id, challenge_id):
        log.info("User %s already joined challenge %s", user_id, challenge_id)
        raise Conflict("Already joined", error=f"User {user_id} already joined challenge {challenge_id}")

    link = UserChallenge(user_id=user_id, challenge_id=challenge_id)
    db.add(link)
    try:
        db.flush()
        db.exec(
            update(Challenge)
            .where(Challenge.id == challenge_id)
            .values(participants=func.coalesce(Challenge.participants, 0) + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        log.info("Concurrent join rejected for user %s on challenge %s", user_id, challenge_id)
        raise Conflict("Already joined", error=f"User {user_id} already joined challenge {challenge_id}")

    db.refresh(link)
    log.info("User %s joined challenge %s", user_id, challenge_id)
    return link
