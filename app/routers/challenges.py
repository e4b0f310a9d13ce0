from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlmodel import Session

from ..database import get_session
from ..dependencies import get_challenge_id
from ..errors import database_errors
from ..services.challenges import (
    challenge_to_dict,
    create_challenge,
    delete_challenge,
    get_challenge,
    get_challenge_stats,
    join_challenge,
    list_challenges,
    list_recent_challenges,
    update_challenge,
)
from ..services.user_challenges import link_to_dict

router = APIRouter(tags=["challenges"])

# Largest value a 32-bit INTEGER column holds
MAX_DURATION = 2**31 - 1


class ChallengeFields(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True
    )

    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    target: Optional[str] = None
    impact_metric: Optional[str] = None
    created_by: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    image_url: Optional[str] = None


class ChallengeCreate(ChallengeFields):
    """Schema for creating a challenge. Duration arrives as a number or numeric string."""
    duration: int = Field(ge=0, le=MAX_DURATION)


class ChallengeUpdate(ChallengeFields):
    """Schema for a partial challenge update. Participants are not writable here."""
    duration: Optional[int] = Field(default=None, ge=0, le=MAX_DURATION)
    status: Optional[str] = None

    @field_validator("duration", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class JoinRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str = Field(min_length=1)


@router.get("/challenges")
def get_challenges(
    search: Optional[str] = None,
    db: Session = Depends(get_session)
):
    """List challenges, optionally filtered by title."""
    with database_errors("Failed to fetch challenges"):
        challenges = list_challenges(db, search)

    return {
        "success": True,
        "count": len(challenges),
        "data": [challenge_to_dict(c) for c in challenges]
    }


@router.get("/challenges/{id}")
def get_challenge_detail(
    challenge_id: int = Depends(get_challenge_id),
    db: Session = Depends(get_session)
):
    with database_errors("Failed to fetch challenge"):
        challenge = get_challenge(db, challenge_id)

    return {"success": True, "data": challenge_to_dict(challenge)}


@router.get("/recent/challenges")
def get_recent_challenges(db: Session = Depends(get_session)):
    """Newest challenges first."""
    with database_errors("Failed to fetch recent challenges"):
        challenges = list_recent_challenges(db)

    return {
        "success": True,
        "count": len(challenges),
        "data": [challenge_to_dict(c) for c in challenges]
    }


@router.get("/api/challenges/stats")
def get_stats(db: Session = Depends(get_session)):
    with database_errors("Failed to fetch challenge stats"):
        stats = get_challenge_stats(db)

    return {"success": True, "data": stats}


@router.post("/challenges")
def post_challenge(
    challenge_data: ChallengeCreate,
    db: Session = Depends(get_session)
):
    with database_errors("Failed to add challenge"):
        challenge = create_challenge(db, challenge_data.model_dump(by_alias=True))

    return {
        "success": True,
        "message": "Challenge added successfully",
        "insertedId": challenge.id
    }


@router.post("/challenges/join/{id}")
def post_join_challenge(
    join_data: JoinRequest,
    challenge_id: int = Depends(get_challenge_id),
    db: Session = Depends(get_session)
):
    """Join a challenge; a second join by the same user is rejected."""
    with database_errors("Failed to join challenge"):
        link = join_challenge(db, join_data.user_id, challenge_id)

    return {
        "success": True,
        "message": "Joined challenge successfully",
        "data": link_to_dict(link)
    }


@router.patch("/challenges/{id}")
def patch_challenge(
    challenge_data: ChallengeUpdate,
    challenge_id: int = Depends(get_challenge_id),
    db: Session = Depends(get_session)
):
    """Update only the fields present in the body."""
    fields = challenge_data.model_dump(by_alias=True, exclude_unset=True)
    with database_errors("Failed to update challenge"):
        challenge = update_challenge(db, challenge_id, fields)

    return {
        "success": True,
        "message": "Challenge updated successfully",
        "data": challenge_to_dict(challenge)
    }


@router.delete("/delete/challenge/{id}")
def remove_challenge(
    challenge_id: int = Depends(get_challenge_id),
    db: Session = Depends(get_session)
):
    with database_errors("Failed to delete challenge"):
        delete_challenge(db, challenge_id)

    return {"success": True, "message": "Challenge deleted successfully"}
