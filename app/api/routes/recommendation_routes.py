# app/api/routes/recommendation_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.data.database import get_db
from app.models.database_models.user import User
from app.models.recommendation_models import TrackInteractionRequest
from app.models.database_models.user_interaction import INTERACTION_TYPES
from app.services.auth_services import get_current_user
from app.services.database.follow_database_services import (
    follow_user,
    get_follow_stats,
    is_following,
    unfollow_user,
)
from app.services.database.interaction_database_services import track_interaction
from app.services.database.user_database_services import get_user_by_email
from app.services.recommendation_services import get_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recommendations"])


@router.get("")
async def recommendations(
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Personalized feed for the authenticated user."""
    try:
        items = await get_recommendations(db, user.email, limit)
    except Exception:
        logger.exception("Error fetching recommendations")
        raise HTTPException(status_code=500, detail="Failed to fetch recommendations")

    return {"success": True, "count": len(items), "recommendations": items}


@router.post("/track")
async def track(
    request: TrackInteractionRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record a like, view or copy of a prompt."""
    if not request.promptId or not request.interactionType:
        raise HTTPException(status_code=400, detail="promptId and interactionType are required")
    if request.interactionType not in INTERACTION_TYPES:
        raise HTTPException(status_code=400, detail="Invalid interaction type")

    try:
        interaction = await track_interaction(db, user.email, request.promptId, request.interactionType)
    except Exception:
        logger.exception("Error tracking interaction")
        raise HTTPException(status_code=500, detail="Failed to track interaction")

    if interaction is None:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return {"success": True, "interaction": interaction}


@router.post("/follow/{creator_email}")
async def follow(
    creator_email: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Follow a creator."""
    if creator_email == user.email:
        raise HTTPException(status_code=400, detail="Cannot follow yourself")

    try:
        if await get_user_by_email(db, creator_email) is None:
            raise HTTPException(status_code=404, detail="User not found")
        await follow_user(db, user.email, creator_email)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Error following creator")
        raise HTTPException(status_code=500, detail="Failed to follow creator")

    return {"success": True, "message": "Successfully followed creator"}


@router.delete("/follow/{creator_email}")
async def unfollow(
    creator_email: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Unfollow a creator. Unfollowing someone you do not follow is not an error."""
    try:
        await unfollow_user(db, user.email, creator_email)
    except Exception:
        logger.exception("Error unfollowing creator")
        raise HTTPException(status_code=500, detail="Failed to unfollow creator")

    return {"success": True, "message": "Successfully unfollowed creator"}


@router.get("/follow/{creator_email}/status")
async def follow_status(
    creator_email: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        following = await is_following(db, user.email, creator_email)
    except Exception:
        logger.exception("Error checking follow status")
        raise HTTPException(status_code=500, detail="Failed to check follow status")

    return {"success": True, "isFollowing": following}


@router.get("/stats/{user_email}")
async def follow_stats(user_email: str, db: AsyncSession = Depends(get_db)):
    """Follower and following counts. Public."""
    try:
        stats = await get_follow_stats(db, user_email)
    except Exception:
        logger.exception("Error fetching follow stats")
        raise HTTPException(status_code=500, detail="Failed to fetch follow stats")

    return {"success": True, **stats}
