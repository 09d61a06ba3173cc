# app/services/database/recommendation_database_services.py
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Set

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models.follower import Follower
from app.models.database_models.prompt import Prompt
from app.models.database_models.prompt_like import PromptLike
from app.models.database_models.user import User

FOLLOWED_WINDOW_DAYS = 7
INTERESTS_WINDOW_DAYS = 30
TRENDING_WINDOW_DAYS = 14

TOP_CATEGORIES = 3
CATEGORY_MATCH_WEIGHT = 3
POPULAR_LIKE_THRESHOLD = 10


def _cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now(timezone.utc)) - timedelta(days=days)


def _prompt_columns():
    return [
        Prompt.id,
        Prompt.author_email,
        Prompt.title,
        Prompt.content,
        Prompt.category,
        Prompt.image_url,
        Prompt.like_count,
        Prompt.comment_count,
        Prompt.created_at,
        Prompt.updated_at,
        User.name.label("creator_name"),
        User.handle.label("creator_username"),
        User.profile_photo.label("creator_photo"),
    ]


async def get_followed_creators_prompts(
    db: AsyncSession, user_email: str, limit: int = 10, now: Optional[datetime] = None
) -> List[Dict]:
    """Recent prompts by creators the user follows, newest first."""
    result = await db.execute(
        select(*_prompt_columns())
        .select_from(Prompt)
        .join(Follower, Prompt.author_email == Follower.followee_email)
        .join(User, Prompt.author_email == User.email)
        .where(
            Follower.follower_email == user_email,
            Prompt.created_at >= _cutoff(FOLLOWED_WINDOW_DAYS, now),
        )
        .order_by(Prompt.created_at.desc())
        .limit(limit)
    )
    return [dict(row) for row in result.mappings().all()]


async def get_similar_prompts(
    db: AsyncSession, user_email: str, limit: int = 10, now: Optional[datetime] = None
) -> List[Dict]:
    """
    Prompts from other creators in the user's most-liked categories.

    The user's top categories come from a count of their likes grouped by the
    liked prompt's category. A user with no likes has no top categories, so
    this returns nothing.
    """
    preferences = (
        select(Prompt.category.label("category"), func.count().label("like_count"))
        .select_from(PromptLike)
        .join(Prompt, PromptLike.prompt_id == Prompt.id)
        .where(PromptLike.user_email == user_email)
        .group_by(Prompt.category)
        .order_by(func.count().desc(), Prompt.category)
        .limit(TOP_CATEGORIES)
        .cte("user_preferences")
    )
    preferred_categories = select(preferences.c.category)

    relevance_score = (
        case((Prompt.category.in_(preferred_categories), CATEGORY_MATCH_WEIGHT), else_=0)
        + case((Prompt.like_count > POPULAR_LIKE_THRESHOLD, 1), else_=0)
    ).label("relevance_score")

    result = await db.execute(
        select(*_prompt_columns(), relevance_score)
        .select_from(Prompt)
        .join(User, Prompt.author_email == User.email)
        .where(
            Prompt.category.in_(preferred_categories),
            Prompt.created_at >= _cutoff(INTERESTS_WINDOW_DAYS, now),
            Prompt.author_email != user_email,
        )
        .order_by(relevance_score.desc(), Prompt.created_at.desc())
        .limit(limit)
    )
    return [dict(row) for row in result.mappings().all()]


async def get_trending_prompts(
    db: AsyncSession, user_email: str, limit: int = 10, now: Optional[datetime] = None
) -> List[Dict]:
    """Recent prompts from other creators ranked by like_count*2 + comment_count."""
    trending_score = (Prompt.like_count * 2 + Prompt.comment_count).label("trending_score")

    result = await db.execute(
        select(*_prompt_columns(), trending_score)
        .select_from(Prompt)
        .join(User, Prompt.author_email == User.email)
        .where(
            Prompt.created_at >= _cutoff(TRENDING_WINDOW_DAYS, now),
            Prompt.author_email != user_email,
        )
        .order_by(trending_score.desc(), Prompt.created_at.desc())
        .limit(limit)
    )
    return [dict(row) for row in result.mappings().all()]


async def get_liked_prompt_ids(db: AsyncSession, user_email: str) -> Set[int]:
    result = await db.execute(
        select(PromptLike.prompt_id).where(PromptLike.user_email == user_email).distinct()
    )
    return set(result.scalars().all())
