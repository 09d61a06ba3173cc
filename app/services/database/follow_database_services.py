# app/services/database/follow_database_services.py
from typing import Dict

from sqlalchemy import delete, exists, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models.follower import Follower


async def follow_user(db: AsyncSession, follower_email: str, followee_email: str) -> bool:
    """Add the follow edge. Returns False when it already existed."""
    if follower_email == followee_email:
        raise ValueError("Cannot follow yourself")

    try:
        result = await db.execute(
            pg_insert(Follower)
            .values(follower_email=follower_email, followee_email=followee_email)
            .on_conflict_do_nothing(index_elements=["follower_email", "followee_email"])
            .returning(Follower.follower_email)
        )
        created = result.first() is not None
        await db.commit()
        return created
    except SQLAlchemyError:
        await db.rollback()
        raise


async def unfollow_user(db: AsyncSession, follower_email: str, followee_email: str) -> bool:
    """Remove the follow edge. Returns False when there was nothing to remove."""
    try:
        result = await db.execute(
            delete(Follower)
            .where(Follower.follower_email == follower_email, Follower.followee_email == followee_email)
            .returning(Follower.follower_email)
            .execution_options(synchronize_session=False)
        )
        removed = result.first() is not None
        await db.commit()
        return removed
    except SQLAlchemyError:
        await db.rollback()
        raise


async def is_following(db: AsyncSession, follower_email: str, followee_email: str) -> bool:
    result = await db.execute(
        select(
            exists().where(Follower.follower_email == follower_email, Follower.followee_email == followee_email)
        )
    )
    return bool(result.scalar())


async def get_follow_stats(db: AsyncSession, user_email: str) -> Dict[str, int]:
    followers = select(func.count()).select_from(Follower).where(Follower.followee_email == user_email).scalar_subquery()
    following = select(func.count()).select_from(Follower).where(Follower.follower_email == user_email).scalar_subquery()
    result = await db.execute(select(followers.label("followers_count"), following.label("following_count")))
    row = result.one()
    return {"followers_count": int(row.followers_count), "following_count": int(row.following_count)}
