# app/services/database/user_database_services.py
from typing import Dict, List, Optional

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models.follower import Follower
from app.models.database_models.prompt import Prompt
from app.models.database_models.user import User
from app.services.database.search_utils import LIKE_ESCAPE, contains_pattern

SOCIAL_LINK_FIELDS = ("tagline", "instagram", "twitter", "linkedin", "github", "youtube", "tiktok", "website")


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def get_user_by_handle(db: AsyncSession, handle: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.handle == handle))
    return result.scalars().first()


async def create_user(db: AsyncSession, name: str, email: str, handle: str, password_hash: bytes) -> User:
    result = await db.execute(select(exists().where(User.email == email)))
    if result.scalar():
        raise ValueError("Email already registered")
    result = await db.execute(select(exists().where(User.handle == handle)))
    if result.scalar():
        raise ValueError("Username already taken")

    db_user = User(name=name, email=email, handle=handle, password_hash=password_hash)
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email or handle.
        await db.rollback()
        raise ValueError("Email or username already registered")
    await db.refresh(db_user)
    return db_user


async def search_users(db: AsyncSession, query: str, limit: int = 20) -> List[Dict]:
    term = contains_pattern(query)
    result = await db.execute(
        select(User.email, User.name, User.handle, User.profile_photo)
        .where(
            or_(
                func.lower(User.name).like(term, escape=LIKE_ESCAPE),
                func.lower(User.handle).like(term, escape=LIKE_ESCAPE),
                func.lower(User.email).like(term, escape=LIKE_ESCAPE),
            )
        )
        .limit(limit)
    )
    return [
        {"email": row.email, "name": row.name, "userId": row.handle, "profilePhoto": row.profile_photo}
        for row in result.all()
    ]


async def get_profile_stats(db: AsyncSession, email: str) -> Dict[str, int]:
    followers = select(func.count()).select_from(Follower).where(Follower.followee_email == email).scalar_subquery()
    following = select(func.count()).select_from(Follower).where(Follower.follower_email == email).scalar_subquery()
    total_likes = (
        select(func.coalesce(func.sum(Prompt.like_count), 0)).where(Prompt.author_email == email).scalar_subquery()
    )
    prompts_count = select(func.count()).select_from(Prompt).where(Prompt.author_email == email).scalar_subquery()

    result = await db.execute(
        select(
            followers.label("followers"),
            following.label("following"),
            total_likes.label("total_likes"),
            prompts_count.label("prompts_count"),
        )
    )
    row = result.one()
    return {
        "followers": int(row.followers),
        "following": int(row.following),
        "totalLikes": int(row.total_likes),
        "promptsCount": int(row.prompts_count),
    }


async def get_user_prompts(db: AsyncSession, email: str) -> List[Prompt]:
    result = await db.execute(
        select(Prompt).where(Prompt.author_email == email).order_by(Prompt.created_at.desc())
    )
    return result.scalars().all()


async def update_user_profile(
    db: AsyncSession,
    user: User,
    handle: Optional[str] = None,
    profile_photo: Optional[str] = None,
    social_links: Optional[Dict[str, Optional[str]]] = None,
) -> User:
    """Apply a partial profile update. Raises ValueError when the new handle belongs to someone else."""
    if handle and handle != user.handle:
        result = await db.execute(
            select(exists().where(User.handle == handle, User.email != user.email))
        )
        if result.scalar():
            raise ValueError("Username already taken")
        user.handle = handle

    if profile_photo:
        user.profile_photo = profile_photo

    for field, value in (social_links or {}).items():
        if field in SOCIAL_LINK_FIELDS and value is not None:
            setattr(user, field, value.strip() or None)

    try:
        await db.commit()
    except IntegrityError:
        # A concurrent update claimed the same handle.
        await db.rollback()
        raise ValueError("Username already taken")
    except SQLAlchemyError:
        await db.rollback()
        raise
    await db.refresh(user)
    return user
