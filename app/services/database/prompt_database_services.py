# app/services/database/prompt_database_services.py
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, exists, func, literal, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models.prompt import Prompt
from app.models.database_models.prompt_comment import PromptComment
from app.models.database_models.prompt_like import PromptLike
from app.models.database_models.user import User
from app.services.database.search_utils import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)


def serialize_prompt(
    prompt: Prompt,
    author_name: Optional[str] = None,
    author_photo: Optional[str] = None,
    liked: Optional[bool] = None,
) -> Dict:
    data = {
        "id": prompt.id,
        "title": prompt.title,
        "content": prompt.content,
        "category": prompt.category,
        "imageUrl": prompt.image_url,
        "likeCount": prompt.like_count,
        "commentCount": prompt.comment_count,
        "createdAt": prompt.created_at,
        "author": {"email": prompt.author_email, "name": author_name, "profilePhoto": author_photo},
    }
    if liked is not None:
        data["liked"] = liked
    return data


async def list_prompts(
    db: AsyncSession,
    search: Optional[str] = None,
    category: Optional[str] = None,
    viewer_email: Optional[str] = None,
) -> List[Dict]:
    """Newest-first feed, filtered by a free-text search and/or a category."""
    if viewer_email:
        liked = exists().where(PromptLike.prompt_id == Prompt.id, PromptLike.user_email == viewer_email)
    else:
        liked = literal(False)

    query = (
        select(Prompt, User.name.label("author_name"), User.profile_photo.label("author_photo"), liked.label("liked"))
        .join(User, User.email == Prompt.author_email)
    )

    if search and search.strip():
        term = contains_pattern(search)
        query = query.where(
            or_(
                func.lower(Prompt.title).like(term, escape=LIKE_ESCAPE),
                func.lower(Prompt.content).like(term, escape=LIKE_ESCAPE),
                func.lower(Prompt.category).like(term, escape=LIKE_ESCAPE),
            )
        )
    if category and category.strip() and category != "all":
        query = query.where(func.lower(Prompt.category) == category.strip().lower())

    result = await db.execute(query.order_by(Prompt.created_at.desc()))
    return [
        serialize_prompt(row.Prompt, row.author_name, row.author_photo, bool(row.liked))
        for row in result.all()
    ]


async def get_prompt(db: AsyncSession, prompt_id: int) -> Optional[Prompt]:
    result = await db.execute(select(Prompt).where(Prompt.id == prompt_id))
    return result.scalars().first()


async def create_prompt(
    db: AsyncSession,
    author: User,
    title: str,
    content: str,
    category: str,
    image_url: str,
    image_key: str,
) -> Dict:
    prompt = Prompt(
        author_email=author.email,
        title=title,
        content=content,
        category=category,
        image_url=image_url,
        image_key=image_key,
    )
    db.add(prompt)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    await db.refresh(prompt)
    return serialize_prompt(prompt, author.name, author.profile_photo)


async def delete_prompt(db: AsyncSession, prompt: Prompt) -> None:
    try:
        await db.delete(prompt)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def toggle_like(db: AsyncSession, prompt_id: int, user_email: str) -> Optional[Tuple[bool, int]]:
    """
    Flip the caller's like on a prompt and return (liked, like_count).

    The like row change and the counter delta commit together, and the counter
    moves by an atomic expression so concurrent toggles cannot skew it.
    Returns None when the prompt does not exist.
    """
    try:
        result = await db.execute(select(Prompt.id).where(Prompt.id == prompt_id))
        if result.scalar() is None:
            return None

        result = await db.execute(
            delete(PromptLike)
            .where(PromptLike.prompt_id == prompt_id, PromptLike.user_email == user_email)
            .returning(PromptLike.id)
        )
        if result.first() is not None:
            liked = False
            counter = (
                update(Prompt)
                .where(Prompt.id == prompt_id)
                .values(like_count=func.greatest(Prompt.like_count - 1, 0))
                .returning(Prompt.like_count)
                .execution_options(synchronize_session=False)
            )
        else:
            liked = True
            result = await db.execute(
                pg_insert(PromptLike)
                .values(prompt_id=prompt_id, user_email=user_email)
                .on_conflict_do_nothing(index_elements=["prompt_id", "user_email"])
                .returning(PromptLike.id)
            )
            if result.first() is not None:
                counter = (
                    update(Prompt)
                    .where(Prompt.id == prompt_id)
                    .values(like_count=Prompt.like_count + 1)
                    .returning(Prompt.like_count)
                    .execution_options(synchronize_session=False)
                )
            else:
                # A concurrent request inserted the same like; it owns the increment.
                counter = select(Prompt.like_count).where(Prompt.id == prompt_id)

        result = await db.execute(counter)
        like_count = result.scalar_one()
        await db.commit()
        logger.debug(f"Prompt {prompt_id} like toggled, liked={liked}, like_count={like_count}")
        return liked, like_count
    except SQLAlchemyError:
        await db.rollback()
        raise


def serialize_comment(comment: PromptComment, author_name: Optional[str] = None) -> Dict:
    return {
        "id": comment.id,
        "promptId": comment.prompt_id,
        "content": comment.content,
        "createdAt": comment.created_at,
        "author": {"email": comment.user_email, "name": author_name},
    }


async def list_comments(db: AsyncSession, prompt_id: int) -> List[Dict]:
    result = await db.execute(
        select(PromptComment, User.name.label("author_name"))
        .join(User, User.email == PromptComment.user_email)
        .where(PromptComment.prompt_id == prompt_id)
        .order_by(PromptComment.created_at.asc())
    )
    return [serialize_comment(row.PromptComment, row.author_name) for row in result.all()]


async def add_comment(db: AsyncSession, prompt_id: int, author: User, content: str) -> Optional[Tuple[Dict, int]]:
    """Insert a comment and bump the prompt's comment_count in one transaction. None if the prompt is unknown."""
    try:
        result = await db.execute(
            update(Prompt)
            .where(Prompt.id == prompt_id)
            .values(comment_count=Prompt.comment_count + 1)
            .returning(Prompt.comment_count)
            .execution_options(synchronize_session=False)
        )
        comment_count = result.scalar()
        if comment_count is None:
            await db.rollback()
            return None

        comment = PromptComment(prompt_id=prompt_id, user_email=author.email, content=content)
        db.add(comment)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    await db.refresh(comment)
    return serialize_comment(comment, author.name), comment_count
