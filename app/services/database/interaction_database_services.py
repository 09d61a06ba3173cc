# app/services/database/interaction_database_services.py
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models.prompt import Prompt
from app.models.database_models.user_interaction import INTERACTION_TYPES, UserInteraction


async def track_interaction(db: AsyncSession, user_email: str, prompt_id: int, interaction_type: str) -> Optional[Dict]:
    """
    Record a like/view/copy. Repeating the same kind refreshes its timestamp
    instead of adding a row. Returns None when the prompt does not exist.
    """
    if interaction_type not in INTERACTION_TYPES:
        raise ValueError("Invalid interaction type")

    try:
        result = await db.execute(select(Prompt.id).where(Prompt.id == prompt_id))
        if result.scalar() is None:
            return None

        statement = pg_insert(UserInteraction).values(
            user_email=user_email, prompt_id=prompt_id, interaction_type=interaction_type
        )
        statement = statement.on_conflict_do_update(
            index_elements=["user_email", "prompt_id", "interaction_type"],
            set_={"created_at": func.now()},
        ).returning(
            UserInteraction.id,
            UserInteraction.user_email,
            UserInteraction.prompt_id,
            UserInteraction.interaction_type,
            UserInteraction.created_at,
        )
        result = await db.execute(statement)
        interaction = dict(result.mappings().one())
        await db.commit()
        return interaction
    except SQLAlchemyError:
        await db.rollback()
        raise
