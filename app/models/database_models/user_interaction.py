# app/models/database_models/user_interaction.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.sql import func

from app.data.database import Base

INTERACTION_TYPES = ("like", "view", "copy")


class UserInteraction(Base):
    __tablename__ = "user_interactions"
    __table_args__ = (
        UniqueConstraint("user_email", "prompt_id", "interaction_type", name="uq_interaction"),
    )

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False, index=True)
    prompt_id = Column(BigInteger, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=False, index=True)
    interaction_type = Column(String(20), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
