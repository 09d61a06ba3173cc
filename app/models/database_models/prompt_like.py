# app/models/database_models/prompt_like.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.sql import func

from app.data.database import Base


class PromptLike(Base):
    __tablename__ = "prompt_likes"
    __table_args__ = (UniqueConstraint("prompt_id", "user_email", name="uq_prompt_like"),)

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    prompt_id = Column(BigInteger, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=False)
    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
