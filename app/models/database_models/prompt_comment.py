# app/models/database_models/prompt_comment.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.sql import func

from app.data.database import Base


class PromptComment(Base):
    __tablename__ = "prompt_comments"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    prompt_id = Column(BigInteger, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
