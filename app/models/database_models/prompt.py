# app/models/database_models/prompt.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.data.database import Base

ALLOWED_CATEGORIES = [
    "Photography",
    "Casual",
    "Character",
    "Product Review",
    "Landscape",
    "Digital Art",
    "Abstract",
    "Food",
    "Fashion",
    "Architecture",
    "General",
]
DEFAULT_CATEGORY = "General"
TITLE_MAX_LENGTH = 200


class Prompt(Base):
    __tablename__ = "prompts"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    author_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default=DEFAULT_CATEGORY, server_default=DEFAULT_CATEGORY)
    image_url = Column(Text, nullable=True)
    image_key = Column(Text, nullable=True)
    like_count = Column(Integer, nullable=False, default=0, server_default="0")
    comment_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    author = relationship("User", back_populates="prompts")
