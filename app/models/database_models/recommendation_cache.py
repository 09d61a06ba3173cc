# app/models/database_models/recommendation_cache.py
# Reserved for precomputed recommendations; the engine computes on request and does not read it.
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.sql import func

from app.data.database import Base


class RecommendationCache(Base):
    __tablename__ = "recommendation_cache"
    __table_args__ = (UniqueConstraint("user_email", "prompt_id", name="uq_recommendation"),)

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False, index=True)
    prompt_id = Column(BigInteger, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=False)
    score = Column(Numeric(5, 2), nullable=False, index=True)
    reason = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
