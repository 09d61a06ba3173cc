# app/models/database_models/follower.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func

from app.data.database import Base


class Follower(Base):
    __tablename__ = "followers"
    __table_args__ = (
        CheckConstraint("follower_email <> followee_email", name="ck_followers_not_self"),
    )

    follower_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    followee_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
