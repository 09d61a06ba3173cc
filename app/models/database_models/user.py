# app/models/database_models/user.py
from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.data.database import Base
from app.models.database_models.prompt import Prompt


class User(Base):
    __tablename__ = "users"

    email = Column(String(255), primary_key=True)
    name = Column(String(100), nullable=False)
    handle = Column(String(30), unique=True, index=True, nullable=False)
    profile_photo = Column(String, nullable=True)
    password_hash = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tagline = Column(String(200), nullable=True)
    instagram = Column(String(100), nullable=True)
    twitter = Column(String(100), nullable=True)
    linkedin = Column(String(100), nullable=True)
    github = Column(String(100), nullable=True)
    youtube = Column(String(100), nullable=True)
    tiktok = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)

    prompts = relationship(Prompt, back_populates="author", passive_deletes=True)
