# app/services/auth_services.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.data.database import get_db
from app.models.auth_models import PasswordValidationError, TokenData
from app.models.database_models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)


def verify_password(plain_password, hashed_password):
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password)


def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())


async def authenticate_user(db: AsyncSession, email: str, password: str):
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()
    if not user:
        return False
    if not verify_password(password, user.password_hash):
        return False
    return user


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )
    return encoded_jwt


def create_user_token(user: User) -> str:
    return create_access_token(data={"sub": user.email, "name": user.name, "userId": user.handle})


def decode_access_token(token: str) -> TokenData:
    """Decode a bearer token. Raises JWTError when it is invalid, expired or of the wrong type."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Invalid token type")
    email: str = payload.get("sub")
    if not email:
        raise JWTError("Invalid token payload")
    return TokenData(email=email)


def validate_password(password: str):
    errors = []
    if len(password) < 8:
        errors.append("8_characters_long")
    if not any(char.isdigit() for char in password):
        errors.append("one_digit")
    if not any(char.isupper() for char in password):
        errors.append("one_uppercase")
    if not any(char.islower() for char in password):
        errors.append("one_lowercase")
    if not any(char in "!@#$%^&*()" for char in password):
        errors.append("one_special")

    if errors:
        raise PasswordValidationError(errors)

    return True


def serialize_user(user: User) -> dict:
    return {
        "email": user.email,
        "name": user.name,
        "userId": user.handle,
        "profilePhoto": user.profile_photo,
        "tagline": user.tagline,
        "socialLinks": {
            "instagram": user.instagram,
            "twitter": user.twitter,
            "linkedin": user.linkedin,
            "github": user.github,
            "youtube": user.youtube,
            "tiktok": user.tiktok,
            "website": user.website,
        },
    }


async def _resolve_user(token: str, db: AsyncSession) -> User:
    token_data = decode_access_token(token)
    result = await db.execute(select(User).where(User.email == token_data.email))
    user = result.scalars().first()
    if not user:
        raise JWTError("User not found")
    return user


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        return await _resolve_user(token, db)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise credentials_exception


async def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Like get_current_user, but anonymous or invalid credentials yield None."""
    if not token:
        return None
    try:
        return await _resolve_user(token, db)
    except JWTError:
        return None
