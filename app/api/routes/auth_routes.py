# app/api/routes/auth_routes.py
import logging

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import limiter
from app.data.database import get_db
from app.models.auth_models import (
    LoginRequest,
    PasswordValidationError,
    UserCreate,
    ValidationError,
)
from app.models.database_models.user import User
from app.services.auth_services import (
    authenticate_user,
    create_user_token,
    get_current_user,
    hash_password,
    serialize_user,
    validate_password,
)
from app.services.database.user_database_services import create_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SIGNUP_RATE_LIMIT)
async def signup(request: Request, user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new user and return a bearer token."""
    try:
        validate_password(user_data.password)
    except PasswordValidationError as e:
        errors = []
        for error_message in e.messages:
            errors.append(ValidationError(loc=["password"], msg=error_message, type="value_error.password"))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[error.model_dump() for error in errors]
        )

    try:
        validate_email(user_data.email, check_deliverability=False)
    except EmailNotValidError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        user = await create_user(
            db,
            name=user_data.name.strip(),
            email=user_data.email,
            handle=user_data.userId.strip(),
            password_hash=hash_password(user_data.password),
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception:
        logger.exception("Signup failed")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"Registered user {user.handle}")
    return {"token": create_user_token(user), "user": serialize_user(user)}


@router.post("/signin")
async def signin(login_data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Check credentials and return a bearer token."""
    try:
        user = await authenticate_user(db, login_data.email, login_data.password)
    except Exception:
        logger.exception("Signin failed")
        raise HTTPException(status_code=500, detail="Server error")

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return {"token": create_user_token(user), "user": serialize_user(user)}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return serialize_user(user)
