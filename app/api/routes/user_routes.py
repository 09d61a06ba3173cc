# app/api/routes/user_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.data.database import get_db
from app.models.database_models.user import User
from app.services.auth_services import get_current_user, serialize_user
from app.services.database.follow_database_services import follow_user, unfollow_user
from app.services.database.prompt_database_services import serialize_prompt
from app.services.database.user_database_services import (
    get_profile_stats,
    get_user_by_email,
    get_user_prompts,
    search_users,
    update_user_profile,
)
from app.services.storage_services import read_image_upload, upload_image

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


async def _build_profile(db: AsyncSession, user: User) -> dict:
    stats = await get_profile_stats(db, user.email)
    prompts = await get_user_prompts(db, user.email)
    return {
        "user": serialize_user(user),
        "stats": stats,
        "prompts": [serialize_prompt(prompt, user.name, user.profile_photo) for prompt in prompts],
    }


@router.get("/search")
async def search(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """Find users by name, handle or email. Queries under two characters return nothing."""
    if not q or len(q.strip()) < 2:
        return {"users": []}
    try:
        return {"users": await search_users(db, q)}
    except Exception:
        logger.exception("User search failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/me/profile")
async def my_profile(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    try:
        return await _build_profile(db, user)
    except Exception:
        logger.exception("Error loading own profile")
        raise HTTPException(status_code=500, detail="Server error")


@router.patch("/me")
async def update_me(
    userId: Optional[str] = Form(None),
    tagline: Optional[str] = Form(None),
    instagram: Optional[str] = Form(None),
    twitter: Optional[str] = Form(None),
    linkedin: Optional[str] = Form(None),
    github: Optional[str] = Form(None),
    youtube: Optional[str] = Form(None),
    tiktok: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    profilePhoto: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change the caller's handle, photo, tagline or social links."""
    photo_url = None
    if profilePhoto is not None:
        try:
            data, content_type = await read_image_upload(profilePhoto)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            photo_url, _ = await upload_image(data, content_type, settings.S3_AVATARS_FOLDER)
        except Exception:
            logger.exception("Profile photo upload failed")
            raise HTTPException(status_code=500, detail="Server error")

    social_links = {
        "tagline": tagline,
        "instagram": instagram,
        "twitter": twitter,
        "linkedin": linkedin,
        "github": github,
        "youtube": youtube,
        "tiktok": tiktok,
        "website": website,
    }
    try:
        updated = await update_user_profile(
            db,
            user,
            handle=userId.strip() if userId else None,
            profile_photo=photo_url,
            social_links=social_links,
        )
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception("Profile update failed")
        raise HTTPException(status_code=500, detail="Server error")

    return serialize_user(updated)


@router.get("/{email}/profile")
async def public_profile(email: str, db: AsyncSession = Depends(get_db)):
    try:
        user = await get_user_by_email(db, email)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return await _build_profile(db, user)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error loading profile")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/{email}/follow")
async def follow(email: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if email == user.email:
        raise HTTPException(status_code=400, detail="Cannot follow yourself")
    try:
        if await get_user_by_email(db, email) is None:
            raise HTTPException(status_code=404, detail="User not found")
        await follow_user(db, user.email, email)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Follow failed")
        raise HTTPException(status_code=500, detail="Server error")
    return {"ok": True}


@router.delete("/{email}/follow")
async def unfollow(email: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    try:
        await unfollow_user(db, user.email, email)
    except Exception:
        logger.exception("Unfollow failed")
        raise HTTPException(status_code=500, detail="Server error")
    return {"ok": True}
