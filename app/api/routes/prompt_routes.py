# app/api/routes/prompt_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.data.database import get_db
from app.models.database_models.prompt import ALLOWED_CATEGORIES, DEFAULT_CATEGORY, TITLE_MAX_LENGTH
from app.models.database_models.user import User
from app.models.prompt_models import CommentCreate
from app.services.auth_services import get_current_user, get_optional_user
from app.services.database.prompt_database_services import (
    add_comment,
    create_prompt,
    delete_prompt,
    get_prompt,
    list_comments,
    list_prompts,
    toggle_like,
)
from app.services.storage_services import delete_image, read_image_upload, upload_image

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Prompts"])


@router.get("")
async def get_prompts(
    search: Optional[str] = None,
    category: Optional[str] = None,
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """List prompts, newest first. `liked` reflects the caller when a token is sent."""
    try:
        return await list_prompts(db, search=search, category=category, viewer_email=user.email if user else None)
    except Exception:
        logger.exception("Error listing prompts")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_prompt(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a prompt. The image is mandatory and is stored before the row is written."""
    if not title or not content:
        raise HTTPException(status_code=400, detail="title and content are required")
    if len(title) > TITLE_MAX_LENGTH:
        raise HTTPException(status_code=400, detail=f"title must be at most {TITLE_MAX_LENGTH} characters")
    category = category or DEFAULT_CATEGORY
    if category not in ALLOWED_CATEGORIES:
        raise HTTPException(status_code=400, detail="Invalid category")

    try:
        data, content_type = await read_image_upload(image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        image_url, image_key = await upload_image(data, content_type, settings.S3_PROMPTS_FOLDER)
    except Exception:
        logger.exception("Error storing prompt image")
        raise HTTPException(status_code=500, detail="Server error")

    try:
        return await create_prompt(db, user, title, content, category, image_url, image_key)
    except Exception:
        logger.exception("Error creating prompt")
        try:
            await delete_image(image_key)
        except Exception as e:
            logger.warning(f"Could not delete image object {image_key}: {e}")
        raise HTTPException(status_code=500, detail="Server error")


@router.delete("/{prompt_id}")
async def remove_prompt(
    prompt_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's prompts along with its stored image."""
    try:
        prompt = await get_prompt(db, prompt_id)
    except Exception:
        logger.exception("Error loading prompt")
        raise HTTPException(status_code=500, detail="Server error")

    if not prompt:
        raise HTTPException(status_code=404, detail="Not found")
    if prompt.author_email != user.email:
        raise HTTPException(status_code=403, detail="Forbidden")

    image_key = prompt.image_key
    try:
        await delete_prompt(db, prompt)
    except Exception:
        logger.exception("Error deleting prompt")
        raise HTTPException(status_code=500, detail="Server error")

    if image_key:
        try:
            await delete_image(image_key)
        except Exception as e:
            # The row is gone; a leftover object is not worth failing the request.
            logger.warning(f"Could not delete image object {image_key}: {e}")

    return {"ok": True}


@router.post("/{prompt_id}/like")
async def like_prompt(
    prompt_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Toggle the caller's like on a prompt."""
    try:
        toggled = await toggle_like(db, prompt_id, user.email)
    except Exception:
        logger.exception("Error toggling like")
        raise HTTPException(status_code=500, detail="Server error")

    if toggled is None:
        raise HTTPException(status_code=404, detail="Not found")
    liked, like_count = toggled
    return {"liked": liked, "likeCount": like_count}


@router.get("/{prompt_id}/comments")
async def get_comments(prompt_id: int, db: AsyncSession = Depends(get_db)):
    try:
        if await get_prompt(db, prompt_id) is None:
            raise HTTPException(status_code=404, detail="Not found")
        return {"comments": await list_comments(db, prompt_id)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error listing comments")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/{prompt_id}/comments", status_code=status.HTTP_201_CREATED)
async def post_comment(
    prompt_id: int,
    comment: CommentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not comment.content.strip():
        raise HTTPException(status_code=400, detail="content is required")

    try:
        created = await add_comment(db, prompt_id, user, comment.content.strip())
    except Exception:
        logger.exception("Error adding comment")
        raise HTTPException(status_code=500, detail="Server error")

    if created is None:
        raise HTTPException(status_code=404, detail="Not found")
    payload, comment_count = created
    return {"comment": payload, "commentCount": comment_count}
