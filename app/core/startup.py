# app/core/startup.py
import logging

from fastapi import FastAPI
from google import genai

from app.core.config import settings
from app.core.dependencies import ping_redis

logger = logging.getLogger(__name__)

llm_clients = {}

async def startup_event(app: FastAPI):
    """
    Initialize resources on application startup.
    """
    global llm_clients

    try:
        if settings.gemini_configured:
            llm_clients["gemini"] = genai.Client(api_key=settings.GEMINI_API_KEY)
            logger.info("Gemini client initialized with model %s", settings.GEMINI_MODEL)
        else:
            logger.warning("GEMINI_API_KEY not set, chat will use fallback responses.")

        await ping_redis()
        logger.info("Redis reachable at %s", settings.REDIS_URL)

    except Exception:
        logger.exception("Failed to startup")
        raise
