# app/core/dependencies.py
import redis.asyncio as redis
from redis.asyncio import Redis

from app.core.config import settings


def create_redis_client() -> Redis:
    """Client for the chat conversation store. Values come back as str."""
    return redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)


async def get_redis_client():
    redis_client = create_redis_client()
    try:
        yield redis_client
    finally:
        await redis_client.aclose()


async def ping_redis() -> None:
    """Raise when the conversation store cannot be reached."""
    redis_client = create_redis_client()
    try:
        await redis_client.ping()
    finally:
        await redis_client.aclose()
