# app/services/recommendation_services.py
import logging
from typing import Dict, Iterable, List, Set

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.database.recommendation_database_services import (
    get_followed_creators_prompts,
    get_liked_prompt_ids,
    get_similar_prompts,
    get_trending_prompts,
)

logger = logging.getLogger(__name__)

FOLLOWED_CREATORS_LIMIT = 10

FOLLOWED_REASON = "From creators you follow"
INTERESTS_REASON = "Based on your interests"
TRENDING_REASON = "Trending now"

FOLLOWED_SCORE = 10
INTERESTS_SCORE = 7
TRENDING_SCORE = 5


def tag_prompts(prompts: Iterable[Dict], reason: str, score: int) -> List[Dict]:
    return [{**prompt, "reason": reason, "score": score} for prompt in prompts]


def filter_duplicates_and_interacted(prompts: List[Dict], user_email: str, liked_ids: Set[int]) -> List[Dict]:
    """
    Drop prompts the user already liked or wrote, and repeated ids.

    The first occurrence of an id wins, so a prompt found by an earlier tier
    keeps that tier's reason and score.
    """
    seen = set()
    unique = []
    for prompt in prompts:
        if prompt["id"] in seen or prompt["id"] in liked_ids or prompt["author_email"] == user_email:
            continue
        seen.add(prompt["id"])
        unique.append(prompt)
    return unique


def rank_recommendations(prompts: List[Dict], user_email: str, liked_ids: Set[int], limit: int) -> List[Dict]:
    unique = filter_duplicates_and_interacted(prompts, user_email, liked_ids)
    # sorted() is stable, so each tier keeps its own query order.
    return sorted(unique, key=lambda prompt: prompt["score"], reverse=True)[:limit]


async def get_recommendations(db: AsyncSession, user_email: str, limit: int = 20) -> List[Dict]:
    """
    Build a user's feed from three tiers, in priority order:

    1. new prompts from creators the user follows,
    2. prompts in the categories the user likes most,
    3. trending prompts.

    Later tiers are only queried while the feed is short of `limit`. Any
    query failure propagates; a partial feed is never returned.
    """
    recommendations = []

    followed = await get_followed_creators_prompts(db, user_email, FOLLOWED_CREATORS_LIMIT)
    recommendations.extend(tag_prompts(followed, FOLLOWED_REASON, FOLLOWED_SCORE))

    if len(recommendations) < limit:
        similar = await get_similar_prompts(db, user_email, limit - len(recommendations))
        recommendations.extend(tag_prompts(similar, INTERESTS_REASON, INTERESTS_SCORE))

    if len(recommendations) < limit:
        trending = await get_trending_prompts(db, user_email, limit - len(recommendations))
        recommendations.extend(tag_prompts(trending, TRENDING_REASON, TRENDING_SCORE))

    liked_ids = await get_liked_prompt_ids(db, user_email)
    ranked = rank_recommendations(recommendations, user_email, liked_ids, limit)

    logger.debug(
        f"Recommendations for {user_email}: {len(recommendations)} candidates, "
        f"{len(liked_ids)} liked, {len(ranked)} returned"
    )
    return ranked
