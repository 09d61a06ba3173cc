# app/models/recommendation_models.py
from typing import Optional

from pydantic import BaseModel


class TrackInteractionRequest(BaseModel):
    # Missing fields are answered with 400 by the route, not 422.
    promptId: Optional[int] = None
    interactionType: Optional[str] = None
