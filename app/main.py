# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.routes import (
    auth_routes,
    chat_routes,
    prompt_routes,
    recommendation_routes,
    root_routes,
    user_routes,
)
from app.core.config import settings
from app.core.security import limiter
from app.core.startup import startup_event

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="yourPrompty API")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_routes.router)
app.include_router(auth_routes.router, prefix="/api/auth")
app.include_router(prompt_routes.router, prefix="/api/prompts")
app.include_router(user_routes.router, prefix="/api/users")
app.include_router(recommendation_routes.router, prefix="/api/recommendations")
app.include_router(chat_routes.router, prefix="/api/chat")

@app.on_event("startup")
async def app_startup():
    await startup_event(app)
