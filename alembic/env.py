# alembic/env.py

import sys
import os
from logging.config import fileConfig
from sqlalchemy import create_engine
from alembic import context
from dotenv import load_dotenv


# Make the project root importable when alembic is run from anywhere.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, PROJECT_ROOT)

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

# --- Model Imports ---
from app.data.database import Base
from app.models.database_models.user import User
from app.models.database_models.prompt import Prompt
from app.models.database_models.prompt_like import PromptLike
from app.models.database_models.prompt_comment import PromptComment
from app.models.database_models.follower import Follower
from app.models.database_models.user_interaction import UserInteraction
from app.models.database_models.recommendation_cache import RecommendationCache

from app.core.config import settings

# --- Alembic Configuration ---
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url() -> str:
    """Migrations run on a synchronous driver."""
    return settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://", 1)


def run_migrations_offline() -> None:
    context.configure(
        url=sync_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    if settings.DATABASE_URL is None:
        raise ValueError("DATABASE_URL environment variable not set.")
    connectable = create_engine(sync_database_url())
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            transaction_per_migration=True,
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
