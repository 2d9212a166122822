"""
Database persistence layer for users, sessions, recipes and favorites.

This module owns the SQLAlchemy engine, the session factory and the ORM tables.
The database URL comes from the DATABASE_URL environment variable (loaded from .env
by api.config) and defaults to a local SQLite file.

Tables:
- users: auth identities (email + bcrypt hash + metadata)
- auth_sessions: bearer tokens issued at login
- recipes: recipe header rows (name, cooking time, image, optional owner)
- recipe_ingredients: ordered ingredient lines per recipe
- recipe_steps: ordered instruction steps per recipe (1-based step_number)
- user_favorite_recipes: join of a user and a recipe, with its own identifier

An in-memory SQLite URL ("sqlite://") is served through a single shared connection
so every session sees the same database (used by the test suite).
"""

import logging
import os
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    text,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./recipes.db"
_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

Base = declarative_base()

# Database engine and session factory (created by configure_engine)
engine = None
SessionLocal = None


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite drops tzinfo, so all stored datetimes are naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


# ============================================================================
# ORM Models
# ============================================================================

class UserRow(Base):
    """Auth identities."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    user_metadata = Column("metadata", Text, nullable=True)  # JSON string
    created_at = Column(DateTime, default=utcnow, nullable=False)


class AuthSessionRow(Base):
    """Bearer tokens issued at login."""
    __tablename__ = "auth_sessions"

    id = Column(Integer, primary_key=True, index=True)
    access_token = Column(String(128), unique=True, index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)


class RecipeRow(Base):
    """Recipe header rows; ingredients and steps live in their own tables."""
    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(500), nullable=False, index=True)
    cooking_time = Column(Integer, nullable=True)
    image_url = Column(String(1000), nullable=True)
    # NULL for recipes created by favoriting an AI suggestion
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    ingredients = relationship(
        "RecipeIngredientRow",
        order_by="RecipeIngredientRow.order_index",
        cascade="all, delete-orphan",
    )
    steps = relationship(
        "RecipeStepRow",
        order_by="RecipeStepRow.step_number",
        cascade="all, delete-orphan",
    )
    favorites = relationship("FavoriteRow", back_populates="recipe", cascade="all, delete-orphan")


class RecipeIngredientRow(Base):
    """Ordered ingredient lines (order_index starts at 0)."""
    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_text = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False)


class RecipeStepRow(Base):
    """Ordered instruction steps (step_number starts at 1)."""
    __tablename__ = "recipe_steps"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    step_text = Column(Text, nullable=False)
    step_number = Column(Integer, nullable=False)


class FavoriteRow(Base):
    """A user's saved reference to a recipe."""
    __tablename__ = "user_favorite_recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    recipe = relationship("RecipeRow", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
        Index("idx_favorite_user_created", "user_id", "created_at"),
    )


# ============================================================================
# Engine / Session Management
# ============================================================================

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(database_url: str = None):
    """
    Create the engine and session factory.

    Called once on import with DATABASE_URL; call again to point the module at
    another database (tests use an in-memory SQLite URL).

    Args:
        database_url: SQLAlchemy URL (default: DATABASE_URL env var, then local SQLite file)

    Returns:
        The new SQLAlchemy engine
    """
    global engine, SessionLocal

    url = database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": False,  # Set to True for SQL query logging
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    new_engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)

    if engine is not None:
        engine.dispose()

    engine = new_engine
    SessionLocal = sessionmaker(autoflush=False, bind=engine)
    logger.info("Database engine configured (%s)", url.split("@")[-1])
    return engine


def init_db() -> None:
    """
    Initialize database tables (create if they don't exist).

    This function is safe to call multiple times - it only creates tables
    that don't already exist.

    Raises:
        Exception: If database connection fails or table creation fails
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized (or already exist)")
    except Exception as e:
        logger.error("Failed to initialize database tables: %s", e)
        raise


def reset_db() -> None:
    """Drop and recreate every table (destroys all data)."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def get_db_session():
    """
    Get a database session.

    Returns:
        SQLAlchemy Session object; the caller is responsible for closing it
    """
    return SessionLocal()


def db_is_reachable() -> bool:
    """
    Check that the database answers a trivial query.

    Returns:
        True if SELECT 1 succeeds, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.debug("Database reachability check failed: %s", e)
        return False


configure_engine()
