"""
SQLAlchemy database setup and ORM models for PantryChef.
"""

import sqlalchemy as sa
from sqlalchemy import (
    create_engine, Column, String, Integer, Boolean, DateTime, Text, ForeignKey, JSON
)
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

from pantrychef.config import DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # Checks connection before use, auto-reconnects
        "pool_size": 10,         # Number of connections to keep in pool
        "max_overflow": 20,      # Extra connections allowed above pool_size
        "pool_recycle": 1800,    # Recycle connections every 30 min
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    user_id = Column(String, primary_key=True)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True))
    last_login_at = Column(DateTime(timezone=True))
    sessions = relationship("Session", back_populates="user", cascade="all, delete-orphan")
    inventory_items = relationship("InventoryItem", back_populates="owner", cascade="all, delete-orphan")
    recipes = relationship("Recipe", back_populates="creator")
    favorites = relationship("Favorite", back_populates="user", cascade="all, delete-orphan")


class Session(Base):
    __tablename__ = "sessions"
    session_id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.user_id"))
    created_at = Column(DateTime(timezone=True))
    expires_at = Column(DateTime(timezone=True))
    is_active = Column(Boolean, default=True)
    ip_address = Column(String)
    user_agent = Column(String)
    user = relationship("User", back_populates="sessions")


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    item_id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.user_id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    # Kept as text so quantities survive storage round-trips exactly
    quantity = Column(String, nullable=False)
    unit = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True))
    owner = relationship("User", back_populates="inventory_items")


class Recipe(Base):
    __tablename__ = "recipes"
    recipe_id = Column(String, primary_key=True)
    created_by = Column(String, ForeignKey("users.user_id"), index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String)
    cook_time = Column(Integer, nullable=False)
    difficulty = Column(String, nullable=False)
    servings = Column(Integer, nullable=False)
    # JSON text, see pantrychef.normalizer
    ingredients = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False)
    matched_ingredients = Column(Integer, nullable=False)
    total_ingredients = Column(Integer, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True))
    creator = relationship("User", back_populates="recipes")
    favorites = relationship("Favorite", back_populates="recipe", cascade="all, delete-orphan")


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )
    favorite_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    recipe_id = Column(String, ForeignKey("recipes.recipe_id", ondelete="CASCADE"), nullable=False)
    user = relationship("User", back_populates="favorites")
    recipe = relationship("Recipe", back_populates="favorites")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
