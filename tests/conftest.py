"""
Pytest configuration and fixtures for PantryChef tests.
"""

import asyncio
import json
import os
import uuid
from types import SimpleNamespace

import pytest

# Set test environment before importing pantrychef modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pantrychef.database import Base, User
from pantrychef.utils_time import utc_now


def run_async(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


def make_recipe_payload(title="Egg Fried Rice", **overrides) -> dict:
    """A recipe dict shaped like the generator's output."""
    recipe = {
        "title": title,
        "description": "Quick fried rice with scrambled egg",
        "cookTime": 20,
        "difficulty": "Easy",
        "servings": 2,
        "ingredients": [
            {"name": "egg", "quantity": "2", "unit": "pcs", "inInventory": True},
            {"name": "cooked rice", "quantity": "300", "unit": "g", "inInventory": False},
            {"name": "salt", "quantity": "1", "unit": None, "inInventory": False},
        ],
        "instructions": [
            {"step": 1, "instruction": "Scramble the eggs in a hot pan."},
            {"step": 2, "instruction": "Add the rice and salt and stir-fry for 5 minutes."},
        ],
        "matchedIngredients": 1,
        "totalIngredients": 3,
        "tags": ["Quick", "Easy"],
    }
    recipe.update(overrides)
    return recipe


class StubCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(role="assistant", content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class StubOpenAI:
    """Stands in for AsyncOpenAI; returns a fixed completion payload."""

    def __init__(self, content=None, error=None):
        self.completions = StubCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def recipe_payload():
    return make_recipe_payload


@pytest.fixture
def stub_openai():
    def _factory(content=None, error=None):
        return StubOpenAI(content=content, error=error)
    return _factory


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _factory(username=None):
        user = User(
            user_id=str(uuid.uuid4()),
            username=username or f"cook_{uuid.uuid4().hex[:8]}",
            password_hash="x",
            created_at=utc_now(),
        )
        db.add(user)
        db.commit()
        return user
    return _factory


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def wrapped_payload():
    """JSON text of a generator answer wrapping recipes in an object."""
    def _factory(*recipes):
        return json.dumps({"recipes": list(recipes)})
    return _factory
