import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import anyio
from sqlalchemy.orm import Session

from pantrychef.ai_generation import RecipeGenerator
from pantrychef.errors import EmptyInventory, RecipeNotFound
from pantrychef.favorites import FavoriteReconciler
from pantrychef.models import InventoryEntry
from pantrychef.normalizer import from_storage_record, restore_rows, to_storage_record
from pantrychef.repository import InventoryRepository, RecipeRepository
from pantrychef.repository_postgres import PostgresInventoryRepository, PostgresRecipeRepository
from pantrychef.schemas.recipe import GeneratedRecipe, GenerationResponse, RecipeResponse

logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    """Saved recipes from one generation round, plus how many candidates there were."""
    recipes: List[RecipeResponse]
    requested: int

    @property
    def dropped(self) -> int:
        return self.requested - len(self.recipes)

    def to_response(self) -> GenerationResponse:
        return GenerationResponse(recipes=self.recipes, requested=self.requested, dropped=self.dropped)


class RecipeService:
    """Service for recipe generation, reads, deletion and favorites."""

    def __init__(self, db: Session, generator: Optional[RecipeGenerator] = None,
                 repo: Optional[RecipeRepository] = None,
                 inventory_repo: Optional[InventoryRepository] = None):
        self.db = db
        self.generator = generator
        self.repo = repo or PostgresRecipeRepository(db)
        self.inventory_repo = inventory_repo or PostgresInventoryRepository(db)
        self.favorites = FavoriteReconciler(self.repo)

    def save_batch(self, candidates: Sequence[GeneratedRecipe], user_id: str) -> List[RecipeResponse]:
        """
        Save each candidate on its own. A candidate that fails to save is
        logged and left out; the rest are still returned.
        """
        saved = []
        for candidate in candidates:
            try:
                row = self.repo.create_recipe(to_storage_record(candidate), created_by=user_id)
                saved.append(from_storage_record(row))
            except Exception as e:
                logger.error("Error saving recipe %r: %s", candidate.title, e)
        return saved

    def inventory_snapshot(self, user_id: str) -> List[InventoryEntry]:
        items = self.inventory_repo.list_for_user(user_id)
        if not items:
            raise EmptyInventory()
        return [InventoryEntry.from_row(item) for item in items]

    async def generate_for_user(self, user_id: str) -> GenerationOutcome:
        """
        Generate suggestions from the user's current inventory and store them.

        Database reads and writes run in a worker thread; only the model call
        is awaited on the event loop.
        """
        if self.generator is None:
            raise ValueError("Recipe generation is not configured")

        inventory = await anyio.to_thread.run_sync(self.inventory_snapshot, user_id)
        candidates = await self.generator.generate(inventory)

        saved = await anyio.to_thread.run_sync(self.save_batch, candidates, user_id)
        outcome = GenerationOutcome(recipes=saved, requested=len(candidates))
        if outcome.dropped:
            logger.warning("generate_for_user: %d of %d recipes could not be saved for user_id=%s",
                           outcome.dropped, outcome.requested, user_id)
        return outcome

    def list_recipes(self, user_id: str) -> List[RecipeResponse]:
        recipes = restore_rows(self.repo.list_for_user(user_id))
        return self.favorites.annotate_all(recipes, user_id)

    def get_recipe(self, recipe_id: str, user_id: Optional[str] = None) -> RecipeResponse:
        row = self.repo.get(recipe_id)
        if row is None:
            raise RecipeNotFound(recipe_id)
        return self.favorites.annotate(from_storage_record(row), user_id)

    def delete_recipe(self, recipe_id: str, user_id: str) -> None:
        if not self.repo.delete(recipe_id, user_id):
            raise RecipeNotFound(recipe_id)
        logger.info("delete_recipe: recipe_id=%s user_id=%s", recipe_id, user_id)

    def toggle_favorite(self, recipe_id: str, user_id: str) -> RecipeResponse:
        return self.favorites.toggle_favorite(recipe_id, user_id)

    def list_favorites(self, user_id: str) -> List[RecipeResponse]:
        return self.favorites.list_favorites(user_id)
