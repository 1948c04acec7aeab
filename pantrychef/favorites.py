"""
Per-user favorites over recipes.

A (user, recipe) pair is either favorited or not; toggling flips it once.
Concurrent toggles on the same pair are last-write-wins; the unique
constraint on the favorites table keeps duplicate rows out.
"""

import logging
from typing import List, Optional

from pantrychef.errors import RecipeNotFound
from pantrychef.normalizer import from_storage_record, restore_rows
from pantrychef.repository import RecipeRepository
from pantrychef.schemas.recipe import RecipeResponse

logger = logging.getLogger(__name__)


class FavoriteReconciler:
    def __init__(self, repo: RecipeRepository):
        self.repo = repo

    def annotate(self, recipe: RecipeResponse, user_id: Optional[str] = None) -> RecipeResponse:
        """Set is_favorite for user_id; without a user it is always False."""
        recipe.is_favorite = bool(user_id) and self.repo.is_favorite(user_id, recipe.id)
        return recipe

    def annotate_all(self, recipes: List[RecipeResponse], user_id: Optional[str] = None) -> List[RecipeResponse]:
        return [self.annotate(r, user_id) for r in recipes]

    def toggle_favorite(self, recipe_id: str, user_id: str) -> RecipeResponse:
        row = self.repo.get(recipe_id)
        if row is None:
            raise RecipeNotFound(recipe_id)
        recipe = from_storage_record(row)

        if self.repo.is_favorite(user_id, recipe_id):
            self.repo.remove_favorite(user_id, recipe_id)
            recipe.is_favorite = False
        else:
            # a lost insert race still leaves the pair favorited
            self.repo.add_favorite(user_id, recipe_id)
            recipe.is_favorite = True
        logger.info("toggle_favorite: user_id=%s recipe_id=%s is_favorite=%s",
                    user_id, recipe_id, recipe.is_favorite)
        return recipe

    def list_favorites(self, user_id: str) -> List[RecipeResponse]:
        recipes = restore_rows(self.repo.favorite_recipes(user_id))
        for recipe in recipes:
            recipe.is_favorite = True
        return recipes
