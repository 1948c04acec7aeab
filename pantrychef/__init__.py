"""
PantryChef - kitchen inventory tracking with AI recipe suggestions.

This package provides:
- Per-user kitchen inventory
- Recipe suggestions generated from the inventory by an LLM
- Strict validation of generated recipes
- Recipe storage and per-user favorites
"""

from .models import InventoryEntry
from .prompts import build_recipe_prompt
from .validation import validate_recipes
from .ai_generation import RecipeGenerator
from .favorites import FavoriteReconciler

__version__ = '1.0.0'
__author__ = 'PantryChef Team'

__all__ = [
    'InventoryEntry',
    'build_recipe_prompt',
    'validate_recipes',
    'RecipeGenerator',
    'FavoriteReconciler',
]
