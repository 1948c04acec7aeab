"""
Conversion between validated recipes and their storage representation.

Ingredients and instructions are stored as JSON text (camelCase keys, list
order preserved); every other field is passed through unchanged.
"""

import json
import logging
from typing import List

from pydantic import TypeAdapter

from pantrychef.errors import CorruptRecipeRecord
from pantrychef.schemas.recipe import GeneratedRecipe, RecipeIngredient, RecipeInstruction, RecipeResponse
from pantrychef.utils_time import format_datetime

logger = logging.getLogger(__name__)

_ingredient_list = TypeAdapter(List[RecipeIngredient])
_instruction_list = TypeAdapter(List[RecipeInstruction])


def serialize_ingredients(ingredients: List[RecipeIngredient]) -> str:
    return json.dumps(_ingredient_list.dump_python(ingredients, by_alias=True), ensure_ascii=False)


def serialize_instructions(instructions: List[RecipeInstruction]) -> str:
    return json.dumps(_instruction_list.dump_python(instructions, by_alias=True), ensure_ascii=False)


def _load_json_list(text) -> list:
    if not isinstance(text, str):
        raise ValueError(f"expected JSON text, got {type(text).__name__}")
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("expected a JSON array")
    return data


def deserialize_ingredients(text: str) -> List[RecipeIngredient]:
    return _ingredient_list.validate_python(_load_json_list(text))


def deserialize_instructions(text: str) -> List[RecipeInstruction]:
    return _instruction_list.validate_python(_load_json_list(text))


def to_storage_record(recipe: GeneratedRecipe) -> dict:
    """Column values for a recipes row, minus id/owner/timestamps."""
    return {
        "title": recipe.title,
        "description": recipe.description,
        "cook_time": recipe.cook_time,
        "difficulty": recipe.difficulty,
        "servings": recipe.servings,
        "ingredients": serialize_ingredients(recipe.ingredients),
        "instructions": serialize_instructions(recipe.instructions),
        "matched_ingredients": recipe.matched_ingredients,
        "total_ingredients": recipe.total_ingredients,
        "tags": list(recipe.tags),
    }


def from_storage_record(row) -> RecipeResponse:
    """Rebuild a recipe from a stored row. Raises CorruptRecipeRecord if the JSON columns are unreadable."""
    try:
        return RecipeResponse(
            id=row.recipe_id,
            created_by=row.created_by,
            image_url=row.image_url,
            created_at=format_datetime(row.created_at),
            title=row.title,
            description=row.description,
            cook_time=row.cook_time,
            difficulty=row.difficulty,
            servings=row.servings,
            ingredients=deserialize_ingredients(row.ingredients),
            instructions=deserialize_instructions(row.instructions),
            matched_ingredients=row.matched_ingredients,
            total_ingredients=row.total_ingredients,
            tags=list(row.tags or []),
        )
    except ValueError as e:
        raise CorruptRecipeRecord(row.recipe_id, str(e)) from e


def restore_rows(rows) -> List[RecipeResponse]:
    """
    Restore a listing. A corrupt row is logged and left out so one bad record
    does not hide the rest; single-record reads raise instead.
    """
    recipes = []
    for row in rows:
        try:
            recipes.append(from_storage_record(row))
        except CorruptRecipeRecord as e:
            logger.error("Skipping corrupt recipe %s in listing: %s", e.recipe_id, e.detail)
    return recipes
