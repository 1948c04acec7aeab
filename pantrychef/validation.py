"""
Structural contract for generated recipes.

The generator sometimes answers with a bare array and sometimes wraps it as
{"recipes": [...]}; both are accepted and normalized to a list. One bad
recipe rejects the whole batch.
"""

from typing import Any, List, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from pantrychef.errors import SchemaValidationError
from pantrychef.schemas.recipe import GeneratedRecipe

_recipe_list = TypeAdapter(List[GeneratedRecipe])


def format_field_path(loc: Sequence[Union[str, int]], root: str = "recipes") -> str:
    """(0, 'ingredients', 2, 'unit') -> 'recipes[0].ingredients[2].unit'"""
    path = root
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}"
    return path


def unwrap_recipe_array(payload: Any) -> list:
    if isinstance(payload, dict):
        if "recipes" not in payload:
            raise SchemaValidationError(
                "recipes", "expected an array of recipes or an object with a 'recipes' array"
            )
        payload = payload["recipes"]
    if not isinstance(payload, list):
        raise SchemaValidationError("recipes", "expected an array of recipes")
    return payload


def validate_recipes(payload: Any) -> List[GeneratedRecipe]:
    """Validate a parsed JSON payload into GeneratedRecipe objects or raise SchemaValidationError."""
    recipes = unwrap_recipe_array(payload)
    try:
        return _recipe_list.validate_python(recipes)
    except ValidationError as e:
        first = e.errors()[0]
        raise SchemaValidationError(format_field_path(first["loc"]), first["msg"]) from e
