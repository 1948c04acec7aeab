import math
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr, constr
from pydantic.alias_generators import to_camel

from pantrychef.models import quantity_to_text


def _whole_number(v: Any) -> int:
    """Accept ints and floats (rounded); reject booleans, strings and the rest."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError("must be a number")
    if isinstance(v, float):
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return int(round(v))
    return v


def _blank_if_none(v: Any) -> Any:
    return "" if v is None else v


NonEmptyStr = constr(strip_whitespace=True, min_length=1)
WholeNumber = Annotated[int, BeforeValidator(_whole_number)]
QuantityStr = Annotated[str, BeforeValidator(quantity_to_text)]
UnitStr = Annotated[str, BeforeValidator(_blank_if_none)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel):
    """Generic API response wrapper."""
    status: bool = Field(..., description="Response status: True on success, False on error")
    message: Optional[str] = Field(None, description="Optional message")
    data: Optional[Any] = Field(None, description="Response data (only present on success)")


class RecipeIngredient(CamelModel):
    name: StrictStr
    quantity: QuantityStr
    unit: UnitStr = ""
    in_inventory: StrictBool = False


class RecipeInstruction(CamelModel):
    step: Annotated[WholeNumber, Field(ge=1)]
    instruction: NonEmptyStr


class GeneratedRecipe(CamelModel):
    """One validated recipe suggestion, as produced by a generation round."""
    title: NonEmptyStr
    description: NonEmptyStr
    cook_time: WholeNumber = Field(..., description="Cooking time in minutes")
    difficulty: NonEmptyStr
    servings: WholeNumber
    ingredients: List[RecipeIngredient]
    instructions: List[RecipeInstruction]
    matched_ingredients: WholeNumber
    total_ingredients: WholeNumber
    tags: List[str]


class RecipeResponse(GeneratedRecipe):
    """A stored recipe as returned to callers; is_favorite is computed per request."""
    id: str
    created_by: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None
    is_favorite: bool = False


class GenerationResponse(CamelModel):
    recipes: List[RecipeResponse]
    requested: int
    dropped: int
