import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from pantrychef.ai_generation import RecipeGenerator
from pantrychef.database import get_db
from pantrychef.errors import CorruptRecipeRecord, EmptyInventory, RecipeGenerationError, RecipeNotFound
from pantrychef.routers.auth import get_current_user, get_optional_user
from pantrychef.routers.base import api_router
from pantrychef.schemas.recipe import ApiResponse
from pantrychef.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


def get_recipe_generator(request: Request) -> Optional[RecipeGenerator]:
    """The generator built once at startup (see api.py)."""
    return getattr(request.app.state, "recipe_generator", None)


def _dump(recipes):
    return [r.model_dump(by_alias=True) for r in recipes]


@api_router.post("/recipes/generate", response_model=ApiResponse)
async def generate_recipes(
    db: Session = Depends(get_db),
    generator: Optional[RecipeGenerator] = Depends(get_recipe_generator),
    current_user: dict = Depends(get_current_user)
):
    if generator is None:
        raise HTTPException(status_code=503, detail="Recipe generation is not configured. Please set OPENAI_API_KEY.")
    try:
        service = RecipeService(db, generator=generator)
        outcome = await service.generate_for_user(current_user["user_id"])
    except EmptyInventory as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RecipeGenerationError as e:
        logger.error("generate_recipes failed for user_id=%s: %s", current_user["user_id"], e.message)
        raise HTTPException(status_code=502, detail=e.message)

    message = "Recipes generated successfully."
    if outcome.dropped:
        message = f"Saved {len(outcome.recipes)} of {outcome.requested} generated recipes."
    return ApiResponse(status=True, message=message, data=outcome.to_response().model_dump(by_alias=True))


@api_router.get("/recipes", response_model=ApiResponse)
def list_recipes(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    service = RecipeService(db)
    recipes = service.list_recipes(current_user["user_id"])
    return ApiResponse(status=True, message="Recipes fetched successfully.", data=_dump(recipes))


@api_router.get("/recipes/favorites", response_model=ApiResponse)
def list_favorites(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    service = RecipeService(db)
    recipes = service.list_favorites(current_user["user_id"])
    return ApiResponse(status=True, message="Favorite recipes fetched successfully.", data=_dump(recipes))


@api_router.get("/recipes/{recipe_id}", response_model=ApiResponse)
def get_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[dict] = Depends(get_optional_user)
):
    user_id = current_user.get("user_id") if current_user else None
    try:
        service = RecipeService(db)
        recipe = service.get_recipe(recipe_id, user_id)
        return ApiResponse(status=True, message="Recipe fetched successfully.", data=recipe.model_dump(by_alias=True))
    except RecipeNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except CorruptRecipeRecord as e:
        logger.error("get_recipe: %s", e.message)
        raise HTTPException(status_code=500, detail="This recipe could not be read. Please try generating a new one.")


@api_router.put("/recipes/{recipe_id}/favorite", response_model=ApiResponse)
def toggle_favorite(recipe_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = RecipeService(db)
        recipe = service.toggle_favorite(recipe_id, current_user["user_id"])
    except RecipeNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except CorruptRecipeRecord as e:
        logger.error("toggle_favorite: %s", e.message)
        raise HTTPException(status_code=500, detail="This recipe could not be read. Please try generating a new one.")

    message = "Added to favorites." if recipe.is_favorite else "Removed from favorites."
    return ApiResponse(status=True, message=message, data=recipe.model_dump(by_alias=True))


@api_router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = RecipeService(db)
        service.delete_recipe(recipe_id, current_user["user_id"])
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except RecipeNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
