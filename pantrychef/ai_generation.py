"""
Recipe suggestions from an OpenAI chat model.

One request per call, no retries. Either the whole batch validates or the
call raises a RecipeGenerationError subclass.
"""

import json
import logging
from typing import List, Optional, Sequence

import openai
from openai import AsyncOpenAI

from pantrychef.config import GENERATION_TEMPERATURE, OPENAI_API_KEY, OPENAI_MODEL
from pantrychef.errors import EmptyGenerationResult, GenerationUnavailable, MalformedGenerationPayload
from pantrychef.models import InventoryEntry
from pantrychef.prompts import build_recipe_prompt
from pantrychef.schemas.recipe import GeneratedRecipe
from pantrychef.validation import validate_recipes

logger = logging.getLogger(__name__)


def create_openai_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    api_key = api_key or OPENAI_API_KEY
    if not api_key:
        raise ValueError("OpenAI API key not set in environment.")
    return AsyncOpenAI(api_key=api_key)


def extract_content(response) -> Optional[str]:
    """Pull the text payload out of a chat completion, or None if there is none."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


class RecipeGenerator:
    """Turns an inventory snapshot into validated recipe suggestions."""

    def __init__(self, client: AsyncOpenAI, model: str = OPENAI_MODEL,
                 temperature: float = GENERATION_TEMPERATURE):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def generate(self, inventory: Sequence[InventoryEntry]) -> List[GeneratedRecipe]:
        prompt = build_recipe_prompt(inventory)
        logger.debug("Requesting recipes from %s for %d inventory items", self.model, len(inventory))
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            raise GenerationUnavailable(str(e)) from e

        content = extract_content(response)
        if not content or not content.strip():
            raise EmptyGenerationResult()

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedGenerationPayload(str(e)) from e

        recipes = validate_recipes(payload)
        logger.info("Generated %d recipe suggestions", len(recipes))
        return recipes
