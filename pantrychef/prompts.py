"""
Prompt text for recipe generation.
"""

from typing import Iterable

from pantrychef.models import InventoryEntry

SUGGESTION_COUNT = 3

OUTPUT_SHAPE_EXAMPLE = """{
  "recipes": [
    {
      "title": "Recipe Title",
      "description": "Brief description",
      "cookTime": 30,
      "difficulty": "Easy",
      "servings": 4,
      "ingredients": [
        {
          "name": "ingredient name",
          "quantity": "amount as string",
          "unit": "unit of measurement or empty string if not applicable",
          "inInventory": true
        }
      ],
      "instructions": [
        {
          "step": 1,
          "instruction": "First step instruction"
        }
      ],
      "matchedIngredients": 5,
      "totalIngredients": 8,
      "tags": ["Quick", "Easy"]
    }
  ]
}"""


def format_inventory(entries: Iterable[InventoryEntry]) -> str:
    return "\n".join(entry.as_prompt_line() for entry in entries)


def build_recipe_prompt(entries: Iterable[InventoryEntry]) -> str:
    """
    Build the generation prompt for a user's inventory.

    Same entries in the same order always give the same text.
    """
    formatted_items = format_inventory(entries)
    return f"""You are a professional chef specializing in creating recipes based on available ingredients.

I have the following ingredients in my kitchen inventory:
{formatted_items}

Please suggest {SUGGESTION_COUNT} different recipes I can make with these ingredients. Some ingredients might be missing, but try to maximize the use of what I have.

For each recipe, provide:
1. A title
2. A brief description
3. Cooking time in minutes
4. Difficulty level (Easy, Medium, Hard)
5. Number of servings
6. A list of all ingredients needed with quantities and units, and whether I have them in my inventory
7. Step-by-step instructions
8. Number of ingredients from my inventory used
9. Total number of ingredients needed
10. Relevant tags (like "Quick", "Vegetarian", "Low Carb", etc.)

IMPORTANT: Format your response as a JSON object with a "recipes" array containing recipe objects with the following structure:

{OUTPUT_SHAPE_EXAMPLE}

IMPORTANT: Always provide a "unit" property for each ingredient, using "" (empty string) if no unit is needed.
"""
