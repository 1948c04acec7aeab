"""
Exception taxonomy for PantryChef.

Every exception carries a message that can be shown to the user as-is.
"""


class PantryChefError(Exception):
    """Base class for all PantryChef errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecipeGenerationError(PantryChefError):
    """A generation request failed; nothing from the batch is usable."""


class EmptyGenerationResult(RecipeGenerationError):
    def __init__(self):
        super().__init__("The recipe generator returned an empty response.")


class MalformedGenerationPayload(RecipeGenerationError):
    def __init__(self, detail: str):
        super().__init__(f"The recipe generator returned invalid JSON: {detail}")
        self.detail = detail


class SchemaValidationError(RecipeGenerationError):
    """The payload parsed but a recipe does not match the expected shape."""

    def __init__(self, field_path: str, reason: str):
        super().__init__(f"Generated recipes failed validation at '{field_path}': {reason}")
        self.field_path = field_path
        self.reason = reason


class GenerationUnavailable(RecipeGenerationError):
    def __init__(self, detail: str):
        super().__init__(f"The recipe generator could not be reached: {detail}")
        self.detail = detail


class CorruptRecipeRecord(PantryChefError):
    def __init__(self, recipe_id, detail: str):
        super().__init__(f"Stored recipe {recipe_id} could not be read: {detail}")
        self.recipe_id = recipe_id
        self.detail = detail


class RecipeNotFound(PantryChefError, LookupError):
    def __init__(self, recipe_id):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class InventoryItemNotFound(PantryChefError, LookupError):
    def __init__(self, item_id):
        super().__init__(f"Inventory item not found: {item_id}")
        self.item_id = item_id


class EmptyInventory(PantryChefError):
    def __init__(self):
        super().__init__("No inventory items found. Please add some ingredients first.")
