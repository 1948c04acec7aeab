"""
Repository interfaces for PantryChef.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class RecipeRepository(ABC):
    @abstractmethod
    def create_recipe(self, record: dict, created_by: str) -> Any:
        """Persist one normalized recipe record and return the stored row."""

    @abstractmethod
    def get(self, recipe_id: str) -> Optional[Any]:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Any]:
        pass

    @abstractmethod
    def delete(self, recipe_id: str, user_id: str) -> bool:
        """Delete a recipe owned by user_id, with its favorites. False if nothing matched."""

    @abstractmethod
    def is_favorite(self, user_id: str, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def add_favorite(self, user_id: str, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def remove_favorite(self, user_id: str, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def favorite_recipes(self, user_id: str) -> List[Any]:
        pass


class InventoryRepository(ABC):
    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Any]:
        pass

    @abstractmethod
    def get(self, item_id: str, user_id: str) -> Optional[Any]:
        pass

    @abstractmethod
    def create(self, user_id: str, name: str, quantity: str, unit: str) -> Any:
        pass

    @abstractmethod
    def update(self, item_id: str, user_id: str, name: str, quantity: str, unit: str) -> Optional[Any]:
        pass

    @abstractmethod
    def delete(self, item_id: str, user_id: str) -> bool:
        pass
