"""
SQLAlchemy-backed repositories for PantryChef (PostgreSQL in production).
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pantrychef.database import Favorite, InventoryItem, Recipe as DBRecipe
from pantrychef.repository import InventoryRepository, RecipeRepository
from pantrychef.utils_time import utc_now

logger = logging.getLogger(__name__)


class PostgresRecipeRepository(RecipeRepository):
    def __init__(self, db: Session):
        self.db = db

    def create_recipe(self, record: dict, created_by: str) -> DBRecipe:
        db_recipe = DBRecipe(
            recipe_id=str(uuid.uuid4()),
            created_by=created_by,
            created_at=utc_now(),
            image_url=None,
            **record
        )
        self.db.add(db_recipe)
        try:
            self.db.flush()
            # detached with every column loaded, so reading it back cannot fail after the commit
            self.db.expunge(db_recipe)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("create_recipe: recipe_id=%s title=%s", db_recipe.recipe_id, db_recipe.title)
        return db_recipe

    def get(self, recipe_id: str) -> Optional[DBRecipe]:
        return self.db.query(DBRecipe).filter(DBRecipe.recipe_id == recipe_id).first()

    def list_for_user(self, user_id: str) -> List[DBRecipe]:
        return (
            self.db.query(DBRecipe)
            .filter(DBRecipe.created_by == user_id)
            .order_by(DBRecipe.created_at.desc())
            .all()
        )

    def delete(self, recipe_id: str, user_id: str) -> bool:
        db_recipe = self.db.query(DBRecipe).filter(
            DBRecipe.recipe_id == recipe_id,
            DBRecipe.created_by == user_id
        ).first()
        if not db_recipe:
            return False
        # favorites go with it via the relationship cascade
        self.db.delete(db_recipe)
        self.db.commit()
        return True

    def is_favorite(self, user_id: str, recipe_id: str) -> bool:
        return self.db.query(Favorite.favorite_id).filter(
            Favorite.user_id == user_id,
            Favorite.recipe_id == recipe_id
        ).first() is not None

    def add_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Insert the favorite row. False if a concurrent request already inserted it."""
        self.db.add(Favorite(user_id=user_id, recipe_id=recipe_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("add_favorite: user_id=%s recipe_id=%s already favorited", user_id, recipe_id)
            return False
        return True

    def remove_favorite(self, user_id: str, recipe_id: str) -> bool:
        deleted = self.db.query(Favorite).filter(
            Favorite.user_id == user_id,
            Favorite.recipe_id == recipe_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def favorite_recipes(self, user_id: str) -> List[DBRecipe]:
        return (
            self.db.query(DBRecipe)
            .join(Favorite, Favorite.recipe_id == DBRecipe.recipe_id)
            .filter(Favorite.user_id == user_id)
            .all()
        )


class PostgresInventoryRepository(InventoryRepository):
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> List[InventoryItem]:
        return (
            self.db.query(InventoryItem)
            .filter(InventoryItem.user_id == user_id)
            .order_by(InventoryItem.created_at, InventoryItem.item_id)
            .all()
        )

    def get(self, item_id: str, user_id: str) -> Optional[InventoryItem]:
        return self.db.query(InventoryItem).filter(
            InventoryItem.item_id == item_id,
            InventoryItem.user_id == user_id
        ).first()

    def create(self, user_id: str, name: str, quantity: str, unit: str) -> InventoryItem:
        item = InventoryItem(
            item_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            quantity=quantity,
            unit=unit,
            created_at=utc_now()
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, item_id: str, user_id: str, name: str, quantity: str, unit: str) -> Optional[InventoryItem]:
        item = self.get(item_id, user_id)
        if not item:
            return None
        item.name = name
        item.quantity = quantity
        item.unit = unit
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item_id: str, user_id: str) -> bool:
        item = self.get(item_id, user_id)
        if not item:
            return False
        self.db.delete(item)
        self.db.commit()
        return True
