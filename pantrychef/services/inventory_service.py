from typing import List, Optional

from sqlalchemy.orm import Session

from pantrychef.errors import InventoryItemNotFound
from pantrychef.repository import InventoryRepository
from pantrychef.repository_postgres import PostgresInventoryRepository
from pantrychef.schemas.inventory import InventoryItemCreate, InventoryItemResponse
from pantrychef.utils_time import format_datetime


def _to_response(item) -> InventoryItemResponse:
    return InventoryItemResponse(
        id=item.item_id,
        name=item.name,
        quantity=item.quantity,
        unit=item.unit,
        created_at=format_datetime(item.created_at)
    )


class InventoryService:
    """Service for a user's kitchen inventory."""

    def __init__(self, db: Session, repo: Optional[InventoryRepository] = None):
        self.db = db
        self.repo = repo or PostgresInventoryRepository(db)

    def list_items(self, user_id: str) -> List[InventoryItemResponse]:
        return [_to_response(item) for item in self.repo.list_for_user(user_id)]

    def get_item(self, item_id: str, user_id: str) -> InventoryItemResponse:
        item = self.repo.get(item_id, user_id)
        if not item:
            raise InventoryItemNotFound(item_id)
        return _to_response(item)

    def create_item(self, request: InventoryItemCreate, user_id: str) -> InventoryItemResponse:
        item = self.repo.create(user_id, request.name, request.quantity, request.unit)
        return _to_response(item)

    def update_item(self, item_id: str, request: InventoryItemCreate, user_id: str) -> InventoryItemResponse:
        item = self.repo.update(item_id, user_id, request.name, request.quantity, request.unit)
        if not item:
            raise InventoryItemNotFound(item_id)
        return _to_response(item)

    def delete_item(self, item_id: str, user_id: str) -> None:
        if not self.repo.delete(item_id, user_id):
            raise InventoryItemNotFound(item_id)
