from fastapi import Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from pantrychef.database import get_db
from pantrychef.errors import InventoryItemNotFound
from pantrychef.routers.auth import get_current_user
from pantrychef.routers.base import api_router
from pantrychef.schemas.inventory import InventoryItemCreate
from pantrychef.schemas.recipe import ApiResponse
from pantrychef.services.inventory_service import InventoryService


@api_router.get("/inventory", response_model=ApiResponse)
def list_inventory(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    service = InventoryService(db)
    items = service.list_items(current_user["user_id"])
    return ApiResponse(status=True, message="Inventory fetched successfully.", data=items)


@api_router.get("/inventory/{item_id}", response_model=ApiResponse)
def get_inventory_item(item_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = InventoryService(db)
        item = service.get_item(item_id, current_user["user_id"])
        return ApiResponse(status=True, message="Inventory item fetched successfully.", data=item)
    except InventoryItemNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@api_router.post("/inventory", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
def create_inventory_item(
    request: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    service = InventoryService(db)
    item = service.create_item(request, current_user["user_id"])
    return ApiResponse(status=True, message="Inventory item added.", data=item)


@api_router.put("/inventory/{item_id}", response_model=ApiResponse)
def update_inventory_item(
    item_id: str,
    request: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    try:
        service = InventoryService(db)
        item = service.update_item(item_id, request, current_user["user_id"])
        return ApiResponse(status=True, message="Inventory item updated.", data=item)
    except InventoryItemNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@api_router.delete("/inventory/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(item_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = InventoryService(db)
        service.delete_item(item_id, current_user["user_id"])
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except InventoryItemNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
