# shopcart/api/routers/items.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopcart.api.deps import get_current_user_id
from shopcart.data.database import get_db
from shopcart.domain.schemas import ItemCreate, ItemCreatedOut, ItemOut, ItemsOut, MessageOut
from shopcart.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["items"])


def get_service(db: Session = Depends(get_db)) -> ItemService:
    return ItemService(db)


@router.get("", response_model=ItemsOut)
def list_items(svc: ItemService = Depends(get_service)):
    return {"items": svc.list_items()}


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, svc: ItemService = Depends(get_service)):
    return svc.get_item(item_id)


@router.post("", response_model=ItemCreatedOut, status_code=201)
def create_item(
    payload: ItemCreate,
    _: int = Depends(get_current_user_id),
    svc: ItemService = Depends(get_service),
):
    return {"message": "Item created successfully", "item": svc.create_item(payload)}


@router.delete("/{item_id}", response_model=MessageOut)
def delete_item(
    item_id: int,
    _: int = Depends(get_current_user_id),
    svc: ItemService = Depends(get_service),
):
    svc.delete_item(item_id)
    return {"message": "Item deleted successfully"}
