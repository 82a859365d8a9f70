#shopcart/api/routers/carts.py
from fastapi import APIRouter, Depends

from shopcart.api.deps import get_cart_service, get_current_user_id, get_directory_service
from shopcart.domain.schemas import CartEnvelope, CartItemIn, CartsOut, MessageOut
from shopcart.services.cart_service import CartService
from shopcart.services.directory_service import DirectoryService

router = APIRouter(prefix="/carts", tags=["carts"])


@router.post("/items", response_model=MessageOut)
def add_item(
    payload: CartItemIn,
    user_id: int = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    svc.add_item(user_id=user_id, item_id=payload.item_id, quantity=payload.quantity)
    return {"message": "Item added to cart successfully"}


@router.delete("/items/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    svc.remove_item(user_id=user_id, item_id=item_id)
    return {"message": "Item removed from cart successfully"}


@router.get("", response_model=CartEnvelope)
def get_cart(
    user_id: int = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    return {"cart": svc.get_active_cart(user_id)}


@router.get("/all", response_model=CartsOut)
def list_carts(
    _: int = Depends(get_current_user_id),
    directory: DirectoryService = Depends(get_directory_service),
):
    return {"carts": directory.list_all_carts()}
