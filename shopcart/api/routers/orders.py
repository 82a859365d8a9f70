# shopcart/api/routers/orders.py
from fastapi import APIRouter, Depends

from shopcart.api.deps import get_current_user_id, get_directory_service, get_order_service
from shopcart.domain.schemas import OrderCreatedOut, OrdersOut
from shopcart.services.directory_service import DirectoryService
from shopcart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreatedOut, status_code=201)
def create_order(
    user_id: int = Depends(get_current_user_id),
    svc: OrderService = Depends(get_order_service),
):
    """
    Tworzy zamowienie z aktywnego koszyka i czysci koszyk.
    Wysyla powiadomienie asynchronicznie.
    """
    result = svc.convert(user_id)
    return {
        "message": "Order created successfully",
        "order_id": result["order_id"],
        "total": result["total"],
    }


@router.get("", response_model=OrdersOut)
def list_orders(
    user_id: int = Depends(get_current_user_id),
    svc: OrderService = Depends(get_order_service),
):
    return {"orders": svc.list_orders(user_id)}


@router.get("/all", response_model=OrdersOut)
def list_all_orders(
    _: int = Depends(get_current_user_id),
    directory: DirectoryService = Depends(get_directory_service),
):
    return {"orders": directory.list_all_orders()}
