# shopcart/services/directory_service.py
from typing import Any, Dict, List

from shopcart.domain.schemas import UserRead
from shopcart.services.cart_service import CartService
from shopcart.services.order_service import OrderService
from shopcart.services.user_service import UserService


class DirectoryService:
    """
    Widoki administracyjne, tylko odczyt.
    Nie filtruje po wlascicielu, dostep ma kazdy zalogowany.
    """

    def __init__(self, users: UserService, carts: CartService, orders: OrderService):
        self.users = users
        self.carts = carts
        self.orders = orders

    def list_users(self) -> List[UserRead]:
        return self.users.list_users()

    def list_all_carts(self) -> List[Dict[str, Any]]:
        return self.carts.list_all_carts()

    def list_all_orders(self) -> List[Dict[str, Any]]:
        return self.orders.list_all_orders()
