# shopcart/services/order_service.py
from contextlib import nullcontext
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.cart import CartState
from shopcart.data.models.order import OrderModel, OrderStatus
from shopcart.domain.errors import (
    ConflictError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ServiceError,
)
from shopcart.domain.schemas import UserRead
from shopcart.repos.cart_repo import CartRepo
from shopcart.repos.order_repo import OrderRepo
from shopcart.services.cart_service import build_cart_view, lines_total
from shopcart.services.catalog import CatalogGateway
from shopcart.services.lock_service import LockService
from shopcart.services.notification_service import NotificationService
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie to niezmienny snapshot koszyka, koszyk po konwersji jest pusty.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogGateway,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.catalog = catalog
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def convert(self, user_id: int) -> Dict[str, Any]:
        """
        Use Case: zamowienie z aktywnego koszyka.

        1. Sumuje price * quantity z zapisanych cen linii
        2. Tworzy zamowienie (pending)
        3. Usuwa wszystkie linie, koszyk przechodzi w EMPTIED
        Kroki 1-3 w jednej transakcji, blad = rollback wszystkiego.
        4. Wysyla powiadomienie (po commicie)
        """
        lock = self.lock_service.user_lock(user_id) if self.lock_service else nullcontext()

        with lock:
            try:
                cart = self.cart_repo.get_cart_by_user(user_id, for_update=True)
                if not cart:
                    raise NotFoundError("Cart not found")

                lines = self.cart_repo.get_cart_items(cart.id)
                if not lines:
                    raise InvalidStateError("Cart is empty")

                old_version = cart.version
                target = cart.next_state(CartState.EMPTIED)
                total = lines_total(lines)

                order = self.repo.add_order(
                    OrderModel(
                        cart_id=cart.id,
                        user_id=user_id,
                        status=OrderStatus.PENDING.value,
                        total=total,
                    )
                )

                self.cart_repo.clear_cart_items(cart.id)

                rowcount = self.cart_repo.update_cart_version(
                    cart_id=cart.id,
                    old_version=old_version,
                    new_data={"version": old_version + 1, "status": target.value},
                )
                if rowcount == 0:
                    raise ConflictError("Cart was modified by another request, retry")

                order_id = order.id
                cart_id = cart.id
                self.db.commit()

            except ServiceError:
                self.db.rollback()
                raise
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to create order for user {user_id}: {e}")
                raise InternalError("Failed to create order") from e

        logger.info(f"Order {order_id} created from cart {cart_id}, total {total}")

        self.notification_service.send_order_notification(user_id, order_id, total)

        return {"order_id": order_id, "cart_id": cart_id, "total": total}

    def _order_views(self, orders: List[OrderModel]) -> List[Dict[str, Any]]:
        catalog_items = self.catalog.describe_items(
            line.item_id for o in orders if o.cart for line in o.cart.items
        )

        views = []
        for o in orders:
            views.append({
                "id": o.id,
                "cart_id": o.cart_id,
                "user_id": o.user_id,
                "status": o.status,
                "total": Decimal(str(o.total)),
                "created_at": o.created_at,
                #koszyk w obecnym stanie, po konwersji zwykle pusty
                "cart": build_cart_view(o.cart, list(o.cart.items), catalog_items) if o.cart else None,
                "user": UserRead.model_validate(o.user) if o.user else None,
            })
        return views

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return self._order_views(self.repo.list_orders(user_id=user_id))

    def list_all_orders(self) -> List[Dict[str, Any]]:
        return self._order_views(self.repo.list_orders())
