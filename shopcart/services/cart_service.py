from contextlib import contextmanager, nullcontext
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.cart import CartModel, CartState
from shopcart.data.models.cart_item import CartItemModel
from shopcart.domain.errors import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    ServiceError,
)
from shopcart.domain.schemas import MAX_QUANTITY, UserRead
from shopcart.repos.cart_repo import CartRepo
from shopcart.services.catalog import CatalogGateway, CatalogItem
from shopcart.services.lock_service import LockService
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


def lines_total(lines: Iterable[CartItemModel]) -> Decimal:
    return sum((Decimal(str(i.price)) * i.quantity for i in lines), Decimal("0.00"))


def build_cart_view(
    cart: CartModel,
    lines: List[CartItemModel],
    catalog_items: Dict[int, CatalogItem],
) -> Dict[str, Any]:
    """Cart with its lines expanded by catalog display data."""
    return {
        "id": cart.id,
        "user_id": cart.user_id,
        "name": cart.name,
        "status": cart.status,
        "items": [
            {
                "id": i.id,
                "item_id": i.item_id,
                "quantity": i.quantity,
                "price": i.price,
                "item": catalog_items[i.item_id].to_dict() if i.item_id in catalog_items else None,
            }
            for i in lines
        ],
        "total": lines_total(lines),
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }


class CartService:
    """
    Use case'y koszyka:
    commands (add_item, remove_item) modyfikuja stan
    query (get_active_cart, list_all_carts) tylko odczyt
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogGateway,
        lock_service: LockService | None = None,
    ):
        self.repo = CartRepo(db)
        self.catalog = catalog
        self.lock_service = lock_service

    def _user_lock(self, user_id: int):
        if self.lock_service is None:
            return nullcontext()
        return self.lock_service.user_lock(user_id)

    @contextmanager
    def _transaction(self, action: str):
        try:
            yield
            self.repo.commit()
        except ServiceError:
            self.repo.rollback()
            raise
        except (SQLAlchemyError, OverflowError) as e:
            #OverflowError - driver nie zmiesci liczby w INTEGER
            self.repo.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise InternalError(f"Failed to {action}") from e

    #query - odczyt
    def get_active_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")

        lines = self.repo.get_cart_items(cart.id)
        catalog_items = self.catalog.describe_items(i.item_id for i in lines)
        return build_cart_view(cart, lines, catalog_items)

    def list_all_carts(self) -> List[Dict[str, Any]]:
        carts = self.repo.list_carts()
        catalog_items = self.catalog.describe_items(
            line.item_id for cart in carts for line in cart.items
        )

        views = []
        for cart in carts:
            view = build_cart_view(cart, list(cart.items), catalog_items)
            view["user"] = UserRead.model_validate(cart.user) if cart.user else None
            views.append(view)
        return views

    #commands
    def add_item(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity < 1:
            raise InvalidArgumentError("Quantity must be at least 1")
        if quantity > MAX_QUANTITY:
            raise InvalidArgumentError(f"Quantity must be at most {MAX_QUANTITY}")

        #najpierw katalog, nieznany produkt nie tworzy ani koszyka ani linii
        product = self.catalog.get_item(item_id)
        if not product:
            raise NotFoundError("Item not found")

        with self._user_lock(user_id), self._transaction("add item to cart"):
            cart, created = self.repo.get_or_create_cart(user_id)
            if created:
                logger.info(f"Created cart {cart.id} for user {user_id}")

            old_version = cart.version
            target = cart.next_state(CartState.ACTIVE)

            existing = self.repo.get_cart_item(cart.id, item_id)
            if existing:
                if existing.quantity + quantity > MAX_QUANTITY:
                    raise InvalidArgumentError(f"Quantity must be at most {MAX_QUANTITY}")
                #merge - cena zostaje z pierwszego dodania
                logger.info(
                    f"Item {item_id} already in cart {cart.id}, quantity "
                    f"{existing.quantity} -> {existing.quantity + quantity}"
                )
                if self.repo.increment_quantity(cart.id, item_id, quantity) == 0:
                    #linia usunieta rownolegle miedzy odczytem a UPDATE
                    raise ConflictError("Cart was modified by another request, retry")
            else:
                inserted = self.repo.insert_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        item_id=item_id,
                        quantity=quantity,
                        price=product.price,
                    )
                )
                if inserted:
                    logger.info(f"Added item {item_id} to cart {cart.id} at {product.price}")
                else:
                    #ktos wstawil ta sama linie rownolegle
                    if self.repo.increment_quantity(cart.id, item_id, quantity) == 0:
                        logger.error(f"Line for item {item_id} in cart {cart.id} was neither inserted nor found")
                        raise InternalError("Failed to add item to cart")

            # Optimistic locking
            rowcount = self.repo.update_cart_version(
                cart_id=cart.id,
                old_version=old_version,
                new_data={"version": old_version + 1, "status": target.value},
            )
            if rowcount == 0:
                raise ConflictError("Cart was modified by another request, retry")

        logger.info(f"Cart {cart.id} updated, version {old_version + 1}")
        return self.get_active_cart(user_id)

    def remove_item(self, user_id: int, item_id: int) -> None:
        with self._user_lock(user_id), self._transaction("remove item from cart"):
            cart = self.repo.get_cart_by_user(user_id, for_update=True)
            if not cart:
                raise NotFoundError("Cart not found")

            old_version = cart.version
            removed = self.repo.delete_cart_item(cart.id, item_id)

            #brak linii to nie blad, nic nie zmieniamy
            if not removed:
                logger.info(f"Item {item_id} not in cart {cart.id}, nothing to remove")
                return

            rowcount = self.repo.update_cart_version(
                cart_id=cart.id,
                old_version=old_version,
                new_data={"version": old_version + 1},
            )
            if rowcount == 0:
                raise ConflictError("Cart was modified by another request, retry")

            logger.info(f"Removed item {item_id} from cart {cart.id}")
