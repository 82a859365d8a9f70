# shopcart/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from shopcart.data.models.cart import CartModel, CartState
from shopcart.data.models.cart_item import CartItemModel
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_user(self, user_id: int, for_update: bool = False) -> CartModel | None:
        stmt = select(CartModel).where(CartModel.user_id == user_id)
        if for_update:
            #row lock na postgresie, na sqlite ignorowane
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def get_or_create_cart(self, user_id: int) -> tuple[CartModel, bool]:
        """
        Atomowy get-or-create: insert w SAVEPOINT, unique na carts.user_id.
        Przy wyscigu przegrany insert dostaje IntegrityError i czyta koszyk zwyciezcy.
        """
        existing = self.get_cart_by_user(user_id, for_update=True)
        if existing:
            return existing, False

        cart = CartModel(user_id=user_id, status=CartState.ACTIVE.value, version=1)
        try:
            with self.db.begin_nested():
                self.db.add(cart)
        except IntegrityError:
            logger.info(f"Concurrent cart creation for user {user_id}, reusing existing cart")
            return self.get_cart_by_user(user_id, for_update=True), False

        return cart, True

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def insert_cart_item(self, line: CartItemModel) -> bool:
        """Returns False when a concurrent request already inserted the same (cart, item)."""
        try:
            with self.db.begin_nested():
                self.db.add(line)
        except IntegrityError:
            return False
        return True

    def increment_quantity(self, cart_id: int, item_id: int, quantity: int) -> int:
        #quantity = quantity + x w jednym UPDATE, bez lost update
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_id == item_id,
            )
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_id == item_id,
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def clear_cart_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        # Optimistic locking: update set version = v+1 where id = :id and version = :v
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def list_carts(self) -> list[CartModel]:
        return list(
            self.db.execute(
                select(CartModel)
                .options(selectinload(CartModel.user), selectinload(CartModel.items))
                .order_by(CartModel.id)
            ).scalars()
        )

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
