# shopcart/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from shopcart.data.models.cart import CartModel
from shopcart.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #bez commita, commit robi serwis razem z czyszczeniem koszyka
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: int | None = None) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .options(
                selectinload(OrderModel.user),
                selectinload(OrderModel.cart).selectinload(CartModel.items),
            )
            .order_by(OrderModel.id)
        )
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        return list(self.db.execute(stmt).scalars())
