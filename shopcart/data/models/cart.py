#shopcart/data/models/cart.py
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime
from sqlalchemy.orm import relationship

from shopcart.data.database import Base
from shopcart.domain.errors import InvalidStateError


class CartState(str, Enum):
    """
    ACTIVE - koszyk przyjmuje zmiany
    EMPTIED - koszyk zamieniony na zamowienie i wyczyszczony, dalej uzywalny
    """
    ACTIVE = "active"
    EMPTIED = "emptied"


CART_TRANSITIONS = {
    CartState.ACTIVE: {CartState.ACTIVE, CartState.EMPTIED},
    CartState.EMPTIED: {CartState.ACTIVE},
}


def _utcnow():
    return datetime.now(timezone.utc)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    #jeden wiersz koszyka na usera, reuzywany po kazdym zamowieniu
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    name = Column(String(100), nullable=False, default="Shopping Cart")
    status = Column(String(20), nullable=False, default=CartState.ACTIVE.value)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    user = relationship("UserModel", back_populates="cart")
    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
    orders = relationship("OrderModel", back_populates="cart")

    @property
    def state(self) -> CartState:
        return CartState(self.status)

    def next_state(self, target: CartState) -> CartState:
        """Validates a lifecycle transition and returns the target state."""
        if target not in CART_TRANSITIONS[self.state]:
            raise InvalidStateError(
                f"Cart {self.id} cannot move from {self.state.value} to {target.value}"
            )
        return target
