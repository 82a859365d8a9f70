from sqlalchemy import Column, Integer, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from shopcart.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    #id z katalogu (lokalnego albo zdalnego), bez FK do items
    item_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    #cena z momentu pierwszego dodania, nie odswiezana przy merge
    price = Column(Numeric(10, 2), nullable=False)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "item_id", name="u_cart_item"),)
