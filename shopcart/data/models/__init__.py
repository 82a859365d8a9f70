#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shopcart.data.models.user import UserModel
from shopcart.data.models.item import ItemModel
from shopcart.data.models.cart import CartModel, CartState
from shopcart.data.models.cart_item import CartItemModel
from shopcart.data.models.order import OrderModel, OrderStatus

__all__ = [
    "UserModel",
    "ItemModel",
    "CartModel",
    "CartState",
    "CartItemModel",
    "OrderModel",
    "OrderStatus",
]
