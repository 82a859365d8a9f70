# shopcart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class SignupIn(BaseModel):
    """Rejestracja uzytkownika."""

    username: str = Field(..., min_length=1, max_length=100, description="Unikalny login")
    password: str = Field(..., min_length=1, max_length=256, description="Haslo (nie jest nigdzie zwracane)")


class LoginIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=256)


class SignupOut(BaseModel):
    message: str
    user_id: int


class LoginOut(BaseModel):
    message: str
    token: str
    user_id: int


class UserRead(BaseModel):
    """Uzytkownik bez hasla i tokenu."""

    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UsersOut(BaseModel):
    users: List[UserRead]


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = ""
    rating: float = Field(0.0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    image: str = ""
    in_stock: bool = True


class ItemOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    category: str
    rating: float
    reviews: int
    image: str
    in_stock: bool

    model_config = ConfigDict(from_attributes=True)


class ItemsOut(BaseModel):
    items: List[ItemOut]


class ItemCreatedOut(BaseModel):
    message: str
    item: ItemOut


MAX_QUANTITY = 2**31 - 1


class CartItemIn(BaseModel):
    """Dodanie produktu do koszyka."""

    item_id: int = Field(..., gt=0, le=MAX_QUANTITY, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, description="Ilosc produktu (co najmniej 1)")


class CartLineOut(BaseModel):
    id: int
    item_id: int
    quantity: int
    price: Decimal
    item: ItemOut | None = None


class CartOut(BaseModel):
    id: int
    user_id: int
    name: str
    status: str
    items: List[CartLineOut]
    total: Decimal
    created_at: datetime
    updated_at: datetime


class CartEnvelope(BaseModel):
    cart: CartOut


class AdminCartOut(CartOut):
    user: UserRead | None = None


class CartsOut(BaseModel):
    carts: List[AdminCartOut]


class OrderCreatedOut(BaseModel):
    message: str
    order_id: int
    total: Decimal


class OrderOut(BaseModel):
    id: int
    cart_id: int
    user_id: int
    status: str
    total: Decimal
    created_at: datetime
    cart: CartOut | None = None


class AdminOrderOut(OrderOut):
    user: UserRead | None = None


class OrdersOut(BaseModel):
    orders: List[AdminOrderOut]


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
    message: str
