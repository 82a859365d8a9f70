# shopcart/api/__init__.py
from fastapi import APIRouter

from shopcart.api.routers import carts, health, items, orders, users

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(users.router)
api_router.include_router(items.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
