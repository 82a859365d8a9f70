# shopcart/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shopcart.data.database import get_db
from shopcart.services.cart_service import CartService
from shopcart.services.catalog import CatalogGateway, SqlCatalog
from shopcart.services.directory_service import DirectoryService
from shopcart.services.lock_service import LockService
from shopcart.services.order_service import OrderService
from shopcart.services.product_client import HttpCatalog
from shopcart.services.session_authority import SessionAuthority
from shopcart.services.user_service import UserService
from shopcart.utils.settings import CATALOG_URL, REDIS_URL

bearer = HTTPBearer(auto_error=False, description="Session token from POST /users/login")

_authority = SessionAuthority()
_lock_service = LockService() if REDIS_URL else None


def get_authority() -> SessionAuthority:
    return _authority


def get_lock_service() -> LockService | None:
    return _lock_service


def get_catalog(db: Session = Depends(get_db)) -> CatalogGateway:
    if CATALOG_URL:
        return HttpCatalog()
    return SqlCatalog(db)


def get_user_service(
    db: Session = Depends(get_db),
    authority: SessionAuthority = Depends(get_authority),
) -> UserService:
    return UserService(db, authority)


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: CatalogGateway = Depends(get_catalog),
    lock_service: LockService | None = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, catalog=catalog, lock_service=lock_service)


def get_order_service(
    db: Session = Depends(get_db),
    catalog: CatalogGateway = Depends(get_catalog),
    lock_service: LockService | None = Depends(get_lock_service),
) -> OrderService:
    return OrderService(db=db, catalog=catalog, lock_service=lock_service)


def get_directory_service(
    users: UserService = Depends(get_user_service),
    carts: CartService = Depends(get_cart_service),
    orders: OrderService = Depends(get_order_service),
) -> DirectoryService:
    return DirectoryService(users, carts, orders)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    users: UserService = Depends(get_user_service),
) -> int:
    token = credentials.credentials if credentials else None
    return users.authenticate(token)
