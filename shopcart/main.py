# shopcart/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopcart.api import api_router
from shopcart.data.database import init_db
from shopcart.data.seed import seed
from shopcart.domain.errors import ErrorKind, HTTP_STATUS, ServiceError
from shopcart.middleware import RequestLoggingMiddleware
from shopcart.utils.settings import (
    CORS_ORIGINS,
    DEFAULT_JWT_SECRET,
    JWT_SECRET,
    PORT,
    SEED_CATALOG,
)
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

ENDPOINTS = {
    "auth": {
        "POST /users": "Sign up a new user",
        "POST /users/login": "Login user",
        "GET /users": "List all users (protected)",
    },
    "items": {
        "GET /items": "List all items",
        "GET /items/{id}": "Get one item",
        "POST /items": "Create new item (protected)",
        "DELETE /items/{id}": "Delete item (protected)",
    },
    "cart": {
        "POST /carts/items": "Add item to cart (protected)",
        "DELETE /carts/items/{item_id}": "Remove item from cart (protected)",
        "GET /carts": "Get user's cart (protected)",
        "GET /carts/all": "List all carts (protected)",
    },
    "orders": {
        "POST /orders": "Create order from cart (protected)",
        "GET /orders": "List user's orders (protected)",
        "GET /orders/all": "List all orders (protected)",
    },
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if JWT_SECRET == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set, using the built-in development secret")

    init_db()
    if SEED_CATALOG:
        seed()
    yield


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind.value, "message": exc.message},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid input')}" if field else "Invalid request"
    return JSONResponse(
        status_code=HTTP_STATUS[ErrorKind.INVALID_ARGUMENT],
        content={"error": ErrorKind.INVALID_ARGUMENT.value, "message": message},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {type(exc).__name__}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=HTTP_STATUS[ErrorKind.INTERNAL],
        content={"error": ErrorKind.INTERNAL.value, "message": "Internal server error"},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shopping Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", tags=["root"])
    def root():
        return {
            "message": "Shopping Cart Backend Server is running!",
            "version": "1.0.0",
            "status": "active",
            "endpoints": ENDPOINTS,
        }

    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
