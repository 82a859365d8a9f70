# shopcart/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from shopcart.data.database import SessionLocal
from shopcart.data.models import ItemModel
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_ITEMS = [
    {
        "name": "Premium Wireless Headphones",
        "description": "High-quality wireless headphones with active noise cancellation and 30-hour battery life",
        "price": Decimal("299.99"),
        "category": "Electronics",
        "rating": 4.8,
        "reviews": 1247,
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400&h=300&fit=crop",
    },
    {
        "name": "Smart Fitness Watch",
        "description": "Advanced fitness tracking with heart rate monitoring, GPS, and 7-day battery life",
        "price": Decimal("199.99"),
        "category": "Electronics",
        "rating": 4.6,
        "reviews": 892,
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400&h=300&fit=crop",
    },
    {
        "name": "Ergonomic Office Chair",
        "description": "Premium ergonomic office chair with adjustable lumbar support and memory foam cushion",
        "price": Decimal("449.99"),
        "category": "Furniture",
        "rating": 4.7,
        "reviews": 456,
        "image": "https://images.unsplash.com/photo-1567538096630-e0c55bd6374c?w=400&h=300&fit=crop",
    },
    {
        "name": "Organic Coffee Beans",
        "description": "Premium organic coffee beans from sustainable farms in Colombia",
        "price": Decimal("24.99"),
        "category": "Food & Beverages",
        "rating": 4.9,
        "reviews": 2341,
        "image": "https://images.unsplash.com/photo-1559056199-641a0ac8b55e?w=400&h=300&fit=crop",
    },
    {
        "name": "Professional Camera Lens",
        "description": "85mm f/1.4 portrait lens with beautiful bokeh and exceptional sharpness",
        "price": Decimal("899.99"),
        "category": "Electronics",
        "rating": 4.9,
        "reviews": 567,
        "image": "https://images.unsplash.com/photo-1516035069371-29a1b244cc32?w=400&h=300&fit=crop",
    },
]


def seed_catalog(db: Session) -> int:
    # not forcing: only seed if empty
    if db.query(ItemModel).first():
        return 0

    for data in DEMO_ITEMS:
        db.add(ItemModel(in_stock=True, **data))
    db.commit()

    logger.info(f"Catalog seeded with {len(DEMO_ITEMS)} items")
    return len(DEMO_ITEMS)


def seed():
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()
