from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Float, Boolean, Text

from shopcart.data.database import Base


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, default="")
    rating = Column(Float, nullable=False, default=0.0)
    reviews = Column(Integer, nullable=False, default=0)
    image = Column(String(500), nullable=False, default="")
    in_stock = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    #soft delete, linie koszykow i zamowienia dalej wskazuja na item
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
