# shopcart/services/catalog.py
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Iterable, Protocol

from sqlalchemy.orm import Session

from shopcart.data.models.item import ItemModel
from shopcart.repos.item_repo import ItemRepo


@dataclass(frozen=True)
class CatalogItem:
    id: int
    name: str
    price: Decimal
    description: str = ""
    category: str = ""
    rating: float = 0.0
    reviews: int = 0
    image: str = ""
    in_stock: bool = True

    @classmethod
    def from_model(cls, item: ItemModel) -> "CatalogItem":
        return cls(
            id=item.id,
            name=item.name,
            price=Decimal(str(item.price)),
            description=item.description or "",
            category=item.category or "",
            rating=item.rating or 0.0,
            reviews=item.reviews or 0,
            image=item.image or "",
            in_stock=bool(item.in_stock),
        )

    @classmethod
    def from_payload(cls, data: dict) -> "CatalogItem":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            description=data.get("description") or "",
            category=data.get("category") or "",
            rating=float(data.get("rating") or 0.0),
            reviews=int(data.get("reviews") or 0),
            image=data.get("image") or "",
            in_stock=bool(data.get("in_stock", True)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


class CatalogGateway(Protocol):
    """Read-only source of item existence, price and display data."""

    def get_item(self, item_id: int) -> CatalogItem | None:
        ...

    def describe_items(self, item_ids: Iterable[int]) -> dict[int, CatalogItem]:
        ...


class SqlCatalog:
    """Catalog backed by the local `items` table."""

    def __init__(self, db: Session):
        self.repo = ItemRepo(db)

    def get_item(self, item_id: int) -> CatalogItem | None:
        item = self.repo.get_item(item_id)
        return CatalogItem.from_model(item) if item else None

    def describe_items(self, item_ids: Iterable[int]) -> dict[int, CatalogItem]:
        #razem z usunietymi, historia zamowien dalej ma nazwy produktow
        items = self.repo.get_items(sorted(set(item_ids)))
        return {i.id: CatalogItem.from_model(i) for i in items}
