# shopcart/repos/item_repo.py
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopcart.data.models.item import ItemModel


class ItemRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int, include_deleted: bool = False) -> ItemModel | None:
        item = self.db.get(ItemModel, item_id)
        if item is None or (item.deleted_at is not None and not include_deleted):
            return None
        return item

    def get_items(self, item_ids: list[int]) -> list[ItemModel]:
        if not item_ids:
            return []
        return list(
            self.db.execute(select(ItemModel).where(ItemModel.id.in_(item_ids))).scalars()
        )

    def list_items(self) -> list[ItemModel]:
        return list(
            self.db.execute(
                select(ItemModel)
                .where(ItemModel.deleted_at.is_(None))
                .order_by(ItemModel.id)
            ).scalars()
        )

    def create_item(self, item: ItemModel) -> ItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def soft_delete(self, item: ItemModel) -> ItemModel:
        item.deleted_at = datetime.now(timezone.utc)
        self.db.commit()
        return item
