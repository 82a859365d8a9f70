# shopcart/services/item_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.item import ItemModel
from shopcart.domain.errors import InternalError, NotFoundError
from shopcart.domain.schemas import ItemCreate, ItemOut
from shopcart.repos.item_repo import ItemRepo
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class ItemService:
    """Local catalog management, the data behind SqlCatalog."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ItemRepo(db)

    def list_items(self) -> list[ItemOut]:
        return [ItemOut.model_validate(i) for i in self.repo.list_items()]

    def get_item(self, item_id: int) -> ItemOut:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError("Item not found")
        return ItemOut.model_validate(item)

    def create_item(self, payload: ItemCreate) -> ItemOut:
        try:
            item = self.repo.create_item(ItemModel(**payload.model_dump()))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create item: {e}")
            raise InternalError("Failed to create item") from e

        logger.info(f"Item {item.id} created")
        return ItemOut.model_validate(item)

    def delete_item(self, item_id: int) -> None:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError("Item not found")

        try:
            self.repo.soft_delete(item)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete item {item_id}: {e}")
            raise InternalError("Failed to delete item") from e

        logger.info(f"Item {item_id} deleted")
