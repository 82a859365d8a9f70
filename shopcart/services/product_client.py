# shopcart/services/product_client.py
from typing import Iterable

import requests
from requests import RequestException

from shopcart.domain.errors import InternalError
from shopcart.services.catalog import CatalogItem
from shopcart.utils.retry import http_retry
from shopcart.utils.settings import CATALOG_URL, CATALOG_TIMEOUT_SECONDS
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class HttpCatalog:
    """
    Catalog gateway over HTTP, for deployments where the catalog is another
    shopcart instance (or anything serving `GET /items/{id}`).
    """

    def __init__(self, base_url: str | None = None, timeout: int | None = None):
        self.base_url = (base_url or CATALOG_URL).rstrip("/")
        self.timeout = timeout or CATALOG_TIMEOUT_SECONDS

    @http_retry()
    def _fetch(self, item_id: int) -> dict | None:
        url = f"{self.base_url}/items/{item_id}"
        logger.info(f"HttpCatalog GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        #404 to odpowiedz, nie blad transportu, nie retry
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def _load(self, item_id: int) -> CatalogItem | None:
        try:
            data = self._fetch(item_id)
        except RequestException as e:
            logger.error(f"Catalog request for item {item_id} failed: {e}")
            raise InternalError("Catalog service unavailable") from e
        return CatalogItem.from_payload(data) if data else None

    def get_item(self, item_id: int) -> CatalogItem | None:
        return self._load(item_id)

    def describe_items(self, item_ids: Iterable[int]) -> dict[int, CatalogItem]:
        found = {}
        for item_id in sorted(set(item_ids)):
            item = self._load(item_id)
            if item:
                found[item_id] = item
        return found
