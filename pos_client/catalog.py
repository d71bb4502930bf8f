import logging
from typing import Dict, Optional, Tuple

from pos_client.api import PosApiClient
from pos_client.errors import CatalogLoadError, UnknownProductError
from pos_client.schemas import Product

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Could not load products. Make sure the server is running."


class CatalogStore:
    """Products fetched from the backend, read-only between loads."""

    def __init__(self, api: PosApiClient):
        self.api = api
        self._products: Tuple[Product, ...] = ()
        self._by_id: Dict[int, Product] = {}
        self.error: Optional[str] = None
        self.loaded = False

    async def load(self) -> bool:
        """Replace the product set with a fresh fetch. Returns False on failure."""
        try:
            products = await self.api.fetch_products()
        except CatalogLoadError as e:
            logger.error(f"Catalog load failed: {e.reason}")
            self._replace(())
            self.error = LOAD_FAILED_MESSAGE
            self.loaded = False
            return False

        self._replace(tuple(products))
        self.error = None
        self.loaded = True
        logger.info(f"Catalog loaded with {len(self._products)} products")
        return True

    def _replace(self, products: Tuple[Product, ...]) -> None:
        by_id = {}
        for product in products:
            if product.id in by_id:
                logger.warning(f"Duplicate product id {product.id} in catalog, keeping the first")
                continue
            by_id[product.id] = product
        self._products = tuple(by_id.values())
        self._by_id = by_id

    def lookup(self, product_id: int) -> Product:
        """Return the product for an id or raise UnknownProductError."""
        try:
            return self._by_id[product_id]
        except KeyError:
            raise UnknownProductError(product_id) from None

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id
