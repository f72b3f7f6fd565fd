"""
==============================================================================
Catalog Store Module
==============================================================================

In-memory store of the records the engine prices: products, catalogs and
catalog × product overrides.

Features:
---------
- Construction from plain dicts (as returned by the persistence layer)
- JSON document loading for the command line entry point
- Lookup indexes by product id, catalog id and (catalog, product)

JSON Structure:
--------------
{
  "products":  [{"id": "p1", "name": "Пармезан", "packaging_type": "head", ...}],
  "catalogs":  [{"id": "opt", "name": "Оптовый", "member_product_ids": ["p1"]}],
  "overrides": [{"catalog_id": "opt", "product_id": "p1", "status": "pre_order"}]
}

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from pricing_engine.catalog.models import Catalog, CatalogOverride, Product
from pricing_engine.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Indexed collection of products, catalogs and overrides.

    Attributes:
        products: All products in insertion order
        catalogs: All catalogs in insertion order

    Example:
        >>> store = CatalogStore.from_file(Path("data/catalog.json"))
        >>> store.find_product("p1").name
        'Пармезан'
        >>> store.members("opt")
        [Product(id='p1', ...)]
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        catalogs: Iterable[Catalog] = (),
        overrides: Iterable[CatalogOverride] = (),
    ) -> None:
        """
        Initialize store from already validated records.

        Args:
            products: Product records
            catalogs: Catalog records
            overrides: Catalog × product overrides
        """
        self._source: Optional[Path] = None
        self._products: List[Product] = []
        self._catalogs: List[Catalog] = []
        self._overrides: List[CatalogOverride] = []
        self._by_id: Dict[str, Product] = {}
        self._catalogs_by_id: Dict[str, Catalog] = {}
        self._overrides_by_key: Dict[tuple, CatalogOverride] = {}

        self._set_records(list(products), list(catalogs), list(overrides))

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogStore":
        """
        Build a store from a raw document.

        Raises:
            PricingEngineError: CATALOG_DATA_INVALID if any record fails validation
        """
        if not isinstance(data, dict):
            raise exceptions.catalog_data_invalid("document must be an object")

        try:
            products = [Product.model_validate(item) for item in data.get("products") or []]
            catalogs = [Catalog.model_validate(item) for item in data.get("catalogs") or []]
            overrides = [
                CatalogOverride.model_validate(item) for item in data.get("overrides") or []
            ]
        except ValidationError as e:
            logger.error(f"Invalid catalog record: {e.error_count()} error(s)")
            raise exceptions.catalog_data_invalid(
                "record validation failed",
                [
                    {"loc": list(err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            ) from e

        return cls(products, catalogs, overrides)

    @classmethod
    def from_file(cls, path: Path) -> "CatalogStore":
        """Load a store from a JSON document on disk."""
        store = cls()
        store._source = Path(path)
        store.reload()
        return store

    def reload(self) -> None:
        """Reload records from the source file."""
        if self._source is None:
            return

        logger.info(f"Loading catalog data from {self._source}")
        try:
            with self._source.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error(f"Catalog data file not found: {self._source}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON: {e}")
            raise exceptions.catalog_data_invalid(str(e)) from e

        loaded = CatalogStore.from_dict(data)
        self._set_records(loaded._products, loaded._catalogs, loaded._overrides)

    def _set_records(
        self,
        products: List[Product],
        catalogs: List[Catalog],
        overrides: List[CatalogOverride],
    ) -> None:
        self._products = products
        self._catalogs = catalogs
        self._overrides = overrides
        self._build_indexes()

        logger.info(
            f"Loaded {len(self._products)} products, {len(self._catalogs)} catalogs, "
            f"{len(self._overrides)} overrides"
        )

    def _build_indexes(self) -> None:
        """Build lookup indexes."""
        self._by_id = {product.id: product for product in self._products}
        self._catalogs_by_id = {catalog.id: catalog for catalog in self._catalogs}
        self._overrides_by_key = {override.key: override for override in self._overrides}

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> List[Product]:
        return self._products.copy()

    @property
    def catalogs(self) -> List[Catalog]:
        return self._catalogs.copy()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def find_product(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(product_id)

    def get_catalog(self, catalog_id: str) -> Catalog:
        """
        Get a catalog by id.

        Raises:
            PricingEngineError: CATALOG_NOT_FOUND
        """
        catalog = self._catalogs_by_id.get(catalog_id)
        if catalog is None:
            raise exceptions.catalog_not_found(catalog_id)
        return catalog

    def get_override(self, catalog_id: str, product_id: str) -> Optional[CatalogOverride]:
        return self._overrides_by_key.get((catalog_id, product_id))

    def overrides_for(self, catalog_id: str) -> Dict[str, CatalogOverride]:
        """Overrides of one catalog keyed by product id."""
        return {
            override.product_id: override
            for override in self._overrides
            if override.catalog_id == catalog_id
        }

    def members(self, catalog_id: str) -> List[Product]:
        """
        Member products of a catalog in catalog order.

        Member ids with no product record are skipped.
        """
        catalog = self.get_catalog(catalog_id)
        members = []
        seen = set()
        for product_id in catalog.member_product_ids:
            if product_id in seen:
                continue
            seen.add(product_id)

            product = self._by_id.get(product_id)
            if product is None:
                logger.warning(f"Catalog {catalog_id} references unknown product {product_id}")
                continue
            members.append(product)
        return members

    def get_stats(self) -> Dict:
        """Get store statistics."""
        return {
            "total_products": len(self._products),
            "active_products": sum(1 for p in self._products if p.is_active),
            "catalogs": {
                catalog.id: {
                    "name": catalog.name,
                    "members": len(catalog.member_set),
                    "overrides": len(self.overrides_for(catalog.id)),
                }
                for catalog in self._catalogs
            },
        }
