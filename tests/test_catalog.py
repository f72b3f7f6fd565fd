"""
==============================================================================
Catalog Store and View Tests
==============================================================================

Tests for loading records, catalog membership and the resolved catalog view.

==============================================================================
"""

import json
from decimal import Decimal

import pytest

from pricing_engine.catalog.catalog import CatalogStore
from pricing_engine.catalog.models import (
    Catalog,
    CatalogStatus,
    MarkupKind,
    PackagingType,
    Product,
)
from pricing_engine.core.exceptions import Degradation, PricingEngineError
from pricing_engine.services.catalog_service import CatalogView


# ============================================================================
# STORE
# ============================================================================

class TestCatalogStore:
    """Tests for CatalogStore."""

    def test_from_dict(self, store):
        assert len(store.products) == 4
        assert [catalog.id for catalog in store.catalogs] == ["wholesale", "retail"]
        assert store.find_product("cheese").unit_weight == Decimal("35")
        assert store.find_product("ghost") is None

    def test_members_skip_unknown_ids(self, store):
        members = store.members("wholesale")
        assert [product.id for product in members] == ["cheese", "yogurt", "butter", "secret"]

    def test_members_deduplicated(self):
        store = CatalogStore(
            products=[Product(id="a"), Product(id="b")],
            catalogs=[Catalog(id="c", member_product_ids=["a", "b", "a"])],
        )
        assert [product.id for product in store.members("c")] == ["a", "b"]

    def test_unknown_catalog(self, store):
        with pytest.raises(PricingEngineError) as exc_info:
            store.members("nope")

        assert exc_info.value.code == "CATALOG_NOT_FOUND"
        assert exc_info.value.to_dict()["details"] == {"catalog_id": "nope"}

    def test_overrides_lookup(self, store):
        assert store.get_override("wholesale", "yogurt").status == CatalogStatus.PRE_ORDER
        assert store.get_override("retail", "yogurt") is None
        assert set(store.overrides_for("wholesale")) == {"cheese", "yogurt", "secret"}
        assert store.overrides_for("retail") == {}

    def test_legacy_keys(self):
        store = CatalogStore.from_dict({
            "products": [{"id": "p", "packaging_type": "package", "base_price": 10}],
            "catalogs": [{"id": "c", "productIds": ["p"]}],
            "overrides": [
                {"catalog_id": "c", "product_id": "p", "markup_type": "rubles", "markup_value": 5},
            ],
        })

        assert store.find_product("p").packaging_type == PackagingType.PLAIN
        assert store.get_catalog("c").contains("p")
        assert store.get_override("c", "p").markup.kind == MarkupKind.FIXED

    def test_invalid_record(self):
        with pytest.raises(PricingEngineError) as exc_info:
            CatalogStore.from_dict({"products": [{"id": ""}]})

        error = exc_info.value
        assert error.code == "CATALOG_DATA_INVALID"
        assert error.details["errors"][0]["loc"] == ["id"]

    def test_non_object_document(self):
        with pytest.raises(PricingEngineError) as exc_info:
            CatalogStore.from_dict([])
        assert exc_info.value.code == "CATALOG_DATA_INVALID"

    def test_from_file_and_reload(self, catalog_file, catalog_document):
        store = CatalogStore.from_file(catalog_file)
        assert len(store.products) == 4

        catalog_document["products"].append({"id": "milk", "name": "Молоко"})
        catalog_file.write_text(json.dumps(catalog_document), encoding="utf-8")
        store.reload()

        assert store.find_product("milk") is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CatalogStore.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PricingEngineError) as exc_info:
            CatalogStore.from_file(path)
        assert exc_info.value.code == "CATALOG_DATA_INVALID"

    def test_stats(self, store):
        stats = store.get_stats()

        assert stats["total_products"] == 4
        assert stats["catalogs"]["wholesale"] == {"name": "Оптовый", "members": 5, "overrides": 3}


# ============================================================================
# VIEW
# ============================================================================

class TestCatalogView:
    """Tests for CatalogView."""

    def test_catalog_prices(self, store):
        view = CatalogView.for_catalog(store, "wholesale")
        cheese = view.find("cheese")

        assert view.catalog_id == "wholesale"
        assert cheese.price_for(0) == Decimal("70000")
        assert cheese.price_for(3) == Decimal("950")
        assert cheese.catalog_id == "wholesale"

    def test_base_prices(self, store):
        cheese = CatalogView.base(store).find("cheese")

        assert cheese.price_for(0) == Decimal("66150")
        assert cheese.price_for(3) is None
        assert cheese.catalog_id is None

    def test_hidden_excluded_from_visible(self, store):
        view = CatalogView.for_catalog(store, "wholesale")

        visible = [resolved.product_id for resolved in view.visible_products()]
        assert visible == ["cheese", "yogurt", "butter"]
        assert view.find("secret").price_for(0) == Decimal("9000")

    def test_orderable(self, store):
        view = CatalogView.for_catalog(store, "wholesale")
        orderable = [resolved.product_id for resolved in view.orderable_products()]

        assert orderable == ["cheese", "yogurt", "butter"]

    def test_same_product_differs_between_catalogs(self, store):
        wholesale = CatalogView.for_catalog(store, "wholesale").find("yogurt")
        base = CatalogView.base(store).find("yogurt")

        assert wholesale.can_order
        assert base.status == CatalogStatus.OUT_OF_STOCK
        assert not base.can_order

    def test_missing_override_reported(self, store):
        butter = CatalogView.for_catalog(store, "retail").find("butter")

        assert butter.catalog_id == "retail"
        assert Degradation.NO_OVERRIDE in butter.degradations

    def test_find_unknown(self, store):
        view = CatalogView.for_catalog(store, "retail")

        assert view.find("cheese") is None
        assert view.find(None) is None

    def test_stats(self, store):
        stats = CatalogView.for_catalog(store, "wholesale").get_stats()

        assert stats["total_products"] == 4
        assert stats["visible"] == 3
        assert stats["orderable"] == 3
        assert stats["by_status"]["hidden"] == 1
        assert stats["by_status"]["pre_order"] == 1
        assert stats["by_status"]["in_stock"] == 2
