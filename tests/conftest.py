"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides product, override and catalog fixtures shared by the test modules.

==============================================================================
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Dict

import pytest

from pricing_engine.catalog.catalog import CatalogStore
from pricing_engine.catalog.models import CatalogOverride, Product
from pricing_engine.config import Settings, get_settings


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees a freshly read environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(currency_suffix="₽", thousands_separator=" ", debug=False)


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

@pytest.fixture
def cheese_head() -> Product:
    """Head of cheese: 1890 per kg, 35 kg per head, in stock."""
    return Product(
        id="cheese",
        name="Сыр",
        base_price=Decimal("1890"),
        unit="kg",
        packaging_type="head",
        unit_weight=Decimal("35"),
        quantity=5,
    )


@pytest.fixture
def priced_cheese_head() -> Product:
    """Head of cheese sold from a buy price with a 30% markup."""
    return Product(
        id="parmesan",
        name="Пармезан",
        buy_price=Decimal("2200"),
        markup={"kind": "percent", "amount": 30},
        packaging_type="head",
        unit_weight=Decimal("10"),
        portion_weight=Decimal("0.2"),
        custom_variant_prices={"portion": "700"},
        quantity=2,
    )


@pytest.fixture
def yogurt_piece() -> Product:
    """Yogurt sold per box of 12 or singly."""
    return Product(
        id="yogurt",
        name="Йогурт",
        base_price=Decimal("85"),
        unit="pcs",
        packaging_type="piece",
        piece_variants=[
            {"kind": "box", "quantity": 12},
            {"kind": "single", "quantity": 1},
        ],
        quantity=100,
    )


@pytest.fixture
def butter_plain() -> Product:
    return Product(id="butter", name="Масло", base_price=Decimal("450"), quantity=10)


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def catalog_document() -> Dict:
    """Raw document in the shape the persistence layer returns."""
    return {
        "products": [
            {
                "id": "cheese",
                "name": "Сыр",
                "base_price": "1890",
                "packaging_type": "head",
                "unit_weight": "35",
                "quantity": 5,
            },
            {
                "id": "yogurt",
                "name": "Йогурт",
                "base_price": "85",
                "packaging_type": "piece",
                "piece_variants": [
                    {"kind": "box", "quantity": 12},
                    {"kind": "single", "quantity": 1},
                ],
                "quantity": 0,
            },
            {"id": "butter", "name": "Масло", "base_price": "450", "quantity": 10},
            {"id": "secret", "name": "Трюфель", "base_price": "9000", "quantity": 1},
        ],
        "catalogs": [
            {
                "id": "wholesale",
                "name": "Оптовый",
                "member_product_ids": ["cheese", "yogurt", "butter", "secret", "ghost"],
            },
            {"id": "retail", "name": "Розница", "member_product_ids": ["butter"]},
        ],
        "overrides": [
            {
                "catalog_id": "wholesale",
                "product_id": "cheese",
                "portion_prices": {"fullPricePerKg": 2000, "portionPrice": 950},
            },
            {"catalog_id": "wholesale", "product_id": "yogurt", "status": "pre_order"},
            {"catalog_id": "wholesale", "product_id": "secret", "status": "hidden"},
        ],
    }


@pytest.fixture
def store(catalog_document: Dict) -> CatalogStore:
    return CatalogStore.from_dict(catalog_document)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_document: Dict) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_document, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def full_override() -> CatalogOverride:
    """Wholesale catalog prices the cheese at 2000 per kg for a whole head."""
    return CatalogOverride(
        catalog_id="wholesale",
        product_id="cheese",
        portion_price_overrides={"full": 2000},
    )
