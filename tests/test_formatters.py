"""
==============================================================================
Formatting, Settings and Command Line Tests
==============================================================================

Tests for price display, the text reports and the pricing-engine command.

==============================================================================
"""

import json
from decimal import Decimal

import pytest

from pricing_engine.config import Settings, get_settings
from pricing_engine.main import main
from pricing_engine.services.catalog_service import CatalogView
from pricing_engine.services.reorder_service import reconcile
from pricing_engine.schemas.order import OrderLineSnapshot
from pricing_engine.utils.formatters import (
    format_price,
    format_weight,
    group_thousands,
    round_price,
)
from pricing_engine.utils.price_list import PriceListFormatter


# ============================================================================
# PRICE FORMATTING
# ============================================================================

class TestPriceFormatting:
    """Tests for price rounding and display."""

    @pytest.mark.parametrize("value,expected", [
        (Decimal("16537.5"), 16538),
        (Decimal("16537.49"), 16537),
        (Decimal("-2.5"), -3),
        (Decimal("0"), 0),
        ("99.5", 100),
    ])
    def test_round_half_up(self, value, expected):
        assert round_price(value) == expected

    def test_group_thousands(self):
        assert group_thousands(1234567) == "1,234,567".replace(",", " ")
        assert group_thousands(950) == "950"

    def test_format_price(self, settings):
        assert format_price(Decimal("66150"), settings) == "66 150 ₽"
        assert format_price(Decimal("16537.5"), settings) == "16 538 ₽"

    def test_format_price_from_environment(self, monkeypatch):
        monkeypatch.setenv("CURRENCY_SUFFIX", "руб.")
        monkeypatch.setenv("THOUSANDS_SEPARATOR", ".")

        assert format_price(Decimal("1500")) == "1.500 руб."

    def test_format_weight(self):
        assert format_weight(Decimal("17.50")) == "17.5 кг"
        assert format_weight(Decimal("35")) == "35 кг"
        assert format_weight(None) == ""


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.currency_suffix == "₽"
        assert settings.default_portion_weight == Decimal("0.1")
        assert not settings.is_production

    def test_unknown_env_falls_back(self):
        assert Settings(app_env="qa").app_env == "development"
        assert Settings(app_env=" Production ").is_production

    def test_cached(self):
        assert get_settings() is get_settings()


# ============================================================================
# TEXT REPORTS
# ============================================================================

class TestPriceListFormatter:
    """Tests for PriceListFormatter."""

    def test_catalog_price_list(self, store, settings):
        view = CatalogView.for_catalog(store, "wholesale")
        text = PriceListFormatter(settings).format_catalog(view, title="Оптовый")

        assert "PRICE LIST: Оптовый" in text
        assert "Целая (35 кг)" in text
        assert "70 000 ₽" in text
        assert "½ (17.5 кг)" in text
        assert "box × 12" in text
        assert "1 020 ₽" in text
        assert "Трюфель" not in text
        assert "Visible:         3" in text

    def test_include_hidden(self, store, settings):
        view = CatalogView.for_catalog(store, "wholesale")
        text = PriceListFormatter(settings).format_catalog(view, include_hidden=True)

        assert "PRICE LIST: wholesale" in text
        assert "Трюфель" in text

    def test_portion_uses_default_weight(self, store, settings):
        view = CatalogView.for_catalog(store, "wholesale")
        formatter = PriceListFormatter(settings)

        assert formatter.variant_name(view.find("cheese"), 3) == "Порция (0.1 кг)"

    def test_reconciliation_report(self, store, settings):
        view = CatalogView.for_catalog(store, "wholesale")
        result = reconcile(
            [
                OrderLineSnapshot(product_id="cheese", product_name="Сыр (½)", quantity=1, price=30000),
                OrderLineSnapshot(product_id="gone", product_name="Кефир", quantity=2, price=90),
            ],
            view.resolved,
        )
        text = PriceListFormatter(settings).format_reconciliation(result)

        assert "REPEAT ORDER" in text
        assert "[✓] Сыр [1] × 1 = 33 075 ₽" in text
        assert "[!] Кефир × 2 = 180 ₽ (недоступно)" in text
        assert "Добавлено в корзину: 1, недоступно: 1" in text
        assert "Итого: 33 075 ₽" in text


# ============================================================================
# COMMAND LINE
# ============================================================================

class TestCommandLine:
    """Tests for the pricing-engine command."""

    def test_price_list(self, catalog_file, capsys):
        code = main(["--data", str(catalog_file), "price-list", "--catalog", "wholesale"])

        assert code == 0
        out = capsys.readouterr().out
        assert "PRICE LIST: wholesale" in out
        assert "70 000 ₽" in out

    def test_base_price_list(self, catalog_file, capsys):
        assert main(["--data", str(catalog_file), "price-list"]) == 0
        assert "66 150 ₽" in capsys.readouterr().out

    def test_reorder(self, catalog_file, tmp_path, capsys):
        order = tmp_path / "order.json"
        order.write_text(
            json.dumps({"items": [
                {"product_id": "butter", "product_name": "Масло", "quantity": 2, "price": 400},
                {"product_id": "gone", "product_name": "Кефир", "quantity": 1, "price": 90},
            ]}, ensure_ascii=False),
            encoding="utf-8",
        )

        code = main(["--data", str(catalog_file), "reorder", "--catalog", "wholesale", str(order)])

        assert code == 0
        assert "Добавлено в корзину: 1, недоступно: 1" in capsys.readouterr().out

    def test_unknown_catalog(self, catalog_file, caplog):
        assert main(["--data", str(catalog_file), "price-list", "--catalog", "nope"]) == 2
        assert "CATALOG_NOT_FOUND" in caplog.text

    def test_missing_data_file(self, tmp_path):
        assert main(["--data", str(tmp_path / "missing.json"), "price-list"]) == 1
