"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the engine.

Modules:
--------
- formatters: price rounding and display formatting
- validators: cart quantity validation
- variant_labels: variant label vocabulary and legacy label parsing
- price_list: plain-text price list and repeat-order reports

==============================================================================
"""

from .formatters import format_price, round_price
from .validators import QuantityValidator
from .variant_labels import VariantLabelParser, label_for, with_variant_suffix

__all__ = [
    "format_price",
    "round_price",
    "QuantityValidator",
    "VariantLabelParser",
    "label_for",
    "with_variant_suffix",
]
