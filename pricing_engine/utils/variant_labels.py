"""
==============================================================================
Variant Label Module
==============================================================================

Adapter between HEAD variant indices and their display labels.

Order snapshots written before the variant index was persisted carry the
variant only as a trailing label in the line name, e.g. "Сыр (½)". This
module is the single place that reads those labels back.

Vocabulary:
----------
    0  Целая
    1  ½
    2  ¼
    3  Порция

Parsing also accepts the older spellings "Целый", "Половина", "Четверть",
and the "1/2" and "1/4" written by guest orders.
A missing or unknown suffix always resolves to 0.

==============================================================================
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from pricing_engine.catalog.models import HeadVariant


VARIANT_LABELS: Dict[HeadVariant, str] = {
    HeadVariant.FULL: "Целая",
    HeadVariant.HALF: "½",
    HeadVariant.QUARTER: "¼",
    HeadVariant.PORTION: "Порция",
}

_LEGACY_LABELS: Dict[str, HeadVariant] = {
    "целый": HeadVariant.FULL,
    "половина": HeadVariant.HALF,
    "четверть": HeadVariant.QUARTER,
    "1/2": HeadVariant.HALF,
    "1/4": HeadVariant.QUARTER,
}


def label_for(variant_index: int) -> str:
    """Display label of a variant index; unknown indices read as full."""
    try:
        return VARIANT_LABELS[HeadVariant(variant_index)]
    except ValueError:
        return VARIANT_LABELS[HeadVariant.FULL]


def with_variant_suffix(name: str, variant_index: int) -> str:
    """Build an order line name such as "Сыр (½)"."""
    return f"{name} ({label_for(variant_index)})"


class VariantLabelParser:
    """
    Parser for variant labels embedded in order line names.

    Example:
        >>> parser = VariantLabelParser()
        >>> parser.parse("Сыр (½)")
        (1, 'Сыр')
        >>> parser.parse("Сыр")
        (0, 'Сыр')
    """

    # Trailing "(label)" at the end of the name
    SUFFIX_PATTERN = re.compile(r"^(?P<base>.*?)\s*\((?P<label>[^()]*)\)\s*$", re.DOTALL)

    def __init__(self) -> None:
        self._by_label: Dict[str, HeadVariant] = {
            label.casefold(): variant for variant, label in VARIANT_LABELS.items()
        }
        self._by_label.update(_LEGACY_LABELS)

    def lookup(self, label: str) -> Optional[HeadVariant]:
        """Variant for a bare label, or None when it is not in the vocabulary."""
        return self._by_label.get(label.strip().casefold())

    def parse(self, name: Optional[str]) -> Tuple[int, str]:
        """
        Recover the variant index from a line name.

        Args:
            name: Order line name, possibly with a "(label)" suffix

        Returns:
            Tuple of (variant_index, base_name). An unrecognised suffix is
            kept in base_name and the index defaults to FULL.
        """
        if not name:
            return int(HeadVariant.FULL), ""

        match = self.SUFFIX_PATTERN.match(name)
        if match:
            variant = self.lookup(match.group("label"))
            if variant is not None:
                return int(variant), match.group("base").strip()

        return int(HeadVariant.FULL), name.strip()

    def variant_index(self, name: Optional[str]) -> int:
        """Quick index lookup."""
        index, _ = self.parse(name)
        return index
