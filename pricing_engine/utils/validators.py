"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for cart input.

This module implements:
- QuantityValidator: Validates cart line quantities

==============================================================================
"""

from __future__ import annotations

from typing import Optional, Tuple


class QuantityValidator:
    """
    Validator for cart quantities.

    A stored cart line always holds at least one unit; zero is only valid
    as a "set quantity" request, which removes the line.
    """

    MIN_QUANTITY = 1
    MAX_QUANTITY = 9999

    def validate(self, qty: int, allow_zero: bool = False) -> Tuple[bool, Optional[str]]:
        """
        Validate a quantity value.

        Args:
            qty: Quantity to validate
            allow_zero: Accept 0 (used by set-quantity, which then removes)

        Returns:
            Tuple of (is_valid, error_message)
        """
        if isinstance(qty, bool) or not isinstance(qty, int):
            return False, "Quantity must be an integer"

        minimum = 0 if allow_zero else self.MIN_QUANTITY
        if qty < minimum:
            return False, f"Quantity must be at least {minimum}"

        if qty > self.MAX_QUANTITY:
            return False, f"Quantity cannot exceed {self.MAX_QUANTITY}"

        return True, None

    def is_valid(self, qty: int, allow_zero: bool = False) -> bool:
        """Quick validation check."""
        is_valid, _ = self.validate(qty, allow_zero)
        return is_valid
