"""
Engine Exception Handling

Single PricingEngineError class for caller-facing failures, plus the
degradation taxonomy that the pure resolvers report instead of raising.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class Degradation(str, enum.Enum):
    """
    Locally recoverable conditions reported by the resolvers.

    None of these are raised. They are attached to results so callers can
    show reduced functionality or a summary message.

    - MISSING_PACKAGING_DATA: Head/Piece product lacks the data for variant
      prices and is offered as a single Plain price
    - UNRESOLVED_REORDER_PRODUCT: order line no longer matches an orderable
      product and is frozen at its historical price
    - NO_OVERRIDE: no catalog override exists, computed values are used
    """

    MISSING_PACKAGING_DATA = "missing_packaging_data"
    UNRESOLVED_REORDER_PRODUCT = "unresolved_reorder_product"
    NO_OVERRIDE = "no_override"

    def __str__(self) -> str:
        return self.value


class PricingEngineError(Exception):
    """
    Unified exception for cart operations and data loading.

    Usage:
        raise PricingEngineError("Variant not offered", "VARIANT_NOT_OFFERED")
        raise PricingEngineError("Bad data", "CATALOG_DATA_INVALID", {"errors": [...]})

    Error Codes:
        Cart:
            - PRODUCT_NOT_ORDERABLE
            - VARIANT_NOT_OFFERED
            - CART_ITEM_NOT_FOUND
            - INVALID_QUANTITY

        Catalog data:
            - CATALOG_NOT_FOUND
            - CATALOG_DATA_INVALID
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize engine exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "VARIANT_NOT_OFFERED")
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Error payload for logs and callers that serialize it."""
        error_dict = {
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def product_not_orderable(product_id: str, status: str) -> PricingEngineError:
    """Create product not orderable exception."""
    return PricingEngineError(
        f"Product cannot be ordered in status '{status}'",
        "PRODUCT_NOT_ORDERABLE",
        {"product_id": product_id, "status": status}
    )


def variant_not_offered(product_id: str, variant_index: int) -> PricingEngineError:
    """Create variant not offered exception."""
    return PricingEngineError(
        f"Variant {variant_index} is not offered for this product",
        "VARIANT_NOT_OFFERED",
        {"product_id": product_id, "variant_index": variant_index}
    )


def cart_item_not_found(product_id: str, variant_index: int) -> PricingEngineError:
    """Create cart item not found exception."""
    return PricingEngineError(
        "Cart item not found",
        "CART_ITEM_NOT_FOUND",
        {"product_id": product_id, "variant_index": variant_index}
    )


def invalid_quantity(quantity: int, reason: str) -> PricingEngineError:
    """Create invalid quantity exception."""
    return PricingEngineError(
        f"Invalid quantity: {reason}",
        "INVALID_QUANTITY",
        {"quantity": quantity, "reason": reason}
    )


def catalog_not_found(catalog_id: str) -> PricingEngineError:
    """Create catalog not found exception."""
    return PricingEngineError(
        f"Catalog '{catalog_id}' not found",
        "CATALOG_NOT_FOUND",
        {"catalog_id": catalog_id}
    )


def catalog_data_invalid(message: str, errors: Optional[list] = None) -> PricingEngineError:
    """Create invalid catalog data exception."""
    details = {"errors": errors} if errors else {}
    return PricingEngineError(
        f"Invalid catalog data: {message}",
        "CATALOG_DATA_INVALID",
        details
    )
