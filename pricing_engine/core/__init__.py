"""
==============================================================================
Core Package
==============================================================================

Core infrastructure shared by every engine module.

Modules:
--------
- exceptions: PricingEngineError, error factory functions and the
  Degradation taxonomy

Usage:
------
    from pricing_engine.core import exceptions
    raise exceptions.variant_not_offered(product_id, 3)

==============================================================================
"""

from .exceptions import Degradation, PricingEngineError

__all__ = [
    "Degradation",
    "PricingEngineError",
]
