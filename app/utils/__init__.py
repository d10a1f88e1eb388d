"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Amount validation, product id parsing, amount formatting

==============================================================================
"""

from .validators import AmountValidator, format_amount, parse_product_id

__all__ = [
    "AmountValidator",
    "format_amount",
    "parse_product_id",
]
