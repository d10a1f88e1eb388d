"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation helpers for request input.

This module implements:
- AmountValidator: Validates money amounts (starting bids, bids)
- parse_product_id: Parses product ids taken from URL paths
- format_amount: Renders an amount for human-readable messages

Validation Rules for Amounts:
----------------------------
- Must be a JSON number (int or float); booleans and strings are rejected
- Must be finite and strictly positive
- Stored as Decimal with up to six fractional digits (``Numeric(15, 6)``);
  finer amounts are rounded to that scale and rejected if nothing positive
  is left

Validation Rules for Product Ids:
--------------------------------
- ASCII digits only, greater than zero
- At most the largest signed 64-bit integer, the widest id any supported
  database stores

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple


# Storage scale of money columns
AMOUNT_QUANTUM = Decimal("0.000001")

MAX_PRODUCT_ID = 2 ** 63 - 1


class AmountValidator:
    """
    Validator for money amounts.

    Example:
        >>> validator = AmountValidator()
        >>> validator.validate(10.005)
        (True, Decimal('10.005000'), None)
        >>> validator.validate(0)
        (False, None, 'Amount must be greater than zero')
    """

    # Fifteen significant digits survive SQLite's REAL storage unchanged
    MAX_AMOUNT = Decimal("999999999.999999")

    def validate(self, value: Any) -> Tuple[bool, Optional[Decimal], Optional[str]]:
        """
        Validate and normalize an amount.

        Args:
            value: Raw amount from a request body

        Returns:
            Tuple of (is_valid, normalized_amount, error_message)
        """
        if value is None:
            return False, None, "Amount is required"

        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return False, None, "Amount must be a number"

        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return False, None, "Amount must be a number"

        if not amount.is_finite():
            return False, None, "Amount must be a finite number"

        if amount > self.MAX_AMOUNT:
            return False, None, "Amount is too large"

        amount = amount.quantize(AMOUNT_QUANTUM)

        if amount <= 0:
            return False, None, "Amount must be greater than zero"

        return True, amount, None

    def parse(self, value: Any) -> Optional[Decimal]:
        """Return the normalized amount, or None if invalid."""
        is_valid, amount, _ = self.validate(value)
        return amount if is_valid else None


def parse_product_id(raw: str) -> Optional[int]:
    """
    Parse a product id from a URL path segment.

    Returns:
        Positive integer id, or None if the segment is not one
    """
    raw = (raw or "").strip()
    # str.isdigit() alone accepts characters such as "²" that int() refuses
    if not (raw.isascii() and raw.isdigit()):
        return None
    product_id = int(raw)
    return product_id if 0 < product_id <= MAX_PRODUCT_ID else None


def format_amount(amount: Decimal) -> str:
    """
    Render an amount without trailing zeros.

    Example:
        >>> format_amount(Decimal("10.000000"))
        '10'
        >>> format_amount(Decimal("10.005000"))
        '10.005'
    """
    text = f"{amount:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
