"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a price string into a Decimal.

    Handles various formats:
    - "49.90"
    - "€49.90" or "49.90 €"
    - "49,90" (comma as decimal separator)
    - "1,234.50"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = re.sub(r"[$€£\s]", "", amount_str)

    # A single comma followed by one or two digits is a decimal comma
    if re.fullmatch(r"-?\d+,\d{1,2}", amount_str):
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        return Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
