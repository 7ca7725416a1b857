"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_MARKERS = re.compile(r"(?i)(inr|rs\.?|[₹$€£¥])")
DIRECTION_SUFFIX = re.compile(r"(?i)\s*(cr|dr)\.?$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a statement amount string into a signed Decimal.

    Handles various formats:
    - "1200.00", "1,200.00", "1,23,456.78" (Indian grouping)
    - "₹1,200.00", "Rs. 1,200", "INR 1200", "$12.50"
    - "-50.00", "50.00-", "(50.00)" (negative)
    - "1,200.00 Dr" (negative), "1,200.00 Cr" (positive)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    text = str(amount_str).strip().strip('"').strip()

    is_negative = False
    suffix = DIRECTION_SUFFIX.search(text)
    if suffix:
        is_negative = suffix.group(1).lower() == "dr"
        text = text[: suffix.start()]

    text = CURRENCY_MARKERS.sub("", text)
    text = text.replace(",", "").replace(" ", "").replace("\u00a0", "")

    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]
    if text.endswith("-"):
        is_negative = True
        text = text[:-1]
    if text.startswith("-"):
        is_negative = not is_negative if suffix is None else is_negative
        text = text[1:]
    elif text.startswith("+"):
        text = text[1:]

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return -amount if is_negative else amount


def format_amount(amount: Decimal, symbol: str = "₹", grouping: str = "indian") -> str:
    """Format a Decimal for display with thousands separators.

    Args:
        amount: Amount to format
        symbol: Currency symbol prefix (may be empty)
        grouping: "indian" for 1,23,456.78 or "western" for 123,456.78

    Returns:
        Formatted amount string, negative amounts prefixed with "-"
    """
    quantized = Decimal(amount).quantize(Decimal("0.01"))
    sign = "-" if quantized < 0 else ""
    whole, fraction = f"{abs(quantized):.2f}".split(".")

    if grouping == "indian" and len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    elif grouping == "western":
        whole = f"{int(whole):,}"

    return f"{sign}{symbol}{whole}.{fraction}"
