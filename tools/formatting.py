"""Display helpers shared by tool post-processors."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
UNKNOWN = "unknown"
MAX_DECIMALS = 18
# int64 supplies have at most 19 digits
MAX_SUPPLY_DIGITS = 40


def _to_decimal(value: Any) -> Decimal | None:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def format_supply(supply: Any, decimals: Any = 0) -> str:
    """Scale a raw integer amount by 10**decimals and group thousands.

    Values that are not numbers, or whose decimals or magnitude are out of
    range, are returned unchanged.
    """
    amount = _to_decimal(supply)
    if amount is None:
        return str(supply)

    places = _to_decimal(decimals)
    scale = int(places) if places is not None and places >= 0 else 0
    if scale > MAX_DECIMALS or abs(amount.adjusted()) > MAX_SUPPLY_DIGITS:
        return str(supply)

    text = format(amount.scaleb(-scale), ",f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_timestamp(timestamp: Any) -> str:
    """Render epoch seconds ("1700000000.123456789") as an ISO-8601 UTC instant."""
    if timestamp is None or timestamp == "":
        return UNKNOWN
    seconds = _to_decimal(timestamp)
    if seconds is None:
        return UNKNOWN
    try:
        instant = EPOCH + timedelta(milliseconds=int(seconds * 1000))
    except OverflowError:
        return UNKNOWN
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_supply_type(supply_type: Any) -> str:
    return "Infinite" if str(supply_type).upper() == "INFINITE" else "Finite"


def format_freeze_default(freeze_default: Any) -> str:
    return "Frozen by default" if freeze_default else "Not frozen by default"
