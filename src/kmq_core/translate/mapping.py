"""Property renaming, prefixing and revenue normalization.

All functions here are pure: they never mutate their inputs and nested
values are passed through by reference.
"""
import logging
import math
from typing import Any, Mapping, Optional


logger = logging.getLogger(__name__)

BILLING_AMOUNT_KEY = "Billing Amount"
REVENUE_MAPPING = {"revenue": BILLING_AMOUNT_KEY}


def prefix(event: str, properties: Mapping[str, Any]) -> dict:
    """Rename every key to '<event> - <key>'.

    The reserved 'Billing Amount' key is copied verbatim.

    Args:
        event: Event name used as prefix
        properties: Raw event properties

    Returns:
        New dict with the same number of keys
    """
    prefixed = {}
    for key, value in properties.items():
        if key == BILLING_AMOUNT_KEY:
            prefixed[key] = value
        else:
            prefixed[f"{event} - {key}"] = value
    return prefixed


def alias_properties(
    properties: Mapping[str, Any], mapping: Mapping[str, str]
) -> dict:
    """Copy properties, renaming keys found in `mapping`."""
    return {mapping.get(key, key): value for key, value in properties.items()}


def normalize_revenue(value: Any) -> Optional[float]:
    """Coerce a revenue-like value to float.

    Strings such as "$1,024.50" are accepted. Booleans, None, NaN,
    infinities and unparseable values give None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        cleaned = value.replace("$", "").replace(",", "").strip()
        try:
            result = float(cleaned)
        except ValueError:
            logger.debug("Ignoring unparseable revenue %r", value)
            return None
    else:
        return None

    if not math.isfinite(result):
        logger.debug("Ignoring non-finite revenue %r", value)
        return None
    return result
