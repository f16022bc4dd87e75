"""Completed-order expansion into a transaction record plus line items."""
import logging
import math
from datetime import datetime, timezone
from typing import Callable

from ..config import AdapterOptions
from ..schemas.commands import Command, PendingItemSet
from ..schemas.events import Track
from .mapping import prefix


logger = logging.getLogger(__name__)

LINE_ITEM_DISCRIMINANT_KEY = "_d"
LINE_ITEM_TIMESTAMP_KEY = "_t"
LINE_ITEM_DISCRIMINANT = 1
PRODUCTS_KEY = "products"
RAW_ITEM_KEY = "item"


def unix_seconds(value: datetime) -> int:
    """Whole seconds since the epoch; naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return math.floor(value.timestamp())


def build_line_items(event: str, products: list, timestamp_base: int) -> tuple:
    """Prefix each product and stamp it with `_d` and `_t = base + index`.

    Products are not validated; whatever fields they carry pass through.
    A product that is not a mapping is kept whole under the `item` key.
    """
    items = []
    for index, product in enumerate(products):
        if isinstance(product, dict):
            item = prefix(event, product)
        else:
            logger.warning(
                "Line item %s of '%s' is %s, not an object; kept under '%s'",
                index,
                event,
                type(product).__name__,
                RAW_ITEM_KEY,
            )
            item = prefix(event, {RAW_ITEM_KEY: product})
        item[LINE_ITEM_TIMESTAMP_KEY] = timestamp_base + index
        item[LINE_ITEM_DISCRIMINANT_KEY] = LINE_ITEM_DISCRIMINANT
        items.append(item)
    return tuple(items)


def expand_completed_order(
    track: Track,
    options: AdapterOptions,
    clock: Callable[[], datetime],
    set_object: Callable[[dict], None],
) -> tuple[Command, PendingItemSet]:
    """Split a completed order into its transaction record and item unit.

    Args:
        track: Completed-order track call
        options: Adapter options (prefixing toggle)
        clock: Current-time provider, used when the call has no timestamp
        set_object: Collector object setter the item unit will call

    Returns:
        (transaction record command, deferred line-item unit); the caller
        must append them to the queue in that order
    """
    event = track.event
    timestamp_base = unix_seconds(track.timestamp or clock())

    properties = {
        key: value for key, value in track.properties.items() if key != PRODUCTS_KEY
    }
    if options.prefix_properties:
        properties = prefix(event, properties)
    transaction = Command.record(event, properties)

    items = build_line_items(event, track.products(), timestamp_base)
    logger.debug(
        "Expanded '%s' into %s line items from base %s",
        event,
        len(items),
        timestamp_base,
    )

    return transaction, PendingItemSet(event=event, items=items, set_object=set_object)
