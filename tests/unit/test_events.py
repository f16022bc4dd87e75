"""Unit tests for canonical event models."""
from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from src.kmq_core.schemas.events import (
    Alias,
    CanonicalCall,
    Identify,
    Page,
    PageContext,
    Track,
)


def test_page_full_name_combines_category_and_name():
    """Test full name is '<category> <name>' when both are present."""
    assert Page(category="Docs", name="Setup").full_name == "Docs Setup"
    assert Page(name="Setup").full_name == "Setup"
    assert Page(category="Docs").full_name is None


def test_page_properties_merge_context_and_overrides():
    """Test context defaults are overridden by explicit properties."""
    page = Page(
        name="Home",
        category="Landing",
        properties={"title": "Custom"},
        context=PageContext(
            path="/", referrer="https://ref.example", title="Default", url="https://x.io/"
        ),
    )

    assert page.page_properties() == {
        "path": "/",
        "referrer": "https://ref.example",
        "search": "",
        "title": "Custom",
        "url": "https://x.io/",
        "name": "Home",
        "category": "Landing",
    }


def test_page_to_track_names_event():
    """Test derived track call event name and timestamp."""
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    track = Page(name="Home", timestamp=stamp).to_track("Home")

    assert track.event == "Viewed Home Page"
    assert track.properties["name"] == "Home"
    assert track.timestamp == stamp


def test_track_revenue_from_properties():
    """Test revenue is read and normalized from properties."""
    assert Track(event="event", properties={"revenue": "$9.99"}).revenue() == 9.99
    assert Track(event="event").revenue() is None


def test_track_revenue_falls_back_to_total_for_orders():
    """Test completed orders use total when revenue is absent."""
    order = Track(event="Completed Order", properties={"total": 166})
    other = Track(event="checkout", properties={"total": 166})

    assert order.revenue() == 166.0
    assert other.revenue() is None


@pytest.mark.parametrize(
    "event",
    [
        "completed order",
        "Completed Order",
        "completedOrder",
        "COMPLETED ORDER",
        "completed_order",
        "Completed_Order",
        "_completed_order_",
    ],
)
def test_track_completed_order_detection(event):
    """Test completed-order naming variants are recognized."""
    assert Track(event=event).is_completed_order


def test_track_products_defaults_to_empty():
    """Test missing or malformed product lists give an empty list."""
    assert Track(event="completed order").products() == []
    assert Track(event="completed order", properties={"products": "x"}).products() == []


def test_events_are_immutable():
    """Test canonical events reject attribute assignment."""
    track = Track(event="event")

    with pytest.raises(ValidationError):
        track.event = "other"


def test_canonical_call_discriminates_on_type():
    """Test JSON payloads parse to the matching model."""
    adapter = TypeAdapter(CanonicalCall)

    identify = adapter.validate_python({"type": "identify", "userId": "id"})
    alias = adapter.validate_python({"type": "alias", "to": "new", "from": "old"})

    assert isinstance(identify, Identify)
    assert identify.user_id == "id"
    assert isinstance(alias, Alias)
    assert alias.from_ == "old"


@pytest.mark.parametrize(
    "event", ["completed orders", "order completed", "completed__order"]
)
def test_track_other_events_are_not_orders(event):
    """Test near-miss names stay plain track calls."""
    assert not Track(event=event).is_completed_order
