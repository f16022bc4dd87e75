"""Unit tests for property mapping helpers."""
import pytest

from src.kmq_core.translate.mapping import (
    BILLING_AMOUNT_KEY,
    REVENUE_MAPPING,
    alias_properties,
    normalize_revenue,
    prefix,
)


def test_prefix_renames_every_key():
    """Test keys become '<event> - <key>'."""
    result = prefix("viewed product", {"sku": 1, "name": "item", "price": 9})

    assert result == {
        "viewed product - sku": 1,
        "viewed product - name": "item",
        "viewed product - price": 9,
    }


def test_prefix_keeps_billing_amount_verbatim():
    """Test the reserved revenue key is never renamed."""
    result = prefix("event", {BILLING_AMOUNT_KEY: 9.99, "revenue": 9.99})

    assert result == {"Billing Amount": 9.99, "event - revenue": 9.99}


def test_prefix_preserves_key_count_and_nested_references():
    """Test no keys are dropped and nested values are not copied."""
    products = [{"sku": "a"}]
    properties = {"products": products, "tax": 16, "total": 166}

    result = prefix("completed order", properties)

    assert len(result) == len(properties)
    assert result["completed order - products"] is products


def test_prefix_is_idempotent_and_pure():
    """Test repeated calls give identical output without mutating input."""
    properties = {"title": "Home", "url": "https://example.com"}

    first = prefix("Viewed Home Page", properties)
    second = prefix("Viewed Home Page", properties)

    assert first == second
    assert properties == {"title": "Home", "url": "https://example.com"}


def test_prefix_empty_properties():
    """Test empty input yields empty output."""
    assert prefix("event", {}) == {}


def test_alias_properties_renames_revenue():
    """Test revenue is aliased to Billing Amount and other keys kept."""
    result = alias_properties({"revenue": 9.99, "plan": "pro"}, REVENUE_MAPPING)

    assert result == {"Billing Amount": 9.99, "plan": "pro"}


def test_normalize_revenue_numbers():
    """Test numeric revenue is converted to float."""
    assert normalize_revenue(10) == 10.0
    assert normalize_revenue(9.99) == 9.99


def test_normalize_revenue_currency_strings():
    """Test currency formatting is stripped from strings."""
    assert normalize_revenue("$1,024.50") == 1024.5
    assert normalize_revenue(" 12 ") == 12.0


def test_normalize_revenue_invalid_values():
    """Test unparseable values give None."""
    assert normalize_revenue(None) is None
    assert normalize_revenue(True) is None
    assert normalize_revenue("free") is None
    assert normalize_revenue({"amount": 1}) is None


@pytest.mark.parametrize(
    "value", ["NaN", "nan", "inf", "-Infinity", float("nan"), float("inf")]
)
def test_normalize_revenue_non_finite(value):
    """Test NaN and infinities are discarded."""
    assert normalize_revenue(value) is None
