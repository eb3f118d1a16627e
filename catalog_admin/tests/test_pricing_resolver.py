"""
Tests cho app.domain.pricing: resolve_pricing theo category, decode JSON lỏng,
bag phẳng cho form edit. Hàm thuần, không cần DB.
"""
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from app.domain.price_format import format_price
from app.domain.pricing import (
    DayTypePricing,
    ItemCategory,
    OpenPricing,
    PerHeadPricing,
    Pricing,
    RangePricing,
    SimplePricing,
    TieredDurationPricing,
    coerce_amount,
    extract_form_fields,
    pricing_from_json,
    resolve_pricing,
)

FULL_BAG = {
    "price": 100,
    "compare_price": 120,
    "min": 10,
    "max": 20,
    "daily": 30,
    "weekly": 180,
    "monthly": 600,
    "deposit": 50,
    "weekday": 40,
    "weekend": 45,
    "min_pax": 3,
    "unit": "hour",
}


def test_product_keeps_only_price_and_compare_price() -> None:
    pricing = resolve_pricing(ItemCategory.PRODUCT, FULL_BAG)
    assert isinstance(pricing, SimplePricing)
    assert pricing.to_json() == {"price": 100, "compare_price": 120}


def test_product_without_compare_price() -> None:
    pricing = resolve_pricing("product", {"price": 90000, "compare_price": 0})
    assert pricing.to_json() == {"price": 90000}


def test_service_with_min_and_max_is_range_even_if_price_given() -> None:
    pricing = resolve_pricing("service", {"price": 5, "min": 1000000, "max": 5000000})
    assert isinstance(pricing, RangePricing)
    assert pricing.to_json() == {"min": 1000000, "max": 5000000, "unit": "project"}


def test_service_without_range_is_simple_with_unit() -> None:
    pricing = resolve_pricing("service", {"price": 250000, "min": 100000, "unit": "hour"})
    assert isinstance(pricing, SimplePricing)
    assert pricing.to_json() == {"price": 250000, "unit": "hour"}


def test_service_default_unit_comes_from_argument() -> None:
    pricing = resolve_pricing("service", {"price": 1}, default_service_unit="session")
    assert pricing.unit == "session"


def test_vehicle_tiers() -> None:
    pricing = resolve_pricing("vehicle", FULL_BAG)
    assert isinstance(pricing, TieredDurationPricing)
    assert pricing.to_json() == {"daily": 30, "weekly": 180, "monthly": 600, "deposit": 50}


def test_vehicle_optional_tiers_left_out_when_zero() -> None:
    pricing = resolve_pricing("vehicle", {"daily": 150000, "weekly": 900000, "monthly": 0})
    assert pricing.to_json() == {"daily": 150000, "weekly": 900000}


def test_room_weekend_defaults_to_weekday() -> None:
    pricing = resolve_pricing("room", {"weekday": 450000})
    assert isinstance(pricing, DayTypePricing)
    assert pricing.to_json() == {"weekday": 450000, "weekend": 450000}


def test_room_keeps_explicit_weekend() -> None:
    pricing = resolve_pricing("room", FULL_BAG)
    assert pricing.to_json() == {"weekday": 40, "weekend": 45}


def test_tour_min_pax_defaults_to_two() -> None:
    pricing = resolve_pricing("tour", {"price": 500000})
    assert isinstance(pricing, PerHeadPricing)
    assert pricing.to_json() == {"price": 500000, "min_pax": 2}


def test_tour_keeps_min_pax() -> None:
    pricing = resolve_pricing("tour", {"price": 500000, "min_pax": "4"})
    assert pricing.to_json() == {"price": 500000, "min_pax": 4}


def test_tour_default_min_pax_is_configurable() -> None:
    pricing = resolve_pricing("tour", {"price": 1}, default_min_pax=5)
    assert pricing.min_pax == 5


@pytest.mark.parametrize("category", [c.value for c in ItemCategory])
def test_never_leaks_foreign_fields(category: str) -> None:
    """Output chỉ chứa field của variant đã chọn."""
    allowed = {
        "product": {"price", "compare_price"},
        "service": {"min", "max", "unit", "price"},
        "vehicle": {"daily", "weekly", "monthly", "deposit"},
        "room": {"weekday", "weekend"},
        "tour": {"price", "min_pax"},
    }[category]
    assert set(resolve_pricing(category, FULL_BAG).to_json()) <= allowed


@pytest.mark.parametrize("category", [c.value for c in ItemCategory] + ["unknown"])
def test_total_on_empty_and_garbage_input(category: str) -> None:
    """Không raise với bag rỗng / rác; field bắt buộc thiếu => 0."""
    huge = {"price": "1e30", "daily": 10**30, "weekday": "1e30", "min": 1e30, "max": "1e5000", "min_pax": "1e30"}
    for bag in (None, {}, {"price": "abc", "daily": None, "weekday": [], "min_pax": True}, huge):
        pricing = resolve_pricing(category, bag)
        assert pricing.kind != "open"
        assert isinstance(format_price(pricing), str)


def test_unknown_category_falls_back_to_simple() -> None:
    pricing = resolve_pricing("spaceship", {"price": 7, "daily": 3})
    assert pricing == SimplePricing(price=7)


def test_coerce_amount() -> None:
    assert coerce_amount(5) == 5
    assert coerce_amount("150000") == 150000
    assert coerce_amount("12.5") == 12.5
    assert coerce_amount(Decimal("3.0")) == 3
    assert coerce_amount(" ") is None
    assert coerce_amount("nan") is None
    assert coerce_amount("inf") is None
    assert coerce_amount(True) is None
    assert coerce_amount([1]) is None
    assert coerce_amount("1e30") == 10**30
    assert coerce_amount("1e5000") is None
    assert coerce_amount(float("inf")) is None


def test_pricing_from_json_detects_shapes() -> None:
    assert pricing_from_json({"price": 500000, "min_pax": 4}) == PerHeadPricing(price=500000, min_pax=4)
    assert pricing_from_json({"price": 90, "compare_price": 120}).kind == "simple"
    assert pricing_from_json({"min": 1, "max": 2, "unit": "project"}).kind == "range"
    assert pricing_from_json({"daily": 150000, "weekly": 900000}).kind == "tiered_duration"
    assert pricing_from_json({"weekday": 450000}).kind == "day_type"


def test_pricing_from_json_keeps_unknown_shape() -> None:
    raw = {"hourly": 25000, "note": "call us"}
    pricing = pricing_from_json(raw)
    assert isinstance(pricing, OpenPricing)
    assert pricing.to_json() == raw


def test_pricing_from_json_non_mapping() -> None:
    assert pricing_from_json(None).to_json() == {}
    assert pricing_from_json("free").to_json() == {"value": "free"}


def test_effective_weekend_for_decoded_row() -> None:
    pricing = pricing_from_json({"weekday": 450000})
    assert pricing.weekend is None
    assert pricing.effective_weekend == 450000


def test_extract_form_fields_fills_zero_and_default_min_pax() -> None:
    form = extract_form_fields({"daily": 150000, "weekly": 900000})
    assert form["daily"] == 150000
    assert form["weekly"] == 900000
    assert form["price"] == 0
    assert form["weekend"] == 0
    assert form["min_pax"] == 2


def test_extract_form_fields_round_trips_through_resolver() -> None:
    stored = resolve_pricing("tour", {"price": 500000, "min_pax": 4})
    again = resolve_pricing("tour", extract_form_fields(stored))
    assert again == stored


def test_discriminated_union_validates_by_kind() -> None:
    adapter = TypeAdapter(Pricing)
    assert isinstance(adapter.validate_python({"kind": "range", "min": 1, "max": 2}), RangePricing)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "barter"})


def test_variants_are_frozen() -> None:
    pricing = SimplePricing(price=1)
    with pytest.raises(ValidationError):
        pricing.price = 2
