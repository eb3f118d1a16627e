"""
Tests cho PriceFormatter / format_price: thứ tự ưu tiên shape, nhóm nghìn theo locale,
placeholder cho dữ liệu lạ, describe_item cho nội dung KB.
"""
from types import SimpleNamespace

import pytest

from app.domain.price_format import PriceFormatter, describe_item, format_price
from app.domain.pricing import DayTypePricing, OpenPricing, PerHeadPricing, resolve_pricing


def test_vehicle_daily_rate() -> None:
    assert format_price({"daily": 150000, "weekly": 900000}) == "Rp 150.000/hari"


def test_tour_per_pax_with_min() -> None:
    assert format_price({"price": 500000, "min_pax": 4}) == "Rp 500.000/pax (min 4)"


def test_compare_price() -> None:
    assert format_price({"price": 90000, "compare_price": 120000}) == "Rp 90.000 (was Rp 120.000)"


def test_plain_price() -> None:
    assert format_price({"price": 1250000}) == "Rp 1.250.000"


def test_range() -> None:
    assert format_price({"min": 1000000, "max": 5000000, "unit": "project"}) == "Rp 1.000.000 - Rp 5.000.000"


def test_room_formats_weekday_only() -> None:
    assert format_price({"weekday": 450000}) == "Rp 450.000/malam"
    assert format_price({"weekday": 450000, "weekend": 600000}) == "Rp 450.000/malam"


def test_min_pax_wins_over_compare_price() -> None:
    assert format_price({"price": 10, "min_pax": 2, "compare_price": 20}) == "Rp 10/pax (min 2)"


def test_zero_min_pax_and_compare_price_are_ignored() -> None:
    assert format_price({"price": 10, "min_pax": 0, "compare_price": 0}) == "Rp 10"


def test_price_wins_over_daily() -> None:
    assert format_price({"price": 10, "daily": 20}) == "Rp 10"


def test_accepts_variants() -> None:
    assert format_price(PerHeadPricing(price=500000, min_pax=4)) == "Rp 500.000/pax (min 4)"
    assert format_price(DayTypePricing(weekday=450000)) == "Rp 450.000/malam"
    assert format_price(resolve_pricing("vehicle", {"daily": 150000})) == "Rp 150.000/hari"


@pytest.mark.parametrize(
    "pricing",
    [
        None,
        {},
        "free",
        42,
        {"price": "abc"},
        {"min": 10},
        {"daily": None},
        {"weekday": True},
        {"hourly": 25000},
        OpenPricing(raw={"hourly": 25000}),
    ],
)
def test_unrecognised_input_gives_placeholder(pricing) -> None:
    assert format_price(pricing) == "-"


def test_non_numeric_field_is_skipped() -> None:
    assert format_price({"price": "abc", "daily": 150000}) == "Rp 150.000/hari"


def test_half_up_rounding() -> None:
    assert format_price({"price": 999.5}) == "Rp 1.000"
    assert format_price({"price": 1000.49}) == "Rp 1.000"


def test_amount_beyond_decimal_precision() -> None:
    assert format_price({"price": 10**30}) == "Rp 1" + ".000" * 10
    assert format_price({"price": 1e30, "min_pax": 4}) == "Rp 1" + ".000" * 10 + "/pax (min 4)"
    assert PriceFormatter(locale="en").format({"daily": 10**30 + 1}) == "Rp 1" + ",000" * 9 + ",001/day"


def test_non_finite_amount_is_skipped() -> None:
    assert format_price({"price": float("inf")}) == "-"
    assert format_price({"price": float("nan"), "daily": 150000}) == "Rp 150.000/hari"


def test_english_locale() -> None:
    formatter = PriceFormatter(locale="en")
    assert formatter.format({"daily": 150000}) == "Rp 150,000/day"
    assert formatter.format({"weekday": 450000}) == "Rp 450,000/night"


def test_custom_symbol_and_placeholder() -> None:
    formatter = PriceFormatter(currency_symbol="IDR", placeholder="Hubungi kami")
    assert formatter.format({"price": 5000}) == "IDR 5.000"
    assert formatter.format(None) == "Hubungi kami"


def test_unsupported_locale() -> None:
    with pytest.raises(ValueError, match="unsupported_price_locale"):
        PriceFormatter(locale="fr")


def test_from_settings() -> None:
    settings = SimpleNamespace(currency_symbol="$", price_locale="en", no_price_placeholder="n/a")
    formatter = PriceFormatter.from_settings(settings)
    assert formatter.format({"price": 1234567}) == "$ 1,234,567"
    assert formatter.format({}) == "n/a"


def test_idempotent_and_no_mutation() -> None:
    pricing = {"price": 500000, "min_pax": 4}
    snapshot = dict(pricing)
    first = format_price(pricing)
    assert format_price(pricing) == first
    assert pricing == snapshot


def test_breakdown_lists_tiers() -> None:
    formatter = PriceFormatter()
    lines = formatter.breakdown({"daily": 150000, "weekly": 900000, "deposit": 500000})
    assert lines == ["Mingguan: Rp 900.000", "Deposit: Rp 500.000"]


def test_describe_item() -> None:
    text = describe_item(
        "Honda Vario 125",
        "vehicle",
        {"daily": 150000, "weekly": 900000},
        description="Matic, helm 2",
        short_description="Skuter harian",
    )
    assert text.splitlines() == [
        "Honda Vario 125",
        "Skuter harian",
        "Matic, helm 2",
        "Kategori: vehicle",
        "Harga: Rp 150.000/hari",
        "Mingguan: Rp 900.000",
    ]
