"""
Render pricing thành một chuỗi tiền tệ cho list/detail view và nội dung KB.

Thứ tự ưu tiên (shape đầu tiên khớp sẽ thắng):
  1. price + min_pax (truthy)        -> "Rp 500.000/pax (min 4)"
  2. price + compare_price (truthy)  -> "Rp 90.000 (was Rp 120.000)"
  3. price                           -> "Rp 90.000"
  4. min + max                       -> "Rp 1.000.000 - Rp 5.000.000"
  5. daily                           -> "Rp 150.000/hari"
  6. weekday                         -> "Rp 450.000/malam"
  7. còn lại                         -> placeholder
Dữ liệu trong DB có thể bị sửa tay nên formatter luôn phòng thủ: giá trị không phải số coi như không có.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.domain.pricing import PRICING_VARIANTS, Amount

# locale -> (dấu phân cách nghìn, nhãn)
LOCALES: Dict[str, Tuple[str, Dict[str, str]]] = {
    "id": (
        ".",
        {
            "day": "hari",
            "night": "malam",
            "was": "was",
            "price": "Harga",
            "category": "Kategori",
            "weekly": "Mingguan",
            "monthly": "Bulanan",
            "deposit": "Deposit",
            "weekend": "Akhir pekan",
            "min_pax": "Minimal peserta",
            "unit": "Satuan",
        },
    ),
    "en": (
        ",",
        {
            "day": "day",
            "night": "night",
            "was": "was",
            "price": "Price",
            "category": "Category",
            "weekly": "Weekly",
            "monthly": "Monthly",
            "deposit": "Deposit",
            "weekend": "Weekend",
            "min_pax": "Minimum participants",
            "unit": "Unit",
        },
    ),
}


def _num(fields: Mapping[str, Any], key: str) -> Optional[Amount]:
    value = fields.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _as_mapping(pricing: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(pricing, PRICING_VARIANTS):
        return pricing.to_json()
    if isinstance(pricing, Mapping):
        return pricing
    return None


class PriceFormatter:
    """Formatter cấu hình theo currency symbol + locale. Không state, gọi lại bao nhiêu lần cũng ra cùng chuỗi."""

    def __init__(
        self,
        currency_symbol: str = "Rp",
        locale: str = "id",
        placeholder: str = "-",
    ) -> None:
        if locale not in LOCALES:
            raise ValueError("unsupported_price_locale")
        self.currency_symbol = currency_symbol
        self.locale = locale
        self.placeholder = placeholder
        self._separator, self._labels = LOCALES[locale]

    @classmethod
    def from_settings(cls, settings) -> "PriceFormatter":
        return cls(
            currency_symbol=settings.currency_symbol,
            locale=settings.price_locale,
            placeholder=settings.no_price_placeholder,
        )

    def label(self, key: str) -> str:
        return self._labels[key]

    def currency(self, amount: Amount) -> str:
        """Số nguyên, nhóm nghìn theo locale, không phần thập phân (làm tròn half-up)."""
        # to_integral_value không phụ thuộc precision của context (quantize lỗi khi > 28 chữ số).
        rounded = int(Decimal(str(amount)).to_integral_value(rounding=ROUND_HALF_UP))
        grouped = f"{abs(rounded):,}".replace(",", self._separator)
        sign = "-" if rounded < 0 else ""
        return f"{self.currency_symbol} {sign}{grouped}"

    def format(self, pricing: Any) -> str:
        fields = _as_mapping(pricing)
        if fields is None:
            return self.placeholder

        price = _num(fields, "price")
        if price is not None:
            min_pax = _num(fields, "min_pax")
            if min_pax:
                return f"{self.currency(price)}/pax (min {_plain(min_pax)})"
            compare_price = _num(fields, "compare_price")
            if compare_price:
                return f"{self.currency(price)} ({self.label('was')} {self.currency(compare_price)})"
            return self.currency(price)

        low, high = _num(fields, "min"), _num(fields, "max")
        if low is not None and high is not None:
            return f"{self.currency(low)} - {self.currency(high)}"

        daily = _num(fields, "daily")
        if daily is not None:
            return f"{self.currency(daily)}/{self.label('day')}"

        weekday = _num(fields, "weekday")
        if weekday is not None:
            return f"{self.currency(weekday)}/{self.label('night')}"

        return self.placeholder

    def breakdown(self, pricing: Any) -> List[str]:
        """Các dòng chi tiết ngoài giá chính (tier thuê xe, cuối tuần, đơn vị...). Dùng cho nội dung KB."""
        fields = _as_mapping(pricing) or {}
        lines: List[str] = []
        for key in ("weekly", "monthly", "deposit", "weekend"):
            amount = _num(fields, key)
            if amount:
                lines.append(f"{self.label(key)}: {self.currency(amount)}")
        min_pax = _num(fields, "min_pax")
        if min_pax:
            lines.append(f"{self.label('min_pax')}: {_plain(min_pax)}")
        unit = fields.get("unit")
        if isinstance(unit, str) and unit:
            lines.append(f"{self.label('unit')}: {unit}")
        return lines


def _plain(value: Amount) -> str:
    if isinstance(value, int):
        return str(value)
    return str(int(value)) if value.is_integer() else str(value)


_default_formatter = PriceFormatter()


def format_price(pricing: Any, formatter: Optional[PriceFormatter] = None) -> str:
    """Format pricing (variant, mapping hoặc None) bằng formatter truyền vào, mặc định Rp/id."""
    return (formatter or _default_formatter).format(pricing)


def describe_item(
    name: str,
    category: str,
    pricing: Any,
    formatter: Optional[PriceFormatter] = None,
    description: Optional[str] = None,
    short_description: Optional[str] = None,
) -> str:
    """
    Nội dung ngôn ngữ tự nhiên cho bản ghi KB auto-sync của item:
    tên, mô tả, category, giá (format_price) và chi tiết các tier.
    """
    formatter = formatter or _default_formatter
    parts: List[str] = [name.strip()]
    for text in (short_description, description):
        if text and text.strip() and text.strip() not in parts:
            parts.append(text.strip())
    parts.append(f"{formatter.label('category')}: {category}")
    parts.append(f"{formatter.label('price')}: {formatter.format(pricing)}")
    parts.extend(formatter.breakdown(pricing))
    return "\n".join(parts)
