"""
Item pricing: một variant đóng cho mỗi category + chuyển đổi ở biên storage.

- product  -> SimplePricing {price, compare_price?}
- service  -> RangePricing {min, max, unit?} khi có cả min và max, ngược lại SimplePricing {price, unit?}
- vehicle  -> TieredDurationPricing {daily, weekly?, monthly?, deposit?}
- room     -> DayTypePricing {weekday, weekend?}
- tour     -> PerHeadPricing {price, min_pax?}
- OpenPricing: shape lạ đọc từ DB (dữ liệu sửa tay), giữ nguyên để không mất dữ liệu.

Cột items.pricing lưu JSON "lỏng" (không có key kind) vì chat backend đọc trực tiếp shape này.
"""
import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

Amount = Union[int, float]

DEFAULT_MIN_PAX = 2
DEFAULT_SERVICE_UNIT = "project"
# Số chữ số tối đa của một giá nhập từ form ("1e5000" => bỏ qua, không dựng int khổng lồ).
MAX_AMOUNT_DIGITS = 100

# Tất cả key số mà form admin có thể gửi lên.
PRICING_FIELD_NAMES = (
    "price",
    "compare_price",
    "min",
    "max",
    "daily",
    "weekly",
    "monthly",
    "deposit",
    "weekday",
    "weekend",
    "min_pax",
)


class ItemCategory(str, Enum):
    """Item category: quyết định shape của pricing."""

    PRODUCT = "product"
    SERVICE = "service"
    VEHICLE = "vehicle"
    ROOM = "room"
    TOUR = "tour"


class _PricingBase(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    def to_json(self) -> Dict[str, Any]:
        """Shape lưu vào items.pricing: bỏ kind và các field optional chưa set."""
        return self.model_dump(exclude={"kind"}, exclude_none=True)


class SimplePricing(_PricingBase):
    kind: Literal["simple"] = "simple"
    price: Amount = 0
    compare_price: Optional[Amount] = None
    unit: Optional[str] = None


class RangePricing(_PricingBase):
    kind: Literal["range"] = "range"
    min: Amount = 0
    max: Amount = 0
    unit: Optional[str] = None


class TieredDurationPricing(_PricingBase):
    kind: Literal["tiered_duration"] = "tiered_duration"
    daily: Amount = 0
    weekly: Optional[Amount] = None
    monthly: Optional[Amount] = None
    deposit: Optional[Amount] = None


class DayTypePricing(_PricingBase):
    kind: Literal["day_type"] = "day_type"
    weekday: Amount = 0
    weekend: Optional[Amount] = None

    @property
    def effective_weekend(self) -> Amount:
        """Giá cuối tuần; chưa set thì dùng giá ngày thường."""
        return self.weekend if self.weekend else self.weekday


class PerHeadPricing(_PricingBase):
    kind: Literal["per_head"] = "per_head"
    price: Amount = 0
    min_pax: Optional[int] = None

    @property
    def effective_min_pax(self) -> int:
        return self.min_pax if self.min_pax else DEFAULT_MIN_PAX


class OpenPricing(_PricingBase):
    """Fallback cho shape không nhận ra; to_json trả lại nguyên mapping."""

    kind: Literal["open"] = "open"
    raw: Dict[str, Any] = Field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return dict(self.raw)


Pricing = Annotated[
    Union[
        SimplePricing,
        RangePricing,
        TieredDurationPricing,
        DayTypePricing,
        PerHeadPricing,
        OpenPricing,
    ],
    Field(discriminator="kind"),
]

PRICING_VARIANTS = (
    SimplePricing,
    RangePricing,
    TieredDurationPricing,
    DayTypePricing,
    PerHeadPricing,
    OpenPricing,
)


def coerce_amount(value: Any) -> Optional[Amount]:
    """
    Chuyển giá trị "lỏng" (int, float, Decimal, str số) sang số.
    bool, None, chuỗi rỗng, NaN/inf, chuỗi không phải số => None. Không bao giờ raise.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        if not number.is_finite() or number.adjusted() >= MAX_AMOUNT_DIGITS:
            return None
        if number == number.to_integral_value():
            return int(number)
        as_float = float(number)
        return as_float if math.isfinite(as_float) else None
    return None


def _required(fields: Mapping[str, Any], key: str) -> Amount:
    # Thiếu field bắt buộc => 0 (không chặn save). 0 ở UI nghĩa là "chưa nhập".
    value = coerce_amount(fields.get(key))
    return value if value is not None else 0


def _optional(fields: Mapping[str, Any], key: str) -> Optional[Amount]:
    # Field optional: 0 coi như chưa set.
    value = coerce_amount(fields.get(key))
    return value if value else None


def _unit(fields: Mapping[str, Any], default: str) -> str:
    unit = fields.get("unit")
    if isinstance(unit, str) and unit.strip():
        return unit.strip()
    return default


def resolve_pricing(
    category: Union[ItemCategory, str],
    fields: Optional[Mapping[str, Any]] = None,
    *,
    default_min_pax: int = DEFAULT_MIN_PAX,
    default_service_unit: str = DEFAULT_SERVICE_UNIT,
) -> Pricing:
    """
    Dựng đúng một pricing variant từ category + bag số liệu của form.
    Hàm thuần, không raise: field thiếu/không hợp lệ => 0 (bắt buộc) hoặc bỏ qua (optional).
    Field của category khác không bao giờ lọt vào output.
    """
    fields = fields or {}
    try:
        category = ItemCategory(category)
    except ValueError:
        return SimplePricing(price=_required(fields, "price"))

    if category is ItemCategory.PRODUCT:
        return SimplePricing(
            price=_required(fields, "price"),
            compare_price=_optional(fields, "compare_price"),
        )
    if category is ItemCategory.SERVICE:
        unit = _unit(fields, default_service_unit)
        low = _optional(fields, "min")
        high = _optional(fields, "max")
        # Có đủ min và max => Range, kể cả khi form gửi kèm price.
        if low and high:
            return RangePricing(min=low, max=high, unit=unit)
        return SimplePricing(price=_required(fields, "price"), unit=unit)
    if category is ItemCategory.VEHICLE:
        return TieredDurationPricing(
            daily=_required(fields, "daily"),
            weekly=_optional(fields, "weekly"),
            monthly=_optional(fields, "monthly"),
            deposit=_optional(fields, "deposit"),
        )
    if category is ItemCategory.ROOM:
        weekday = _required(fields, "weekday")
        return DayTypePricing(
            weekday=weekday,
            weekend=_optional(fields, "weekend") or weekday,
        )
    min_pax = _optional(fields, "min_pax")
    return PerHeadPricing(
        price=_required(fields, "price"),
        min_pax=int(min_pax) if min_pax else default_min_pax,
    )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def pricing_from_json(data: Any) -> Pricing:
    """
    Đọc items.pricing (JSON lỏng) thành variant. Thứ tự nhận dạng giống format_price.
    Shape không khớp (hoặc không phải mapping) => OpenPricing, không raise.
    """
    if isinstance(data, PRICING_VARIANTS):
        return data
    if not isinstance(data, Mapping):
        return OpenPricing(raw={} if data is None else {"value": data})

    def num(key: str) -> Optional[Amount]:
        value = data.get(key)
        return value if _is_number(value) else None

    unit = data.get("unit") if isinstance(data.get("unit"), str) else None
    price = num("price")
    if price is not None and "min_pax" in data:
        min_pax = num("min_pax")
        return PerHeadPricing(price=price, min_pax=int(min_pax) if min_pax is not None else None)
    if price is not None:
        return SimplePricing(price=price, compare_price=num("compare_price"), unit=unit)
    if num("min") is not None and num("max") is not None:
        return RangePricing(min=num("min"), max=num("max"), unit=unit)
    if num("daily") is not None:
        return TieredDurationPricing(
            daily=num("daily"),
            weekly=num("weekly"),
            monthly=num("monthly"),
            deposit=num("deposit"),
        )
    if num("weekday") is not None:
        return DayTypePricing(weekday=num("weekday"), weekend=num("weekend"))
    return OpenPricing(raw=dict(data))


def extract_form_fields(pricing: Any) -> Dict[str, Amount]:
    """Ngược lại của resolve_pricing: pricing đã lưu -> bag phẳng cho form edit (thiếu => 0, min_pax => 2)."""
    raw = pricing.to_json() if isinstance(pricing, PRICING_VARIANTS) else pricing
    if not isinstance(raw, Mapping):
        raw = {}
    out: Dict[str, Amount] = {}
    for key in PRICING_FIELD_NAMES:
        value = coerce_amount(raw.get(key))
        out[key] = value if value else 0
    out["min_pax"] = int(out["min_pax"]) if out["min_pax"] else DEFAULT_MIN_PAX
    return out
