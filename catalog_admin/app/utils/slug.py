"""Sinh slug từ tên: chữ thường, khoảng trắng -> "-", bỏ ký tự ngoài [a-z0-9-]."""
import re

_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG = re.compile(r"[^a-z0-9-]")


def slugify(name: str) -> str:
    """
    "Toyota Avanza 2024" -> "toyota-avanza-2024".
    Tên toàn ký tự đặc biệt có thể cho ra chuỗi rỗng; caller tự xử lý.
    """
    return _NOT_SLUG.sub("", _WHITESPACE.sub("-", name.strip().lower()))
