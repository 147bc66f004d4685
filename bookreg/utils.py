import re
from datetime import datetime
from typing import Callable, Mapping, Optional

Sanitizer = Callable[[str], str]

def digits_only(s: str) -> str:
    return re.sub(r"[^0-9]", "", s or "")

# field -> sanitizer; fields without an entry are stored as typed
DEFAULT_SANITIZERS: dict[str, Sanitizer] = {
    "book_id": digits_only,
    "isbn": digits_only,
    "price": digits_only,
}

def normalize_numeric_field(field: str, raw: str, sanitizers: Optional[Mapping[str, Sanitizer]] = None) -> str:
    table = DEFAULT_SANITIZERS if sanitizers is None else sanitizers
    fn = table.get(field)
    return fn(raw) if fn else raw

def format_thousands(digits: str) -> str:
    if not digits:
        return ""
    return re.sub(r"\B(?=(\d{3})+(?!\d))", ",", digits_only(digits))

def format_date_mask(partial: str) -> str:
    """
    Progressive date mask for free-typed dates:
      '2024'     -> '2024'
      '202401'   -> '2024-01'
      '20240115' -> '2024-01-15'
    Non-digits are ignored and anything past eight digits is dropped.
    """
    d = digits_only(partial)[:8]
    if len(d) <= 4:
        return d
    if len(d) <= 6:
        return f"{d[:4]}-{d[4:]}"
    return f"{d[:4]}-{d[4:6]}-{d[6:]}"

def apply_date_mask(previous: str, new: str) -> str:
    # Only mask on insertion so backspacing over a '-' is not undone.
    if len(new or "") > len(previous or ""):
        return format_date_mask(new)
    return new

def format_submitted_at(now: datetime) -> str:
    """Local timestamp in Korean locale style, e.g. '2024. 1. 15. 오후 3:04:05'."""
    meridiem = "오전" if now.hour < 12 else "오후"
    hour = now.hour % 12 or 12
    return f"{now.year}. {now.month}. {now.day}. {meridiem} {hour}:{now.minute:02d}:{now.second:02d}"

def display_value(field: str, value: str) -> str:
    """Grid text for a stored value; only price is reformatted."""
    return format_thousands(value) if field == "price" else value
