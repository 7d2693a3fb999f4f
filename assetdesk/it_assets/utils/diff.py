# -*- coding: utf-8 -*-
"""
So sánh 2 snapshot của Employee -> diff theo từng field.

- serialize_value(): chuẩn hoá giá trị về text để so sánh (None giữ nguyên là sentinel "chưa có").
- compute_diff(): chỉ giữ field có text khác nhau, bỏ updated_at.
- render_changes(): đổi tên field sang nhãn hiển thị, "true"/"false" -> "Yes"/"No".
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from django.core.serializers.json import DjangoJSONEncoder

Diff = Dict[str, Dict[str, Optional[str]]]

DEFAULT_EXCLUDED = frozenset({"updated_at"})
BOOKKEEPING_FIELDS = frozenset({"id", "created_at", "updated_at"})

NOT_SET = "Not set"

FIELD_LABELS: Dict[str, str] = {
    "employee_code": "Employee Code",
    "name": "Name",
    "username": "Username",
    "email": "Email",
    "department": "Department",
    "section": "Section",
    "location": "Location",
    "computer_name": "Computer Name",
    "computer_serial": "Computer Serial",
    "ip_address": "IP Address",
    "specs": "Specifications",
    "led_model": "LED Model",
    "led_serial": "LED Serial",
    "printer_model": "Printer Model",
    "printer_serial": "Printer Serial",
    "scanner_model": "Scanner Model",
    "scanner_serial": "Scanner Serial",
    "keyboard": "Keyboard",
    "mouse": "Mouse",
    "internet_access": "Internet Access",
    "usb_access": "USB Access",
    "last_pm": "Last PM",
    "extension_number": "Extension Number",
    "custom_peripherals": "Custom Peripherals",
}


@dataclass(frozen=True)
class ChangeLine:
    field: str
    label: str
    old: str
    new: str


def serialize_value(value: Any) -> Optional[str]:
    """None -> None; bool -> "true"/"false"; còn lại -> text ổn định. Không bao giờ raise."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    try:
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(value, sort_keys=True, separators=(",", ":"), cls=DjangoJSONEncoder, ensure_ascii=False)
        return str(value)
    except Exception:
        return repr(value)


def _ordered_keys(old: Mapping[str, Any], new: Mapping[str, Any]) -> List[str]:
    keys = list(old.keys())
    keys.extend(k for k in new.keys() if k not in old)
    return keys


def compute_diff(
    old: Optional[Mapping[str, Any]],
    new: Optional[Mapping[str, Any]],
    exclude: Iterable[str] = DEFAULT_EXCLUDED,
) -> Optional[Diff]:
    """
    Trả về {field: {"old": str|None, "new": str|None}} cho các field khác nhau.
    Insert/delete (thiếu 1 phía) -> None, không tính diff.
    """
    if old is None or new is None:
        return None
    skip = set(exclude) | set(DEFAULT_EXCLUDED)
    out: Diff = {}
    for key in _ordered_keys(old, new):
        if key in skip:
            continue
        o = serialize_value(old.get(key))
        n = serialize_value(new.get(key))
        if o != n:
            out[key] = {"old": o, "new": n}
    return out


def display_value(text: Optional[str]) -> str:
    if text is None:
        return NOT_SET
    if text == "true":
        return "Yes"
    if text == "false":
        return "No"
    return text


def render_changes(diff: Optional[Diff], labels: Mapping[str, str] = FIELD_LABELS) -> List[ChangeLine]:
    lines: List[ChangeLine] = []
    for field, pair in (diff or {}).items():
        lines.append(ChangeLine(
            field=field,
            label=labels.get(field) or field,
            old=display_value(pair.get("old")),
            new=display_value(pair.get("new")),
        ))
    return lines
