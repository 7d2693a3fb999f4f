# -*- coding: utf-8 -*-
"""
Bulk import Employee từ file Excel (.xlsx) hoặc CSV.

Tên cột trong file thực tế có nhiều biến thể (sai chính tả, hoa/thường...):
mỗi field có một danh sách alias theo thứ tự ưu tiên (FIELD_ALIASES), pick_column() chọn cột khớp đầu tiên.
Các cột "Seriel Number"/"Serial Number" lặp lại được gán lần lượt cho computer, LED, printer, scanner.
"""
from __future__ import annotations
import csv
import io
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils.dateparse import parse_date, parse_datetime
from openpyxl import load_workbook

from it_assets.serializers.employee_serializer import EmployeeWriteSerializer
from it_assets.services.employee_service import create_employee

logger = logging.getLogger(__name__)

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "employee_code": ("Employee Code", "Emp Code", "Employee ID", "Code"),
    "name": ("Name", "Full Name", "Employee Name"),
    "username": ("Username", "User Name", "User"),
    "email": ("Email ID", "Email", "E-mail", "Mail"),
    "department": ("Department", "Dept"),
    "section": ("Section",),
    "location": ("Location", "Site", "Branch"),
    "computer_name": ("computer name", "PC Name", "Hostname"),
    "computer_serial": ("Computer Serial", "PC Serial"),
    "ip_address": ("IP Address", "IP"),
    "specs": ("specification", "Specifications", "Specs"),
    "led_model": ("LED", "LED/LCD Model", "LED Model", "LCD", "Monitor"),
    "led_serial": ("LED/LCD Serial", "LED Serial", "Monitor Serial"),
    "printer_model": ("Pinter", "Printer", "Printer Model"),
    "printer_serial": ("Printer Serial",),
    "scanner_model": ("Scanner", "Scanner Model"),
    "scanner_serial": ("Scanner Serial",),
    "keyboard": ("Keboard", "Keyboard"),
    "mouse": ("Mouse",),
    "internet_access": ("Internet Access", "Internet"),
    "usb_access": ("USB Access", "USB"),
    "last_pm": ("Last PM", "Last PM Date", "PM Date"),
    "extension_number": ("Ext Number", "Extension Number", "Extension", "Ext"),
}

SERIAL_ALIASES: Tuple[str, ...] = ("Seriel Number", "Serial Number", "Serial No", "Serial", "S/N")
# thứ tự gán cho các cột serial lặp lại
SERIAL_SLOTS: Tuple[str, ...] = ("computer_serial", "led_serial", "printer_serial", "scanner_serial")

BOOL_FIELDS = ("internet_access", "usb_access")
TRUE_WORDS = {"YES", "TRUE", "Y", "1"}

_EXCEL_EPOCH = date(1899, 12, 30)


@dataclass
class ImportResult:
    total: int = 0
    success: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)


# ---------- pure helpers ----------
def normalize_header(value: Any) -> str:
    text = "" if value is None else str(value)
    return re.sub(r"\s+", " ", text).strip().casefold()

def pick_column(headers: Sequence[Any], logical_field: str, aliases: Optional[Dict[str, Tuple[str, ...]]] = None) -> Optional[int]:
    """
    Trả về index cột đầu tiên khớp alias (theo thứ tự alias), None nếu không có.
    """
    normalized = [normalize_header(h) for h in headers]
    for alias in (aliases or FIELD_ALIASES).get(logical_field, ()):
        target = normalize_header(alias)
        if target in normalized:
            return normalized.index(target)
    return None

def serial_columns(headers: Sequence[Any]) -> List[int]:
    targets = {normalize_header(a) for a in SERIAL_ALIASES}
    return [i for i, h in enumerate(headers) if normalize_header(h) in targets]

def build_column_map(headers: Sequence[Any]) -> Dict[str, int]:
    mapping: Dict[str, int] = {}
    for logical_field in FIELD_ALIASES:
        idx = pick_column(headers, logical_field)
        if idx is not None:
            mapping[logical_field] = idx
    free_slots = [s for s in SERIAL_SLOTS if s not in mapping]
    for slot, idx in zip(free_slots, serial_columns(headers)):
        mapping[slot] = idx
    return mapping

def convert_to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().upper() in TRUE_WORDS

def parse_excel_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return _EXCEL_EPOCH + timedelta(days=int(value))
    text = str(value).strip()
    parsed = parse_date(text)
    if parsed:
        return parsed
    dt = parse_datetime(text)
    if dt:
        return dt.date()
    for fmt in ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d", "%d-%m-%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None

def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()

def name_from_username(username: str) -> str:
    """john.doe -> John Doe"""
    parts = [p for p in (username or "").split(".") if p]
    return " ".join(p[:1].upper() + p[1:] for p in parts)

def row_to_employee_data(row: Sequence[Any], mapping: Dict[str, int]) -> Dict[str, Any]:
    def get(key: str) -> Any:
        idx = mapping.get(key)
        return row[idx] if idx is not None and idx < len(row) else None

    data: Dict[str, Any] = {}
    for key in mapping:
        if key in BOOL_FIELDS or key == "last_pm":
            continue
        data[key] = cell_text(get(key))

    username = data.get("username", "")
    if not data.get("name"):
        data["name"] = name_from_username(username) or username

    data["internet_access"] = convert_to_boolean(get("internet_access"))
    usb = get("usb_access")
    data["usb_access"] = convert_to_boolean(usb) if cell_text(usb) else None
    data["last_pm"] = parse_excel_date(get("last_pm"))
    return data


# ---------- file readers ----------
def read_rows(file_obj, filename: str) -> Tuple[List[Any], List[List[Any]]]:
    name = (filename or "").lower()
    if name.endswith(".csv"):
        raw = file_obj.read()
        text = raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw
        rows = list(csv.reader(io.StringIO(text)))
    elif name.endswith((".xlsx", ".xlsm")):
        wb = load_workbook(file_obj, read_only=True, data_only=True)
        try:
            ws = wb.worksheets[0]
            rows = [list(r) for r in ws.iter_rows(values_only=True)]
        finally:
            wb.close()
    else:
        raise ValueError("Unsupported file type; upload .xlsx or .csv")
    if not rows:
        return [], []
    return list(rows[0]), rows[1:]


def _is_blank(row: Sequence[Any]) -> bool:
    return all(cell_text(c) == "" for c in row)


def _serializer_errors(errors: Dict[str, Any]) -> str:
    return "; ".join(f"{field}: {' '.join(str(m) for m in msgs)}" for field, msgs in errors.items())


def import_employees(file_obj, filename: str, *, user, ip: Optional[str] = None) -> ImportResult:
    """
    Mỗi dòng tạo 1 Employee qua create_employee() (có audit). Dòng lỗi được ghi vào errors, không dừng cả file.
    """
    headers, rows = read_rows(file_obj, filename)
    mapping = build_column_map(headers)
    logger.info("[import] %s: %d row(s), matched columns=%s", filename, len(rows), sorted(mapping))

    result = ImportResult()
    for offset, row in enumerate(rows, start=2):
        if _is_blank(row):
            continue
        result.total += 1
        ser = EmployeeWriteSerializer(data=row_to_employee_data(row, mapping))
        if not ser.is_valid():
            result.failed += 1
            result.errors.append(f"Row {offset}: {_serializer_errors(ser.errors)}")
            continue
        try:
            create_employee(dict(ser.validated_data), user=user, ip=ip)
            result.success += 1
        except ValidationError as ex:
            result.failed += 1
            result.errors.append(f"Row {offset}: {'; '.join(ex.messages)}")
        except (DatabaseError, ValueError) as ex:
            result.failed += 1
            result.errors.append(f"Row {offset}: {ex}")

    logger.info("[import] %s done: %d ok, %d failed", filename, result.success, result.failed)
    return result
