# -*- coding: utf-8 -*-
"""
Xuất danh sách Employee (đã lọc) ra CSV / Excel.
"""
from __future__ import annotations
import csv
from io import BytesIO
from typing import Iterable, List

from django.http import HttpResponse
from django.utils import timezone
from openpyxl import Workbook

from it_assets.models import Employee

CSV_HEADERS = [
    "Name", "Username", "Email", "Location", "Department", "Section",
    "Computer Name", "IP Address", "Extension",
]

EXCEL_HEADERS = [
    "Name", "Username", "Email", "Location", "Department", "Section", "Extension",
    # Computer
    "Computer Name", "Computer Serial", "IP Address", "Specifications", "Last PM Date",
    # Peripherals
    "LED/LCD Model", "LED/LCD Serial", "Printer Model", "Printer Serial",
    "Scanner Model", "Scanner Serial", "Keyboard", "Mouse",
    # Access
    "Internet Access", "USB Access",
    "Custom Peripherals",
]


def _yes_no(value) -> str:
    return "Yes" if value else "No"

def format_custom_peripherals(items) -> str:
    parts = []
    for p in items or []:
        text = p.get("name") or ""
        if p.get("model"):
            text += f" ({p['model']})"
        if p.get("serial"):
            text += f" - {p['serial']}"
        parts.append(text)
    return "; ".join(parts)

def csv_row(e: Employee) -> List[str]:
    return [
        e.name or "", e.username or "", e.email or "", e.location or "",
        e.department or "", e.section or "", e.computer_name or "",
        e.ip_address or "", e.extension_number or "",
    ]

def excel_row(e: Employee) -> List[str]:
    return [
        e.name or "", e.username or "", e.email or "", e.location or "",
        e.department or "", e.section or "", e.extension_number or "",
        e.computer_name or "", e.computer_serial or "", e.ip_address or "", e.specs or "",
        e.last_pm.strftime("%Y-%m-%d") if e.last_pm else "",
        e.led_model or "", e.led_serial or "", e.printer_model or "", e.printer_serial or "",
        e.scanner_model or "", e.scanner_serial or "",
        _yes_no(e.keyboard), _yes_no(e.mouse),
        _yes_no(e.internet_access), _yes_no(e.usb_access),
        format_custom_peripherals(e.custom_peripherals),
    ]

def _filename(ext: str) -> str:
    return f"employees_{timezone.localdate().isoformat()}.{ext}"


def export_csv(employees: Iterable[Employee]) -> HttpResponse:
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{_filename("csv")}"'
    writer = csv.writer(response)
    writer.writerow(CSV_HEADERS)
    for e in employees:
        writer.writerow(csv_row(e))
    return response


def export_xlsx(employees: Iterable[Employee]) -> HttpResponse:
    wb = Workbook()
    ws = wb.active
    ws.title = "Employees"
    ws.append(EXCEL_HEADERS)
    for e in employees:
        ws.append(excel_row(e))
    buf = BytesIO()
    wb.save(buf)
    response = HttpResponse(
        buf.getvalue(),
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    response["Content-Disposition"] = f'attachment; filename="{_filename("xlsx")}"'
    return response
