# -*- coding: utf-8 -*-
"""
Service cho Employee:
- validate nghiệp vụ (unique username/email, chuẩn hoá custom_peripherals)
- quyền: sửa = người tạo hoặc admin; xoá = chỉ admin
- mọi thao tác ghi đi qua audit_service.mutate_employee_with_audit()
- UPDATE thành công -> sau commit mới gửi thông báo cho admin (best-effort)
"""
from __future__ import annotations
import logging
import uuid
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from it_assets.models import Employee
from it_assets.repositories import employee_repository as repo
from it_assets.selectors.user_selector import is_admin
from it_assets.services import notification_service
from it_assets.services.audit_service import Action, mutate_employee_with_audit, resolve_actor

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "employee_code", "name", "username", "email", "department", "section", "location",
    "computer_name", "computer_serial", "ip_address", "specs",
    "led_model", "led_serial", "printer_model", "printer_serial", "scanner_model", "scanner_serial",
    "keyboard", "mouse", "internet_access", "usb_access", "last_pm", "extension_number",
    "custom_peripherals",
}
_NULLABLE_UNIQUE = ("username", "email")


def clean_custom_peripherals(items: Optional[List[Dict[str, Any]]]) -> List[Dict[str, str]]:
    """Bỏ các mục không có name; đảm bảo mỗi mục có id."""
    out: List[Dict[str, str]] = []
    for item in items or []:
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        out.append({
            "id": str(item.get("id") or uuid.uuid4()),
            "name": name,
            "model": str(item.get("model") or "").strip(),
            "serial": str(item.get("serial") or "").strip(),
        })
    return out


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    clean = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
    for key in _NULLABLE_UNIQUE:
        if key in clean:
            value = clean[key]
            if isinstance(value, str):
                value = value.strip()
            clean[key] = value or None
    if "custom_peripherals" in clean:
        clean["custom_peripherals"] = clean_custom_peripherals(clean["custom_peripherals"])
    return clean


def _check_unique(data: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
    for key in _NULLABLE_UNIQUE:
        value = data.get(key)
        if value and repo.exists_with(key, value, exclude_id=exclude_id):
            raise ValidationError({key: f"Employee {key} must be unique"})


def can_edit(user, emp: Employee) -> bool:
    return bool(user and (is_admin(user) or (emp.created_by_id and emp.created_by_id == user.pk)))


def create_employee(data: Dict[str, Any], *, user, ip: Optional[str] = None) -> Employee:
    """
    Tạo nhân viên mới; created_by luôn là người gọi.

    Raises:
        ValidationError: username/email bị trùng
    """
    clean = _normalize(data)
    _check_unique(clean)
    clean["created_by"] = user
    result = mutate_employee_with_audit(Action.CREATED, actor=resolve_actor(user), data=clean, ip=ip)
    return result.employee


def update_employee(emp: Employee, data: Dict[str, Any], *, user, ip: Optional[str] = None) -> Employee:
    """
    Cập nhật (partial) nhân viên. Sau khi commit -> gửi email cho admin nếu có field thay đổi.

    Raises:
        PermissionError: không phải người tạo / admin
        ValidationError: username/email mới bị trùng
    """
    if not can_edit(user, emp):
        raise PermissionError("Only the record owner or an admin can edit this employee.")
    clean = _normalize(data)
    _check_unique(clean, exclude_id=emp.pk)

    actor = resolve_actor(user)
    result = mutate_employee_with_audit(
        Action.UPDATED, actor=actor, employee_id=emp.pk, data=clean, allowed=EDITABLE_FIELDS, ip=ip,
    )

    # notify (ngoài transaction, chỉ chạy khi commit thành công)
    transaction.on_commit(
        lambda: notification_service.dispatch_employee_update(
            employee_id=result.employee.pk,
            actor=actor,
            old_data=result.old_data,
            new_data=result.new_data,
        )
    )
    return result.employee


def delete_employee(emp: Employee, *, user, ip: Optional[str] = None) -> None:
    if not is_admin(user):
        raise PermissionError("Only admins can delete employees.")
    mutate_employee_with_audit(Action.DELETED, actor=resolve_actor(user), employee_id=emp.pk, ip=ip)
