# -*- coding: utf-8 -*-
"""
Repository layer cho EmployeeAuditLog: chỉ INSERT + đọc. Không có update/delete.
"""
from __future__ import annotations
from typing import Optional, Dict, Any
from django.db.models import QuerySet

from it_assets.models import EmployeeAuditLog


def create(
    *,
    action: str,
    employee_id: Optional[int],
    changed_by: Optional[int],
    changed_by_email: str = "",
    changed_by_name: str = "",
    old_data: Optional[Dict[str, Any]] = None,
    new_data: Optional[Dict[str, Any]] = None,
    changes: Optional[Dict[str, Any]] = None,
    ip: Optional[str] = None,
) -> EmployeeAuditLog:
    return EmployeeAuditLog.objects.create(
        action=action,
        employee_id=employee_id,
        changed_by=changed_by,
        changed_by_email=changed_by_email or "",
        changed_by_name=changed_by_name or "",
        old_data=old_data,
        new_data=new_data,
        changes=changes,
        ip=ip or None,
    )

def list_all() -> QuerySet[EmployeeAuditLog]:
    return EmployeeAuditLog.objects.all().order_by("-created_at", "-id")
