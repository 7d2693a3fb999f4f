# -*- coding: utf-8 -*-
"""
Đọc nhật ký thay đổi. Admin xem tất cả, user thường chỉ xem bản ghi do chính mình tạo ra.
"""
from __future__ import annotations
from typing import Optional, List

from django.conf import settings

from it_assets.models import EmployeeAuditLog
from it_assets.repositories import audit_repository as repo


def _clamp_limit(limit: Optional[int]) -> int:
    default = int(getattr(settings, "AUDIT_LOG_DEFAULT_LIMIT", 100))
    maximum = int(getattr(settings, "AUDIT_LOG_MAX_LIMIT", 500))
    if not limit or limit < 1:
        return default
    return min(limit, maximum)

def list_audit_logs(
    *,
    viewer_id: int,
    viewer_is_admin: bool,
    employee_id: Optional[int] = None,
    action: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[EmployeeAuditLog]:
    qs = repo.list_all()
    if not viewer_is_admin:
        qs = qs.filter(changed_by=viewer_id)
    if employee_id is not None:
        qs = qs.filter(employee_id=employee_id)
    if action:
        qs = qs.filter(action=action.upper())
    return list(qs[:_clamp_limit(limit)])
