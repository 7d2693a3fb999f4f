# -*- coding: utf-8 -*-
"""
Audit Writer cho Employee.

Mọi thao tác ghi (INSERT/UPDATE/DELETE) đi qua mutate_employee_with_audit():
thao tác trên bảng Employee và bản ghi EmployeeAuditLog nằm trong CÙNG một transaction.atomic().
Ghi audit lỗi -> exception bay ra -> toàn bộ transaction rollback (không có thay đổi nào "lọt" mà không có audit).

DELETE: snapshot + audit được ghi TRƯỚC khi xoá row, lúc đó employee_id vẫn trỏ tới bản ghi;
sau khi xoá, FK SET_NULL đưa employee_id về NULL nhưng lịch sử vẫn còn.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from django.core.exceptions import ObjectDoesNotExist
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError, transaction

from it_assets.models import Employee, EmployeeAuditLog, Profile
from it_assets.repositories import audit_repository, employee_repository
from it_assets.utils.diff import compute_diff

logger = logging.getLogger(__name__)

Action = EmployeeAuditLog.Action


@dataclass(frozen=True)
class Actor:
    user_id: Optional[int]
    email: str = ""
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.email or "Unknown User"


@dataclass
class MutationResult:
    employee: Optional[Employee]
    audit: EmployeeAuditLog
    old_data: Optional[Dict[str, Any]]
    new_data: Optional[Dict[str, Any]]


def resolve_actor(user) -> Actor:
    """
    Lấy email/tên người thao tác từ Profile (fallback User). Lookup lỗi -> để trống, KHÔNG chặn việc ghi audit.
    """
    user_id = getattr(user, "pk", None)
    if user_id is None:
        return Actor(user_id=None)
    try:
        profile = Profile.objects.get(user_id=user_id)
        email = profile.email or getattr(user, "email", "") or ""
        name = profile.full_name or (user.get_full_name() if hasattr(user, "get_full_name") else "") or ""
        return Actor(user_id=user_id, email=email, name=name)
    except (ObjectDoesNotExist, DatabaseError) as ex:
        logger.warning("[audit] actor lookup failed for user %s: %s", user_id, ex)
        return Actor(user_id=user_id)


def snapshot(obj: Employee) -> Dict[str, Any]:
    """Dict JSON-safe của toàn bộ cột (gồm id, created_at, updated_at, created_by)."""
    raw: Dict[str, Any] = {}
    for field in obj._meta.concrete_fields:
        if field.is_relation:
            raw[field.name] = getattr(obj, field.attname)
        else:
            raw[field.name] = getattr(obj, field.name)
    return json.loads(json.dumps(raw, cls=DjangoJSONEncoder))


def log_employee_change(
    *,
    action: str,
    employee_id: Optional[int],
    actor: Actor,
    old_data: Optional[Dict[str, Any]] = None,
    new_data: Optional[Dict[str, Any]] = None,
    ip: Optional[str] = None,
) -> EmployeeAuditLog:
    # diff chỉ tính cho UPDATE; diff rỗng vẫn ghi (không bỏ qua)
    changes = compute_diff(old_data, new_data) if action == Action.UPDATED else None
    return audit_repository.create(
        action=action,
        employee_id=employee_id,
        changed_by=actor.user_id,
        changed_by_email=actor.email,
        changed_by_name=actor.name,
        old_data=old_data,
        new_data=new_data,
        changes=changes,
        ip=ip,
    )


def mutate_employee_with_audit(
    action: str,
    *,
    actor: Actor,
    employee_id: Optional[int] = None,
    data: Optional[Dict[str, Any]] = None,
    allowed: Optional[Iterable[str]] = None,
    ip: Optional[str] = None,
) -> MutationResult:
    """
    INSERT: data -> tạo mới.  UPDATE: employee_id + data (patch).  DELETE: employee_id.
    Employee không tồn tại -> Employee.DoesNotExist.
    """
    with transaction.atomic():
        if action == Action.CREATED:
            obj = employee_repository.create(dict(data or {}))
            new = snapshot(obj)
            audit = log_employee_change(action=action, employee_id=obj.pk, actor=actor, new_data=new, ip=ip)
            logger.info("[audit] INSERT Employee#%s by %s", obj.pk, actor.user_id)
            return MutationResult(employee=obj, audit=audit, old_data=None, new_data=new)

        obj = employee_repository.get_for_update(employee_id)
        if obj is None:
            raise Employee.DoesNotExist(f"Employee #{employee_id} not found")
        old = snapshot(obj)

        if action == Action.UPDATED:
            obj = employee_repository.save_fields(obj, dict(data or {}), allowed=allowed)
            obj.refresh_from_db()
            new = snapshot(obj)
            audit = log_employee_change(
                action=action, employee_id=obj.pk, actor=actor, old_data=old, new_data=new, ip=ip,
            )
            logger.info("[audit] UPDATE Employee#%s by %s (%d field(s))", obj.pk, actor.user_id, len(audit.changes or {}))
            return MutationResult(employee=obj, audit=audit, old_data=old, new_data=new)

        if action == Action.DELETED:
            # ghi audit khi row còn tồn tại, rồi mới xoá
            audit = log_employee_change(action=action, employee_id=obj.pk, actor=actor, old_data=old, ip=ip)
            employee_repository.delete(obj)
            logger.info("[audit] DELETE Employee#%s by %s", old.get("id"), actor.user_id)
            return MutationResult(employee=None, audit=audit, old_data=old, new_data=None)

        raise ValueError(f"Unsupported audit action: {action}")
