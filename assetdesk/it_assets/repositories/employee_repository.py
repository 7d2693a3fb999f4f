# -*- coding: utf-8 -*-
"""
Repository layer cho Employee (thuần DB).
"""
from __future__ import annotations
from typing import Optional, Dict, Any, List, Iterable
from django.db import transaction
from django.db.models import QuerySet

from it_assets.models import Employee


# ============== Queries ==============
def get_by_id(emp_id: int) -> Optional[Employee]:
    return Employee.objects.filter(id=emp_id).first()

def get_for_update(emp_id: int) -> Optional[Employee]:
    # phải gọi trong transaction.atomic()
    return Employee.objects.select_for_update().filter(id=emp_id).first()

def list_all() -> QuerySet[Employee]:
    return Employee.objects.all().order_by("-created_at")

def exists_with(field: str, value: Any, exclude_id: Optional[int] = None) -> bool:
    qs = Employee.objects.filter(**{field: value})
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()


# ============== Mutations ==============
@transaction.atomic
def create(data: Dict[str, Any]) -> Employee:
    return Employee.objects.create(**data)

@transaction.atomic
def save_fields(obj: Employee, patch: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> Employee:
    allowed = set(allowed) if allowed is not None else None
    fields: List[str] = []
    for k, v in patch.items():
        if (allowed is None) or (k in allowed):
            setattr(obj, k, v); fields.append(k)
    # luôn save để updated_at được làm mới, kể cả khi không có field nào đổi
    obj.save(update_fields=fields + ["updated_at"])
    return obj

@transaction.atomic
def delete(obj: Employee) -> None:
    obj.delete()
