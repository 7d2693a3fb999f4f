# -*- coding: utf-8 -*-
"""
Selector layer cho Employee: đọc + lọc danh sách (location/department/section, khoảng ngày tạo, tìm kiếm).
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, List, Dict, Any

from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from it_assets.models import Employee
from it_assets.repositories import employee_repository as repo

UNASSIGNED = "Unassigned"

SEARCH_FIELDS = ("name", "username", "email", "ip_address", "computer_name", "extension_number")


@dataclass
class EmployeeFilter:
    location: Optional[str] = None
    department: Optional[str] = None
    section: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    q: Optional[str] = None


def get_employee_by_id(emp_id: int) -> Optional[Employee]:
    return repo.get_by_id(emp_id)

def filter_employees(f: EmployeeFilter) -> QuerySet[Employee]:
    qs = repo.list_all()
    if f.location:
        qs = qs.filter(location=f.location)
    if f.department:
        qs = qs.filter(department=f.department)
    if f.section:
        qs = qs.filter(section=f.section)
    if f.date_from:
        qs = qs.filter(created_at__date__gte=f.date_from)
    if f.date_to:
        qs = qs.filter(created_at__date__lte=f.date_to)
    if f.q:
        term = f.q.strip()
        cond = Q()
        for field in SEARCH_FIELDS:
            cond |= Q(**{f"{field}__icontains": term})
        qs = qs.filter(cond)
    return qs

def _distinct_non_empty(qs: QuerySet, field: str) -> List[str]:
    values = qs.exclude(**{f"{field}__isnull": True}).exclude(**{field: ""}).values_list(field, flat=True)
    return sorted({v.strip() for v in values if v and v.strip()})

def filter_options(f: EmployeeFilter) -> Dict[str, List[str]]:
    """
    Giá trị cho dropdown: departments phụ thuộc location, sections phụ thuộc location + department.
    """
    base = Employee.objects.all()
    by_location = base.filter(location=f.location) if f.location else base
    by_department = by_location.filter(department=f.department) if f.department else by_location
    return {
        "locations": _distinct_non_empty(base, "location"),
        "departments": _distinct_non_empty(by_location, "department"),
        "sections": _distinct_non_empty(by_department, "section"),
    }

def location_counts(q: Optional[str] = None) -> List[Dict[str, Any]]:
    rows = Employee.objects.values("location").annotate(count=Count("id"))
    merged: Dict[str, int] = {}
    for r in rows:
        loc = (r["location"] or "").strip() or UNASSIGNED
        merged[loc] = merged.get(loc, 0) + r["count"]
    items = [{"location": k, "count": v} for k, v in merged.items()]
    if q:
        term = q.strip().lower()
        items = [x for x in items if term in x["location"].lower()]
    items.sort(key=lambda x: (-x["count"], x["location"]))
    return items

def employee_stats(recent_days: int = 7, top_locations: int = 4) -> Dict[str, Any]:
    since = timezone.now() - timedelta(days=recent_days)
    qs = Employee.objects.all()
    departments = {(d or "").strip() for d in qs.values_list("department", flat=True)} - {""}
    return {
        "total": qs.count(),
        "departments": len(departments),
        "recent": qs.filter(created_at__gte=since).count(),
        "locations": location_counts()[:top_locations],
    }
