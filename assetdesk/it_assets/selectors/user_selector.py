# -*- coding: utf-8 -*-
"""
Danh bạ user/role: ai có quyền admin, email/tên hiển thị của họ.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional
import logging

from django.contrib.auth import get_user_model
from django.db.models import Q

from it_assets.models import Profile, UserRole

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass(frozen=True)
class DirectoryUser:
    id: int
    email: str
    full_name: str
    is_admin: bool


def admin_user_ids() -> List[int]:
    """User có role admin (bảng UserRole) hoặc là superuser."""
    role_ids = UserRole.objects.filter(role=UserRole.Role.ADMIN).values_list("user_id", flat=True)
    ids = User.objects.filter(Q(id__in=role_ids) | Q(is_superuser=True), is_active=True).values_list("id", flat=True)
    return sorted(set(ids))

def is_admin(user) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_superuser", False):
        return True
    return UserRole.objects.filter(user_id=user.pk, role=UserRole.Role.ADMIN).exists()

def emails_for_user_ids(user_ids: Iterable[int]) -> List[str]:
    """
    Ưu tiên email trong Profile, fallback User.email. Bỏ trống + khử trùng, giữ thứ tự.
    """
    ids = list(user_ids or [])
    if not ids:
        return []
    profile_mail = dict(Profile.objects.filter(user_id__in=ids).values_list("user_id", "email"))
    user_mail = dict(User.objects.filter(id__in=ids).values_list("id", "email"))
    out: List[str] = []
    for uid in ids:
        mail = (profile_mail.get(uid) or user_mail.get(uid) or "").strip()
        if mail:
            out.append(mail)
    return list(dict.fromkeys(out))

def get_directory_user(user) -> Optional[DirectoryUser]:
    if not user or not getattr(user, "pk", None):
        return None
    profile = Profile.objects.filter(user_id=user.pk).first()
    email = (profile.email if profile and profile.email else user.email) or ""
    full_name = (profile.full_name if profile and profile.full_name else user.get_full_name()) or ""
    return DirectoryUser(id=user.pk, email=email, full_name=full_name, is_admin=is_admin(user))
