# -*- coding: utf-8 -*-
"""
Notification Dispatcher: sau khi UPDATE Employee thành công, gửi 1 email tóm tắt thay đổi cho tất cả admin.

Best-effort: mọi lỗi (tra cứu admin, gửi mail) đều được log và nuốt lại,
không ảnh hưởng tới thao tác UPDATE đã commit trước đó.
"""
from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from django.conf import settings
from django.utils.html import format_html, format_html_join

from it_assets.selectors import user_selector
from it_assets.utils.diff import BOOKKEEPING_FIELDS, ChangeLine, compute_diff, render_changes
from it_assets.utils.notify import send_email_notification

log = logging.getLogger(__name__)


def build_update_payload(*, actor, old_data: Mapping[str, Any], new_data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "employeeName": new_data.get("name") or "",
        "employeeDepartment": new_data.get("department") or "",
        "employeeSection": new_data.get("section") or "",
        "changedBy": actor.display_name,
        "changedByEmail": actor.email or "unknown@email.com",
        "oldData": dict(old_data or {}),
        "newData": dict(new_data or {}),
    }


def _text_body(payload: Mapping[str, Any], lines: List[ChangeLine]) -> str:
    changes = "\n".join(f"- {c.label}: {c.old} → {c.new}" for c in lines)
    return (
        "Employee Record Updated\n\n"
        f"Name: {payload.get('employeeName') or '-'}\n"
        f"Department: {payload.get('employeeDepartment') or '-'}\n"
        f"Section: {payload.get('employeeSection') or '-'}\n\n"
        f"Updated by: {payload.get('changedBy') or '-'} <{payload.get('changedByEmail') or '-'}>\n\n"
        f"Changes:\n{changes}\n"
    )


def _html_body(payload: Mapping[str, Any], lines: List[ChangeLine]) -> str:
    rows = format_html_join(
        "",
        "<tr><td>{}</td><td style=\"color:#ef4444\">{}</td><td style=\"color:#10b981\">{}</td></tr>",
        ((c.label, c.old, c.new) for c in lines),
    )
    return format_html(
        "<h2>Employee Record Updated</h2>"
        "<p><strong>Name:</strong> {}<br><strong>Department:</strong> {}<br><strong>Section:</strong> {}</p>"
        "<p><strong>Updated by:</strong> {} ({})</p>"
        "<table border=\"1\" cellpadding=\"8\" style=\"border-collapse:collapse\">"
        "<thead><tr><th>Field</th><th>Old Value</th><th>New Value</th></tr></thead>"
        "<tbody>{}</tbody></table>"
        "<p style=\"color:#6b7280;font-size:12px\">This is an automated notification from the Office Support Dashboard.</p>",
        payload.get("employeeName") or "-",
        payload.get("employeeDepartment") or "-",
        payload.get("employeeSection") or "-",
        payload.get("changedBy") or "-",
        payload.get("changedByEmail") or "-",
        rows,
    )


def send_employee_update_notification(payload: Mapping[str, Any], *, object_id: str = "") -> Tuple[int, Dict[str, Any]]:
    """
    Trả về (status_code, body): 200 khi gửi xong hoặc không có gì để gửi, 500 khi lỗi nội bộ.
    """
    try:
        name = payload.get("employeeName") or ""
        log.info("[notify] processing employee update notification for: %s", name)

        # 1) admin nhận thư
        admin_ids = user_selector.admin_user_ids()
        admin_emails = user_selector.emails_for_user_ids(admin_ids)
        if not admin_emails:
            log.info("[notify] no admin users found")
            return 200, {"message": "No admin users to notify"}

        # 2) diff (bỏ id/created_at/updated_at)
        diff = compute_diff(payload.get("oldData") or {}, payload.get("newData") or {}, exclude=BOOKKEEPING_FIELDS)
        if not diff:
            log.info("[notify] no changes detected, skipping email")
            return 200, {"message": "No changes to notify"}

        # 3) render + 4) gửi 1 lần cho tất cả admin
        lines = render_changes(diff)
        send_email_notification(
            subject=f"Employee Record Updated: {name}",
            text_body=_text_body(payload, lines),
            html_body=_html_body(payload, lines),
            to_emails=admin_emails,
            object_type="employee",
            object_id=object_id or str((payload.get("newData") or {}).get("id") or ""),
            recipients=admin_ids,
        )
        log.info("[notify] sent update notification to %d admin(s)", len(admin_emails))
        return 200, {"message": "Notification sent", "recipients": len(admin_emails), "changes": len(lines)}
    except Exception as ex:
        log.exception("[notify] employee update notification failed: %s", ex)
        return 500, {"error": str(ex)}


def notify_employee_update(*, employee_id: int, actor, old_data: Optional[Mapping[str, Any]], new_data: Optional[Mapping[str, Any]]) -> Tuple[int, Dict[str, Any]]:
    payload = build_update_payload(actor=actor, old_data=old_data or {}, new_data=new_data or {})
    status, body = send_employee_update_notification(payload, object_id=str(employee_id))
    if status >= 400:
        log.warning("[notify] Employee#%s notification failed: %s", employee_id, body.get("error"))
    return status, body


def dispatch_employee_update(*, employee_id: int, actor, old_data: Optional[Mapping[str, Any]], new_data: Optional[Mapping[str, Any]]) -> None:
    """
    Hook on_commit: fire-and-forget. EMPLOYEE_NOTIFY_ASYNC=True -> đẩy Celery task (send_employee_update_email.delay),
    ngược lại gửi luôn trong request. Broker lỗi chỉ được log, UPDATE đã commit không bị ảnh hưởng.
    """
    if getattr(settings, "EMPLOYEE_NOTIFY_ASYNC", False):
        from it_assets.tasks import send_employee_update_email

        try:
            send_employee_update_email.delay(employee_id, asdict(actor), dict(old_data or {}), dict(new_data or {}))
        except Exception as ex:
            log.exception("[notify] Employee#%s could not queue notification: %s", employee_id, ex)
        return

    try:
        notify_employee_update(employee_id=employee_id, actor=actor, old_data=old_data, new_data=new_data)
    except Exception as ex:
        log.exception("[notify] Employee#%s dispatch crashed: %s", employee_id, ex)
