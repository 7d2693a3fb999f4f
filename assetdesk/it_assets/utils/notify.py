# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
from typing import Iterable, Optional, Dict, Any, List

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils import timezone

from it_assets.models import Notification

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Email transport báo lỗi (SMTP, cấu hình sender...)."""


# -----------------------------
# Helpers
# -----------------------------
def _mk_subject(subject: str) -> str:
    prefix = getattr(settings, "EMAIL_SUBJECT_PREFIX", "")
    return f"{prefix}{subject}" if prefix else subject


def _create_log(
    *,
    channel: int,
    title: str,
    payload: Optional[Dict[str, Any]] = None,
    object_type: str = "",
    object_id: str = "",
    to_user: Optional[int] = None,
    to_email: str = "",
    recipients: Optional[List[int]] = None,
    delivered: bool,
    provider_status_code: str = "",
    last_error: str = "",
) -> Notification:
    return Notification.objects.create(
        channel=channel,
        title=title[:200],
        payload=payload or None,
        object_type=object_type or "",
        object_id=str(object_id or ""),
        to_user=to_user,
        to_email=to_email or "",
        recipients=recipients or None,
        delivered=delivered,
        delivered_at=timezone.now() if delivered else None,
        attempt_count=1,
        provider_status_code=str(provider_status_code or ""),
        last_error=last_error or "",
    )


# -----------------------------
# Email
# -----------------------------
def send_email_notification(
    *,
    subject: str,
    text_body: str,
    to_emails: Iterable[str],
    html_body: Optional[str] = None,
    cc: Optional[Iterable[str]] = None,
    bcc: Optional[Iterable[str]] = None,
    # logging context
    object_type: str = "",
    object_id: str = "",
    to_user: Optional[int] = None,
    recipients: Optional[List[int]] = None,
) -> Notification:
    """
    Gửi MỘT email tới toàn bộ to_emails theo settings.EMAIL_* và GHI LOG vào Notification (channel=EMAIL).
    Trả về bản ghi log. Lỗi transport -> raise EmailDeliveryError (sau khi đã ghi log).
    """
    tos = list(dict.fromkeys(e for e in (to_emails or []) if e))
    title = _mk_subject(subject)
    base_payload = {
        "kind": "email",
        "text": text_body,
        "has_html": bool(html_body),
        "tos": tos,
        "cc": list(cc or []),
        "bcc": list(bcc or []),
    }

    if not tos:
        logger.warning("[notify.email] No recipients; skip.")
        return _create_log(
            channel=Notification.Channel.EMAIL,
            title=title,
            payload=base_payload,
            object_type=object_type,
            object_id=object_id,
            to_user=to_user,
            recipients=recipients,
            delivered=False,
            last_error="No recipients",
        )

    from_email = getattr(settings, "DEFAULT_FROM_EMAIL", None) or getattr(settings, "SERVER_EMAIL", None)
    if not from_email:
        logger.warning("[notify.email] DEFAULT_FROM_EMAIL / SERVER_EMAIL not set; skip.")
        _create_log(
            channel=Notification.Channel.EMAIL,
            title=title,
            payload=base_payload,
            object_type=object_type,
            object_id=object_id,
            to_user=to_user,
            to_email=",".join(tos),
            recipients=recipients,
            delivered=False,
            last_error="From email not configured",
        )
        raise EmailDeliveryError("From email not configured")

    error_msg = ""
    try:
        msg = EmailMultiAlternatives(
            subject=title,
            body=text_body,
            from_email=from_email,
            to=tos,
            cc=list(cc or []),
            bcc=list(bcc or []),
        )
        if html_body:
            msg.attach_alternative(html_body, "text/html")
        msg.send(fail_silently=False)
    except Exception as ex:
        error_msg = str(ex) or ex.__class__.__name__
        logger.warning("[notify.email] send failed: %s", ex)

    ok = not error_msg
    log_row = _create_log(
        channel=Notification.Channel.EMAIL,
        title=title,
        payload=base_payload,
        object_type=object_type,
        object_id=object_id,
        to_user=to_user,
        to_email=",".join(tos),
        recipients=recipients,
        delivered=ok,
        provider_status_code="OK" if ok else "ERROR",
        last_error=error_msg,
    )
    if not ok:
        raise EmailDeliveryError(error_msg)
    logger.info("[notify.email] sent '%s' to %d recipient(s)", title, len(tos))
    return log_row
