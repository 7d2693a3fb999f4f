import logging

from celery import shared_task

from it_assets.services import notification_service
from it_assets.services.audit_service import Actor

log = logging.getLogger(__name__)


@shared_task
def send_employee_update_email(employee_id: int, actor: dict, old_data: dict, new_data: dict) -> int:
    """Gửi email tóm tắt thay đổi Employee cho admin; trả về status code của lần gửi."""
    status, _ = notification_service.notify_employee_update(
        employee_id=employee_id,
        actor=Actor(**actor),
        old_data=old_data,
        new_data=new_data,
    )
    log.info("[notify] task done for Employee#%s: %s", employee_id, status)
    return status
