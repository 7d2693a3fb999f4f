from smtplib import SMTPException

import pytest
from django.core import mail
from django.core.mail import EmailMultiAlternatives

from it_assets.models import Notification, UserRole
from it_assets.services import notification_service as svc
from it_assets.services.audit_service import Actor
from it_assets.services.employee_service import update_employee
from it_assets.tasks import send_employee_update_email


def _payload(**overrides):
    data = {
        "employeeName": "Alice",
        "employeeDepartment": "IT",
        "employeeSection": "Support",
        "changedBy": "Test User",
        "changedByEmail": "tester@example.com",
        "oldData": {"id": 1, "name": "Alice", "internet_access": True, "updated_at": "2024-01-01T00:00:00"},
        "newData": {"id": 1, "name": "Alice", "internet_access": False, "updated_at": "2024-01-02T00:00:00"},
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_alice_update_emails_admins(user, admin_user, alice, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        update_employee(alice, {"internet_access": False}, user=user)

    assert len(mail.outbox) == 1
    msg = mail.outbox[0]
    assert msg.subject == "Employee Record Updated: Alice"
    assert msg.to == ["admin@example.com"]
    assert "Internet Access: Yes → No" in msg.body
    assert "Test User <tester@example.com>" in msg.body
    html = msg.alternatives[0][0]
    assert "Internet Access" in html

    log = Notification.objects.get()
    assert log.delivered is True
    assert log.object_type == "employee"
    assert log.object_id == str(alice.id)
    assert log.channel == Notification.Channel.EMAIL
    assert Notification.Channel.choices == [(1, "Email")]


@pytest.mark.django_db
def test_notification_not_sent_before_commit(user, admin_user, alice, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        update_employee(alice, {"internet_access": False}, user=user)
    assert len(callbacks) == 1
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_no_admins_is_a_noop(user):
    UserRole.objects.filter(role=UserRole.Role.ADMIN).delete()
    status, body = svc.send_employee_update_notification(_payload())
    assert status == 200
    assert body == {"message": "No admin users to notify"}
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_bookkeeping_only_changes_send_nothing(admin_user):
    payload = _payload(
        oldData={"id": 1, "name": "Alice", "created_at": "a", "updated_at": "a"},
        newData={"id": 1, "name": "Alice", "created_at": "a", "updated_at": "b"},
    )
    status, body = svc.send_employee_update_notification(payload)
    assert status == 200
    assert body == {"message": "No changes to notify"}
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_send_reports_recipients_and_changes(admin_user):
    status, body = svc.send_employee_update_notification(_payload())
    assert status == 200
    assert body == {"message": "Notification sent", "recipients": 1, "changes": 1}


@pytest.mark.django_db
def test_transport_failure_returns_500(admin_user, monkeypatch):
    def boom(self, fail_silently=False):
        raise SMTPException("relay refused")
    monkeypatch.setattr(EmailMultiAlternatives, "send", boom)

    status, body = svc.send_employee_update_notification(_payload())
    assert status == 500
    assert "relay refused" in body["error"]
    log = Notification.objects.get()
    assert log.delivered is False
    assert log.provider_status_code == "ERROR"


@pytest.mark.django_db
def test_transport_failure_does_not_break_update(user, admin_user, alice, monkeypatch, django_capture_on_commit_callbacks):
    def boom(self, fail_silently=False):
        raise SMTPException("relay refused")
    monkeypatch.setattr(EmailMultiAlternatives, "send", boom)

    with django_capture_on_commit_callbacks(execute=True):
        emp = update_employee(alice, {"name": "Alice B"}, user=user)

    alice.refresh_from_db()
    assert emp.name == "Alice B"
    assert alice.name == "Alice B"


def test_async_dispatch_queues_celery_task(settings, monkeypatch):
    settings.EMPLOYEE_NOTIFY_ASYNC = True
    queued = []
    monkeypatch.setattr(send_employee_update_email, "delay", lambda *args: queued.append(args))
    monkeypatch.setattr(svc, "send_employee_update_notification", lambda *a, **kw: pytest.fail("sent inline"))

    svc.dispatch_employee_update(
        employee_id=7,
        actor=Actor(user_id=1, email="a@example.com", name="A"),
        old_data={"name": "x"},
        new_data={"name": "y"},
    )
    assert queued == [(7, {"user_id": 1, "email": "a@example.com", "name": "A"}, {"name": "x"}, {"name": "y"})]


def test_broker_down_is_logged_not_raised(settings, monkeypatch):
    settings.EMPLOYEE_NOTIFY_ASYNC = True
    logged = []
    monkeypatch.setattr(svc.log, "exception", lambda msg, *args: logged.append(msg % args))

    def broker_down(*args):
        raise ConnectionError("redis unreachable")
    monkeypatch.setattr(send_employee_update_email, "delay", broker_down)

    svc.dispatch_employee_update(employee_id=7, actor=Actor(user_id=None), old_data={}, new_data={"name": "y"})
    assert logged == ["[notify] Employee#7 could not queue notification: redis unreachable"]


@pytest.mark.django_db
def test_update_queues_task_after_commit(settings, user, alice, monkeypatch, django_capture_on_commit_callbacks):
    settings.EMPLOYEE_NOTIFY_ASYNC = True
    queued = []
    monkeypatch.setattr(send_employee_update_email, "delay", lambda *args: queued.append(args))

    with django_capture_on_commit_callbacks(execute=True):
        update_employee(alice, {"internet_access": False}, user=user)

    assert len(queued) == 1
    employee_id, actor, old_data, new_data = queued[0]
    assert employee_id == alice.id
    assert actor["email"] == "tester@example.com"
    assert old_data["internet_access"] is True
    assert new_data["internet_access"] is False
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_task_sends_email_in_worker(admin_user):
    status = send_employee_update_email(
        1,
        {"user_id": None, "email": "tester@example.com", "name": "Test User"},
        {"id": 1, "name": "Alice", "usb_access": True},
        {"id": 1, "name": "Alice", "usb_access": False},
    )
    assert status == 200
    assert len(mail.outbox) == 1
    assert "USB Access: Yes → No" in mail.outbox[0].body


def test_build_update_payload_falls_back_for_unknown_actor():
    payload = svc.build_update_payload(actor=Actor(user_id=None), old_data={}, new_data={"name": "Z", "department": "HR"})
    assert payload["changedBy"] == "Unknown User"
    assert payload["changedByEmail"] == "unknown@email.com"
    assert payload["employeeName"] == "Z"
    assert payload["employeeDepartment"] == "HR"
