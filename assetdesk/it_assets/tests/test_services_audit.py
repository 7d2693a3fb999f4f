import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError

from it_assets.models import Employee, EmployeeAuditLog, Profile
from it_assets.repositories import audit_repository, employee_repository
from it_assets.services.audit_service import resolve_actor
from it_assets.services.employee_service import create_employee, update_employee, delete_employee


@pytest.mark.django_db
def test_each_mutation_writes_one_audit_entry(user, admin_user, django_capture_on_commit_callbacks):
    emp = create_employee({"name": "Carol", "username": "carol"}, user=user, ip="10.1.1.1")
    assert EmployeeAuditLog.objects.filter(action="INSERT", employee_id=emp.id).count() == 1

    with django_capture_on_commit_callbacks(execute=True):
        update_employee(emp, {"section": "Ops"}, user=user)
    log = EmployeeAuditLog.objects.get(action="UPDATE", employee_id=emp.id)
    assert log.changes == {"section": {"old": "", "new": "Ops"}}
    assert log.changed_by == user.id
    assert log.changed_by_email == "tester@example.com"

    delete_employee(emp, user=admin_user)
    assert EmployeeAuditLog.objects.count() == 3


@pytest.mark.django_db
def test_insert_entry_snapshot(user):
    emp = create_employee({"name": "Dan", "internet_access": False}, user=user, ip="10.1.1.1")
    log = EmployeeAuditLog.objects.get(employee_id=emp.id)
    assert log.old_data is None
    assert log.changes is None
    assert log.new_data["name"] == "Dan"
    assert log.new_data["created_by"] == user.id
    assert log.ip == "10.1.1.1"


@pytest.mark.django_db
def test_delete_keeps_history_and_nulls_employee(user, admin_user, alice, monkeypatch):
    create_employee({"name": "Eve"}, user=user)
    emp = Employee.objects.get(name="Eve")
    emp_id = emp.id

    seen = {}
    real_delete = employee_repository.delete

    def delete_and_record(obj):
        # audit DELETE phải được ghi khi row vẫn còn
        seen["employee_id"] = EmployeeAuditLog.objects.get(action="DELETE").employee_id
        return real_delete(obj)

    monkeypatch.setattr(employee_repository, "delete", delete_and_record)
    delete_employee(emp, user=admin_user)

    assert seen == {"employee_id": emp_id}

    assert not Employee.objects.filter(id=emp_id).exists()
    # alice tạo trực tiếp qua ORM nên không có audit
    logs = EmployeeAuditLog.objects.all()
    assert logs.count() == 2
    assert all(log.employee_id is None for log in logs)
    deleted = EmployeeAuditLog.objects.get(action="DELETE")
    assert deleted.old_data["name"] == "Eve"
    assert deleted.new_data is None


@pytest.mark.django_db
def test_noop_update_still_logged_with_empty_diff(admin_user, alice, django_capture_on_commit_callbacks):
    from django.core import mail

    with django_capture_on_commit_callbacks(execute=True):
        update_employee(alice, {}, user=admin_user)

    log = EmployeeAuditLog.objects.get(action="UPDATE")
    assert log.changes == {}
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_audit_rows_are_immutable(user):
    create_employee({"name": "Frank"}, user=user)
    log = EmployeeAuditLog.objects.get()
    log.changed_by_name = "tampered"
    with pytest.raises(PermissionError):
        log.save()
    with pytest.raises(PermissionError):
        log.delete()


@pytest.mark.django_db
def test_actor_lookup_failure_degrades_to_blank_identity(user):
    Profile.objects.filter(user=user).delete()
    actor = resolve_actor(user)
    assert actor.user_id == user.id
    assert actor.email == ""
    assert actor.display_name == "Unknown User"

    emp = create_employee({"name": "Gina"}, user=user)
    log = EmployeeAuditLog.objects.get(employee_id=emp.id)
    assert log.changed_by == user.id
    assert log.changed_by_email == ""


@pytest.mark.django_db
def test_duplicate_username_rejected_without_audit(user, alice):
    with pytest.raises(ValidationError):
        create_employee({"name": "Other Alice", "username": "alice"}, user=user)
    assert EmployeeAuditLog.objects.count() == 0


@pytest.mark.django_db
def test_only_owner_or_admin_can_update(other_user, alice):
    with pytest.raises(PermissionError):
        update_employee(alice, {"name": "Hacked"}, user=other_user)
    assert EmployeeAuditLog.objects.count() == 0


@pytest.mark.django_db
def test_only_admin_can_delete(user, alice):
    with pytest.raises(PermissionError):
        delete_employee(alice, user=user)
    assert Employee.objects.filter(id=alice.id).exists()


def _failing_audit_write(**kwargs):
    raise DatabaseError("audit table is read-only")


@pytest.mark.django_db
def test_failed_audit_write_rolls_back_update(user, alice, monkeypatch):
    monkeypatch.setattr(audit_repository, "create", _failing_audit_write)

    with pytest.raises(DatabaseError):
        update_employee(alice, {"name": "Mallory"}, user=user)

    alice.refresh_from_db()
    assert alice.name == "Alice"
    assert not EmployeeAuditLog.objects.exists()


@pytest.mark.django_db
def test_failed_audit_write_rolls_back_create_and_delete(user, admin_user, alice, monkeypatch):
    monkeypatch.setattr(audit_repository, "create", _failing_audit_write)

    with pytest.raises(DatabaseError):
        create_employee({"name": "Trent"}, user=user)
    assert not Employee.objects.filter(name="Trent").exists()

    with pytest.raises(DatabaseError):
        delete_employee(alice, user=admin_user)
    assert Employee.objects.filter(id=alice.id).exists()
