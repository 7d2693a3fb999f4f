import io

import pytest
from openpyxl import load_workbook
from rest_framework.test import APIClient

from it_assets.models import Employee, EmployeeAuditLog


@pytest.mark.django_db
def test_employee_requires_authentication(alice):
    resp = APIClient().get("/api/employees/")
    assert resp.status_code in (401, 403)


@pytest.mark.django_db
def test_employee_list_with_filters(client_for, user, alice):
    Employee.objects.create(name="Bob", department="Finance", location="Branch 1", section="AP")
    client = client_for(user)

    resp = client.get("/api/employees/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["filters"]["locations"] == ["Branch 1", "HQ"]

    resp = client.get("/api/employees/", {"location": "HQ"})
    assert [x["name"] for x in resp.json()["results"]] == ["Alice"]
    assert resp.json()["filters"]["departments"] == ["IT"]

    resp = client.get("/api/employees/", {"location": "all", "q": "10.0.0"})
    assert [x["name"] for x in resp.json()["results"]] == ["Alice"]


@pytest.mark.django_db
def test_employee_list_rejects_inverted_dates(client_for, user):
    resp = client_for(user).get("/api/employees/", {"date_from": "2024-02-01", "date_to": "2024-01-01"})
    assert resp.status_code == 400


@pytest.mark.django_db
def test_employee_create(client_for, user, employee_payload):
    resp = client_for(user).post("/api/employees/", employee_payload, format="json")
    assert resp.status_code == 201, resp.content
    data = resp.json()
    assert data["created_by"] == user.id
    assert [p["name"] for p in data["custom_peripherals"]] == ["Headset"]
    assert data["custom_peripherals"][0]["id"]
    assert EmployeeAuditLog.objects.filter(action="INSERT", employee_id=data["id"]).count() == 1


@pytest.mark.django_db
def test_employee_create_duplicate_email(client_for, user, alice):
    resp = client_for(user).post("/api/employees/", {"name": "Copy", "email": "alice@example.com"}, format="json")
    assert resp.status_code == 400
    assert EmployeeAuditLog.objects.count() == 0


@pytest.mark.django_db
def test_blank_username_stored_as_null(client_for, user):
    client = client_for(user)
    r1 = client.post("/api/employees/", {"name": "A", "username": ""}, format="json")
    r2 = client.post("/api/employees/", {"name": "B", "username": ""}, format="json")
    assert r1.status_code == 201 and r2.status_code == 201
    assert Employee.objects.filter(username__isnull=True).count() == 2


@pytest.mark.django_db
def test_employee_detail_and_404(client_for, user, alice):
    client = client_for(user)
    assert client.get(f"/api/employees/{alice.id}/").json()["name"] == "Alice"
    assert client.get("/api/employees/999999/").status_code == 404


@pytest.mark.django_db
def test_owner_can_patch(client_for, user, alice, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        resp = client_for(user).patch(f"/api/employees/{alice.id}/", {"section": "Helpdesk"}, format="json")
    assert resp.status_code == 200, resp.content
    assert resp.json()["section"] == "Helpdesk"


@pytest.mark.django_db
def test_non_owner_cannot_patch(client_for, other_user, alice):
    resp = client_for(other_user).patch(f"/api/employees/{alice.id}/", {"section": "X"}, format="json")
    assert resp.status_code == 403
    alice.refresh_from_db()
    assert alice.section == "Support"


@pytest.mark.django_db
def test_admin_can_put(client_for, admin_user, alice, django_capture_on_commit_callbacks):
    payload = {"name": "Alice", "department": "IT", "internet_access": False}
    with django_capture_on_commit_callbacks(execute=True):
        resp = client_for(admin_user).put(f"/api/employees/{alice.id}/", payload, format="json")
    assert resp.status_code == 200, resp.content
    assert resp.json()["internet_access"] is False


@pytest.mark.django_db
def test_delete_admin_only(client_for, user, admin_user, alice):
    assert client_for(user).delete(f"/api/employees/{alice.id}/").status_code == 403
    assert client_for(admin_user).delete(f"/api/employees/{alice.id}/").status_code == 204
    assert not Employee.objects.filter(id=alice.id).exists()
    log = EmployeeAuditLog.objects.get(action="DELETE")
    assert log.employee_id is None
    assert log.old_data["name"] == "Alice"


@pytest.mark.django_db
def test_export_csv(client_for, user, alice):
    resp = client_for(user).get("/api/employees/export/", {"format": "csv"})
    assert resp.status_code == 200
    assert resp["Content-Type"].startswith("text/csv")
    assert "attachment;" in resp["Content-Disposition"]
    lines = resp.content.decode("utf-8").splitlines()
    assert lines[0].startswith("Name,Username,Email")
    assert "Alice" in lines[1]


@pytest.mark.django_db
def test_export_xlsx(client_for, user, alice):
    resp = client_for(user).get("/api/employees/export/", {"format": "xlsx"})
    assert resp.status_code == 200
    ws = load_workbook(io.BytesIO(resp.content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][0] == "Name"
    assert rows[1][0] == "Alice"
    assert rows[1][rows[0].index("Internet Access")] == "Yes"


@pytest.mark.django_db
def test_export_bad_format(client_for, user):
    assert client_for(user).get("/api/employees/export/", {"format": "pdf"}).status_code == 400


@pytest.mark.django_db
def test_stats(client_for, user, alice):
    Employee.objects.create(name="NoLoc", department="IT")
    body = client_for(user).get("/api/employees/stats/").json()
    assert body["total"] == 2
    assert body["departments"] == 1
    assert body["recent"] == 2
    assert {"location": "Unassigned", "count": 1} in body["locations"]


@pytest.mark.django_db
def test_delete_of_row_removed_meanwhile_is_404(client_for, admin_user, monkeypatch):
    # row đọc được nhưng đã bị xoá bởi request khác trước khi khoá
    monkeypatch.setattr("it_assets.views.employee_view.get_employee_by_id", lambda pk: Employee(id=pk, name="Ghost"))
    resp = client_for(admin_user).delete("/api/employees/424242/")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Employee not found"}
    assert not EmployeeAuditLog.objects.exists()


@pytest.mark.django_db
def test_spoofed_forwarded_for_is_ignored(client_for, user, alice, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        resp = client_for(user).patch(
            f"/api/employees/{alice.id}/", {"section": "Helpdesk"}, format="json",
            HTTP_X_FORWARDED_FOR="not-an-ip, 1.2.3.4",
        )
    assert resp.status_code == 200, resp.content
    assert EmployeeAuditLog.objects.get(action="UPDATE").ip == "127.0.0.1"


@pytest.mark.django_db
def test_forwarded_for_trusted_behind_proxy(settings, client_for, user):
    settings.USE_X_FORWARDED_FOR = True
    client = client_for(user)
    client.post("/api/employees/", {"name": "Proxied"}, format="json", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1")
    client.post("/api/employees/", {"name": "Junk"}, format="json", HTTP_X_FORWARDED_FOR="not-an-ip, 1.2.3.4")

    ips = {log.new_data["name"]: log.ip for log in EmployeeAuditLog.objects.filter(action="INSERT")}
    assert ips == {"Proxied": "203.0.113.9", "Junk": None}
