import pytest
import requests

from it_assets.models import Employee
from it_assets.services import network_service


class _Resp:
    status_code = 200


@pytest.mark.django_db
def test_me(client_for, user, admin_user):
    me = client_for(user).get("/api/me/").json()
    assert me == {
        "id": user.id, "username": "tester", "email": "tester@example.com",
        "full_name": "Test User", "is_admin": False,
    }
    assert client_for(admin_user).get("/api/me/").json()["is_admin"] is True


@pytest.mark.django_db
def test_locations_admin_only(client_for, user, admin_user, alice):
    Employee.objects.create(name="X", location="HQ")
    Employee.objects.create(name="Y", location="")
    assert client_for(user).get("/api/locations/").status_code == 403

    data = client_for(admin_user).get("/api/locations/").json()
    assert data == [{"location": "HQ", "count": 2}, {"location": "Unassigned", "count": 1}]
    assert client_for(admin_user).get("/api/locations/", {"q": "un"}).json() == [{"location": "Unassigned", "count": 1}]


def test_check_host_falls_back_to_https(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        if url.startswith("http://"):
            raise requests.ConnectionError("refused")
        return _Resp()

    monkeypatch.setattr(network_service.requests, "get", fake_get)
    result = network_service.check_host("10.0.0.5", timeout=1)
    assert calls == ["http://10.0.0.5", "https://10.0.0.5"]
    assert result.reachable is True
    assert result.protocol == "https"
    assert result.status_code == 200


def test_check_host_brackets_ipv6(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        return _Resp()

    monkeypatch.setattr(network_service.requests, "get", fake_get)
    result = network_service.check_host("::1", timeout=1)
    assert calls == ["http://[::1]"]
    assert result.ip_address == "::1"
    assert result.reachable is True


def test_check_host_unreachable(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.Timeout("timed out")

    monkeypatch.setattr(network_service.requests, "get", fake_get)
    result = network_service.check_host("10.0.0.5", timeout=1)
    assert result.reachable is False
    assert "timed out" in result.error


def test_check_host_rejects_bad_ip():
    with pytest.raises(ValueError):
        network_service.check_host("not-an-ip")


@pytest.mark.django_db
def test_network_ping_endpoint(client_for, user, admin_user, monkeypatch):
    monkeypatch.setattr(network_service.requests, "get", lambda url, **kw: _Resp())
    assert client_for(user).post("/api/network/ping/", {"ip_address": "10.0.0.5"}, format="json").status_code == 403

    resp = client_for(admin_user).post("/api/network/ping/", {"ip_address": "10.0.0.5"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["reachable"] is True
    assert resp.json()["protocol"] == "http"

    assert client_for(admin_user).post("/api/network/ping/", {"ip_address": "nope"}, format="json").status_code == 400


@pytest.mark.django_db
def test_employee_ping(client_for, admin_user, alice, monkeypatch):
    monkeypatch.setattr(network_service.requests, "get", lambda url, **kw: _Resp())
    resp = client_for(admin_user).get(f"/api/employees/{alice.id}/ping/")
    assert resp.status_code == 200
    assert resp.json()["ip_address"] == "10.0.0.5"

    no_ip = Employee.objects.create(name="NoIP")
    assert client_for(admin_user).get(f"/api/employees/{no_ip.id}/ping/").status_code == 400
