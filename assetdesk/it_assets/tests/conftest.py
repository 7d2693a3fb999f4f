import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from it_assets.models import Employee, UserRole

User = get_user_model()


@pytest.fixture(autouse=True)
def _sync_notify(settings):
    # gửi mail inline để test đọc được mail.outbox
    settings.EMPLOYEE_NOTIFY_ASYNC = False
    settings.DEFAULT_FROM_EMAIL = "noreply@example.com"
    settings.EMAIL_SUBJECT_PREFIX = ""


@pytest.fixture
def user(db):
    return User.objects.create_user(username="tester", password="pass", email="tester@example.com", first_name="Test", last_name="User")

@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="other", password="pass", email="other@example.com")

@pytest.fixture
def admin_user(db):
    u = User.objects.create_user(username="itadmin", password="pass", email="admin@example.com", first_name="IT", last_name="Admin")
    UserRole.objects.create(user=u, role=UserRole.Role.ADMIN)
    return u

@pytest.fixture
def client_for():
    def _make(u):
        c = APIClient()
        c.force_authenticate(user=u)
        return c
    return _make

@pytest.fixture
def alice(db, user):
    return Employee.objects.create(
        name="Alice", username="alice", email="alice@example.com",
        department="IT", section="Support", location="HQ",
        computer_name="PC-ALICE", ip_address="10.0.0.5", extension_number="101",
        internet_access=True, usb_access=True, created_by=user,
    )

@pytest.fixture
def employee_payload():
    return {
        "name": "Bob",
        "username": "bob",
        "email": "bob@example.com",
        "department": "Finance",
        "section": "AP",
        "location": "Branch 1",
        "internet_access": True,
        "usb_access": False,
        "custom_peripherals": [
            {"name": "Headset", "model": "H390", "serial": "HS-1"},
            {"name": "", "model": "ignored"},
        ],
    }
