# Load tất cả model vào namespace it_assets.models
from .mixins import TimeStampedModel

from .access import Profile, UserRole
from .employee import Employee
from .audit import EmployeeAuditLog
from .notification import Notification

__all__ = [
    "TimeStampedModel",
    "Profile", "UserRole",
    "Employee",
    "EmployeeAuditLog",
    "Notification",
]
