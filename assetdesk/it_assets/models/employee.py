from django.conf import settings
from django.db import models
from .mixins import TimeStampedModel


class Employee(TimeStampedModel):
    """
    Một bản ghi tài sản IT của nhân viên: máy tính, thiết bị ngoại vi, quyền truy cập.
    username/email dùng NULL (không phải "") khi bỏ trống để unique không bị đụng.
    """
    employee_code = models.CharField(max_length=50, blank=True, default="")
    name = models.CharField(max_length=100, blank=True, default="")
    username = models.CharField(max_length=50, unique=True, null=True, blank=True)
    email = models.CharField(max_length=255, unique=True, null=True, blank=True)

    department = models.CharField(max_length=100, blank=True, default="", db_index=True)
    section = models.CharField(max_length=100, blank=True, default="")
    location = models.CharField(max_length=100, blank=True, default="", db_index=True)

    computer_name = models.CharField(max_length=100, blank=True, default="")
    computer_serial = models.CharField(max_length=100, blank=True, default="")
    ip_address = models.CharField(max_length=45, blank=True, default="")
    specs = models.CharField(max_length=500, blank=True, default="")

    led_model = models.CharField(max_length=100, blank=True, default="")
    led_serial = models.CharField(max_length=100, blank=True, default="")
    printer_model = models.CharField(max_length=100, blank=True, default="")
    printer_serial = models.CharField(max_length=100, blank=True, default="")
    scanner_model = models.CharField(max_length=100, blank=True, default="")
    scanner_serial = models.CharField(max_length=100, blank=True, default="")
    keyboard = models.CharField(max_length=100, blank=True, default="")
    mouse = models.CharField(max_length=100, blank=True, default="")

    internet_access = models.BooleanField(default=True)
    usb_access = models.BooleanField(null=True, blank=True, default=True)

    last_pm = models.DateField(null=True, blank=True, help_text="Ngày bảo trì (PM) gần nhất")
    extension_number = models.CharField(max_length=20, blank=True, default="")

    custom_peripherals = models.JSONField(default=list, blank=True, help_text="List[{id, name, model, serial}]")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="employees_created",
    )

    class Meta:
        db_table = "Employee"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name or self.username or f"Employee#{self.pk}"
