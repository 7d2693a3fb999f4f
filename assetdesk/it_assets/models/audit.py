from django.db import models


class EmployeeAuditLog(models.Model):
    """
    Nhật ký thay đổi Employee. Bất biến sau khi ghi:
    - save() trên bản ghi đã tồn tại và delete() đều bị chặn.
    - employee dùng SET_NULL để lịch sử vẫn còn khi Employee bị xoá.
    """
    class Action(models.TextChoices):
        CREATED = "INSERT", "Created"
        UPDATED = "UPDATE", "Updated"
        DELETED = "DELETE", "Deleted"

    employee = models.ForeignKey(
        "it_assets.Employee", null=True, blank=True,
        on_delete=models.SET_NULL, related_name="audit_logs",
    )
    action = models.CharField(max_length=16, choices=Action.choices)

    changed_by = models.IntegerField(null=True, blank=True, db_index=True)
    changed_by_email = models.CharField(max_length=254, blank=True, default="")
    changed_by_name = models.CharField(max_length=200, blank=True, default="")

    old_data = models.JSONField(null=True, blank=True)
    new_data = models.JSONField(null=True, blank=True)
    changes = models.JSONField(null=True, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "EmployeeAuditLog"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="auditlog_created_desc"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PermissionError("Audit log entries are immutable.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionError("Audit log entries cannot be deleted.")

    def __str__(self):
        return f"{self.action} Employee#{self.employee_id} by {self.changed_by}"
