from rest_framework import serializers
from it_assets.models import EmployeeAuditLog


def change_summary(log: EmployeeAuditLog) -> str:
    if log.action == EmployeeAuditLog.Action.CREATED:
        return f"Created employee: {(log.new_data or {}).get('name') or 'Unknown'}"
    if log.action == EmployeeAuditLog.Action.DELETED:
        return f"Deleted employee: {(log.old_data or {}).get('name') or 'Unknown'}"
    if log.action == EmployeeAuditLog.Action.UPDATED and log.changes:
        fields = list(log.changes.keys())
        return f"Updated {len(fields)} field{'s' if len(fields) > 1 else ''}: {', '.join(fields)}"
    return "Updated employee record"


class EmployeeAuditLogReadSerializer(serializers.ModelSerializer):
    employee_id = serializers.IntegerField(read_only=True, allow_null=True)
    summary = serializers.SerializerMethodField()

    class Meta:
        model = EmployeeAuditLog
        fields = [
            "id", "employee_id", "action", "changed_by", "changed_by_email", "changed_by_name",
            "old_data", "new_data", "changes", "summary", "created_at",
        ]
        read_only_fields = fields

    def get_summary(self, obj) -> str:
        return change_summary(obj)
