from rest_framework import serializers
from it_assets.models import Notification


class NotificationReadSerializer(serializers.ModelSerializer):
    channel_display = serializers.CharField(source="get_channel_display", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id", "channel", "channel_display", "title", "object_type", "object_id",
            "to_email", "recipients", "delivered", "delivered_at", "last_error",
            "provider_status_code", "created_at",
        ]
        read_only_fields = fields


class EmployeeUpdateNotificationSerializer(serializers.Serializer):
    employeeName = serializers.CharField(allow_blank=True, required=False, default="")
    employeeDepartment = serializers.CharField(allow_blank=True, required=False, default="")
    employeeSection = serializers.CharField(allow_blank=True, required=False, default="")
    changedBy = serializers.CharField(allow_blank=True, required=False, default="")
    changedByEmail = serializers.CharField(allow_blank=True, required=False, default="")
    oldData = serializers.DictField()
    newData = serializers.DictField()
