from rest_framework import serializers, status
from rest_framework.views import APIView
from rest_framework.response import Response

from it_assets.permissions import IsAdminRole
from it_assets.selectors.notification_selector import recent_notifications
from it_assets.serializers.notification_serializer import (
    NotificationReadSerializer,
    EmployeeUpdateNotificationSerializer,
)
from it_assets.services import notification_service as svc
from .utils import extend_schema, extend_schema_view, OpenApiResponse, inline_serializer, q_int, q_str, std_errors


# ==============================================================
# /api/notifications/employee-update/  -> gửi email tóm tắt cho admin
# ==============================================================
@extend_schema_view(
    post=extend_schema(
        tags=["Notification"],
        summary="Email all admins a summary of an employee record change",
        request=EmployeeUpdateNotificationSerializer,
        responses={
            200: inline_serializer(
                name="EmployeeUpdateNotificationResult",
                fields={
                    "message": serializers.CharField(),
                    "recipients": serializers.IntegerField(required=False),
                    "changes": serializers.IntegerField(required=False),
                },
            ),
            500: inline_serializer(name="NotificationError", fields={"error": serializers.CharField()}),
            **std_errors(),
        },
    )
)
class EmployeeUpdateNotificationView(APIView):

    def post(self, request):
        ser = EmployeeUpdateNotificationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        code, body = svc.send_employee_update_notification(ser.validated_data)
        return Response(body, status=code)


# ==============================================================
# /api/notifications/  (admin) -> nhật ký gửi
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Notification"],
        summary="Recent notification delivery log (admin)",
        parameters=[
            q_str("object_type", "Lọc theo object_type, ví dụ 'employee'"),
            q_int("limit", "Số bản ghi (mặc định 200)"),
        ],
        responses={200: OpenApiResponse(NotificationReadSerializer(many=True)), **std_errors()},
    )
)
class NotificationListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit") or 200)
        except ValueError:
            return Response({"detail": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
        limit = max(1, min(limit, 500))
        rows = recent_notifications(object_type=request.query_params.get("object_type") or None, limit=limit)
        return Response(NotificationReadSerializer(rows, many=True).data)
