from rest_framework.views import APIView
from rest_framework.response import Response

from it_assets.models import EmployeeAuditLog
from it_assets.selectors.audit_selector import list_audit_logs
from it_assets.selectors.user_selector import is_admin
from it_assets.serializers.audit_serializer import EmployeeAuditLogReadSerializer
from .utils import extend_schema, extend_schema_view, OpenApiResponse, q_int, q_str, std_errors


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ==============================================================
# /api/audit-logs/?employee_id=&action=&limit=
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Audit"],
        summary="List employee change history (newest first)",
        description="Admin xem toàn bộ; user thường chỉ thấy các thay đổi do chính mình thực hiện.",
        parameters=[
            q_int("employee_id", "Lọc theo Employee ID"),
            q_str("action", "INSERT | UPDATE | DELETE"),
            q_int("limit", "Số bản ghi (mặc định 100, tối đa 500)"),
        ],
        responses={200: OpenApiResponse(EmployeeAuditLogReadSerializer(many=True)), **std_errors()},
    )
)
class AuditLogListView(APIView):

    def get(self, request):
        action = (request.query_params.get("action") or "").strip().upper() or None
        if action and action not in EmployeeAuditLog.Action.values:
            return Response({"detail": "action must be INSERT, UPDATE or DELETE"}, status=400)

        logs = list_audit_logs(
            viewer_id=request.user.pk,
            viewer_is_admin=is_admin(request.user),
            employee_id=_to_int(request.query_params.get("employee_id")),
            action=action,
            limit=_to_int(request.query_params.get("limit")),
        )
        return Response(EmployeeAuditLogReadSerializer(logs, many=True).data)
