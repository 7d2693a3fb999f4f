from django.urls import path
from it_assets.views.audit_view import AuditLogListView

urlpatterns = [
    # /api/audit-logs/?employee_id=&action=&limit=
    path("", AuditLogListView.as_view(), name="audit-log-list"),
]
