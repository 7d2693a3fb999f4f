from django.urls import path
from it_assets.views.employee_view import (
    EmployeeListCreateView,
    EmployeeDetailView,
    EmployeeExportView,
    EmployeeImportView,
    EmployeeStatsView,
    EmployeePingView,
)

urlpatterns = [
    # /api/employees/
    path("", EmployeeListCreateView.as_view(), name="employee-list-create"),
    # /api/employees/export/?format=csv|xlsx
    path("export/", EmployeeExportView.as_view(), name="employee-export"),
    # /api/employees/import/
    path("import/", EmployeeImportView.as_view(), name="employee-import"),
    # /api/employees/stats/
    path("stats/", EmployeeStatsView.as_view(), name="employee-stats"),
    # /api/employees/<pk>/
    path("<int:pk>/", EmployeeDetailView.as_view(), name="employee-detail"),
    # /api/employees/<pk>/ping/
    path("<int:pk>/ping/", EmployeePingView.as_view(), name="employee-ping"),
]
