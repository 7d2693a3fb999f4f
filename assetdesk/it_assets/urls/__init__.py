# it_assets/urls/__init__.py
from django.urls import path, include

urlpatterns = [
    path("employees/", include("it_assets.urls.employee_urls")),
    path("audit-logs/", include("it_assets.urls.audit_urls")),
    path("notifications/", include("it_assets.urls.notification_urls")),
    path("", include("it_assets.urls.access_urls")),
]
