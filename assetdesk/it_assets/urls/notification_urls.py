from django.urls import path
from it_assets.views.notification_view import EmployeeUpdateNotificationView, NotificationListView

urlpatterns = [
    # /api/notifications/
    path("", NotificationListView.as_view(), name="notification-list"),
    # /api/notifications/employee-update/
    path("employee-update/", EmployeeUpdateNotificationView.as_view(), name="notification-employee-update"),
]
