from django.contrib import admin
from django.core.exceptions import PermissionDenied
from django.db import transaction

from .models import Employee, EmployeeAuditLog, Notification, Profile, UserRole
from .services.employee_service import EDITABLE_FIELDS, create_employee, delete_employee, update_employee
from .views.utils import client_ip


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "username", "email", "department", "section", "location", "ip_address", "created_at")
    list_filter = ("location", "department", "internet_access", "usb_access")
    search_fields = ("name", "username", "email", "ip_address", "computer_name", "extension_number")
    readonly_fields = ("created_by", "created_at", "updated_at")

    # ghi qua employee_service để admin site cũng có audit như API
    def save_model(self, request, obj, form, change):
        fields = form.changed_data if change else form.cleaned_data
        data = {k: form.cleaned_data[k] for k in fields if k in EDITABLE_FIELDS}
        try:
            if change:
                update_employee(obj, data, user=request.user, ip=client_ip(request))
            else:
                created = create_employee(data, user=request.user, ip=client_ip(request))
                obj.pk = created.pk
                obj._state.adding = False
        except PermissionError as e:
            raise PermissionDenied(str(e))

    def delete_model(self, request, obj):
        try:
            delete_employee(obj, user=request.user, ip=client_ip(request))
        except PermissionError as e:
            raise PermissionDenied(str(e))

    def delete_queryset(self, request, queryset):
        with transaction.atomic():
            for obj in queryset:
                self.delete_model(request, obj)


@admin.register(EmployeeAuditLog)
class EmployeeAuditLogAdmin(admin.ModelAdmin):
    list_display = ("id", "action", "employee_id", "changed_by", "changed_by_email", "created_at")
    list_filter = ("action",)
    search_fields = ("changed_by_email", "changed_by_name")

    # nhật ký chỉ đọc
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "email", "full_name", "created_at")
    search_fields = ("email", "full_name", "user__username")


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "created_at")
    list_filter = ("role",)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "channel", "title", "object_type", "object_id", "delivered", "created_at")
    list_filter = ("channel", "delivered", "object_type")
    search_fields = ("title", "to_email")
