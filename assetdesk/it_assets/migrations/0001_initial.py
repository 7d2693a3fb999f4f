from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.CharField(blank=True, default="", max_length=254)),
                ("full_name", models.CharField(blank=True, default="", max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "Profile",
            },
        ),
        migrations.CreateModel(
            name="UserRole",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("admin", "Admin"), ("employee", "Employee")], max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="roles", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "UserRole",
                "constraints": [models.UniqueConstraint(fields=("user", "role"), name="uniq_user_role")],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee_code", models.CharField(blank=True, default="", max_length=50)),
                ("name", models.CharField(blank=True, default="", max_length=100)),
                ("username", models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ("email", models.CharField(blank=True, max_length=255, null=True, unique=True)),
                ("department", models.CharField(blank=True, db_index=True, default="", max_length=100)),
                ("section", models.CharField(blank=True, default="", max_length=100)),
                ("location", models.CharField(blank=True, db_index=True, default="", max_length=100)),
                ("computer_name", models.CharField(blank=True, default="", max_length=100)),
                ("computer_serial", models.CharField(blank=True, default="", max_length=100)),
                ("ip_address", models.CharField(blank=True, default="", max_length=45)),
                ("specs", models.CharField(blank=True, default="", max_length=500)),
                ("led_model", models.CharField(blank=True, default="", max_length=100)),
                ("led_serial", models.CharField(blank=True, default="", max_length=100)),
                ("printer_model", models.CharField(blank=True, default="", max_length=100)),
                ("printer_serial", models.CharField(blank=True, default="", max_length=100)),
                ("scanner_model", models.CharField(blank=True, default="", max_length=100)),
                ("scanner_serial", models.CharField(blank=True, default="", max_length=100)),
                ("keyboard", models.CharField(blank=True, default="", max_length=100)),
                ("mouse", models.CharField(blank=True, default="", max_length=100)),
                ("internet_access", models.BooleanField(default=True)),
                ("usb_access", models.BooleanField(blank=True, default=True, null=True)),
                ("last_pm", models.DateField(blank=True, help_text="Ngày bảo trì (PM) gần nhất", null=True)),
                ("extension_number", models.CharField(blank=True, default="", max_length=20)),
                ("custom_peripherals", models.JSONField(blank=True, default=list, help_text="List[{id, name, model, serial}]")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employees_created", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "Employee",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="EmployeeAuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(choices=[("INSERT", "Created"), ("UPDATE", "Updated"), ("DELETE", "Deleted")], max_length=16)),
                ("changed_by", models.IntegerField(blank=True, db_index=True, null=True)),
                ("changed_by_email", models.CharField(blank=True, default="", max_length=254)),
                ("changed_by_name", models.CharField(blank=True, default="", max_length=200)),
                ("old_data", models.JSONField(blank=True, null=True)),
                ("new_data", models.JSONField(blank=True, null=True)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("ip", models.GenericIPAddressField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("employee", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="audit_logs", to="it_assets.employee")),
            ],
            options={
                "db_table": "EmployeeAuditLog",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["-created_at"], name="auditlog_created_desc")],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("object_type", models.CharField(blank=True, default="", help_text="vd: employee", max_length=64)),
                ("object_id", models.CharField(blank=True, default="", help_text="ID đối tượng liên quan (string)", max_length=64)),
                ("to_user", models.IntegerField(blank=True, db_index=True, null=True)),
                ("to_email", models.TextField(blank=True, default="", help_text="Danh sách email, ngăn cách bởi dấu phẩy")),
                ("recipients", models.JSONField(blank=True, help_text="List[int] user_id", null=True)),
                ("channel", models.IntegerField(choices=[(1, "Email")], db_index=True, default=1)),
                ("title", models.CharField(max_length=200)),
                ("payload", models.JSONField(blank=True, null=True)),
                ("delivered", models.BooleanField(db_index=True, default=False)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("attempt_count", models.IntegerField(default=0)),
                ("last_error", models.TextField(blank=True, default="")),
                ("provider_status_code", models.CharField(blank=True, default="", max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "db_table": "Notification",
                "ordering": ["-created_at"],
            },
        ),
    ]
