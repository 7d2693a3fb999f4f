from rest_framework import serializers
from it_assets.models import Employee


class CustomPeripheralSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField(allow_blank=True, max_length=100)
    model = serializers.CharField(required=False, allow_blank=True, max_length=100)
    serial = serializers.CharField(required=False, allow_blank=True, max_length=100)


class EmployeeWriteSerializer(serializers.ModelSerializer):
    # unique được kiểm tra ở service (để username/email rỗng -> NULL)
    username = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True, max_length=255)
    custom_peripherals = CustomPeripheralSerializer(many=True, required=False)

    class Meta:
        model = Employee
        fields = [
            "employee_code", "name", "username", "email", "department", "section", "location",
            "computer_name", "computer_serial", "ip_address", "specs",
            "led_model", "led_serial", "printer_model", "printer_serial",
            "scanner_model", "scanner_serial", "keyboard", "mouse",
            "internet_access", "usb_access", "last_pm", "extension_number",
            "custom_peripherals",
        ]


class EmployeeReadSerializer(serializers.ModelSerializer):
    created_by = serializers.IntegerField(source="created_by_id", read_only=True)

    class Meta:
        model = Employee
        fields = [
            "id", "employee_code", "name", "username", "email", "department", "section", "location",
            "computer_name", "computer_serial", "ip_address", "specs",
            "led_model", "led_serial", "printer_model", "printer_serial",
            "scanner_model", "scanner_serial", "keyboard", "mouse",
            "internet_access", "usb_access", "last_pm", "extension_number",
            "custom_peripherals", "created_by", "created_at", "updated_at",
        ]
        read_only_fields = fields


class EmployeeFilterSerializer(serializers.Serializer):
    location = serializers.CharField(required=False, allow_blank=True)
    department = serializers.CharField(required=False, allow_blank=True)
    section = serializers.CharField(required=False, allow_blank=True)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    q = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        # "all" trên UI nghĩa là không lọc
        for key in ("location", "department", "section"):
            if attrs.get(key) in ("", "all"):
                attrs.pop(key, None)
        if attrs.get("date_from") and attrs.get("date_to") and attrs["date_to"] < attrs["date_from"]:
            raise serializers.ValidationError("date_to must be >= date_from")
        return attrs


class EmployeeImportSerializer(serializers.Serializer):
    file = serializers.FileField()


class ImportResultSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    success = serializers.IntegerField()
    failed = serializers.IntegerField()
    errors = serializers.ListField(child=serializers.CharField())
