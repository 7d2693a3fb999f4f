from rest_framework import serializers


class MeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    email = serializers.CharField(allow_blank=True)
    full_name = serializers.CharField(allow_blank=True)
    is_admin = serializers.BooleanField()


class PingRequestSerializer(serializers.Serializer):
    ip_address = serializers.IPAddressField()


class PingResultSerializer(serializers.Serializer):
    ip_address = serializers.CharField()
    reachable = serializers.BooleanField()
    protocol = serializers.CharField(allow_null=True)
    status_code = serializers.IntegerField(allow_null=True)
    latency_ms = serializers.IntegerField(allow_null=True)
    error = serializers.CharField(allow_blank=True)


class LocationCountSerializer(serializers.Serializer):
    location = serializers.CharField()
    count = serializers.IntegerField()
