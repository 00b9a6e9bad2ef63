"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    licenseKey = serializers.CharField(required=True, max_length=100)
    deviceId = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=500
    )

    def validate_deviceId(self, value):
        """Treat an empty device id as no device."""
        return value or None


class BindDeviceRequestSerializer(serializers.Serializer):
    """Serializer for bind device request."""

    licenseKey = serializers.CharField(required=True, max_length=100)
    deviceId = serializers.CharField(required=True, max_length=500)


class CheckLicenseRequestSerializer(serializers.Serializer):
    """Serializer for check license request."""

    licenseKey = serializers.CharField(required=True, max_length=100)


class CheckDeviceLicenseRequestSerializer(serializers.Serializer):
    """Serializer for check device license request."""

    deviceId = serializers.CharField(required=True, max_length=500)


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    licenseKey = serializers.CharField(source="license_key")
    expiryDate = serializers.DateTimeField(source="expiry_date")


class BindDeviceResponseSerializer(serializers.Serializer):
    """Serializer for bind device response."""

    success = serializers.BooleanField()
    licenseKey = serializers.CharField(source="license_key")
    expiryDate = serializers.DateTimeField(source="expiry_date")
    status = serializers.CharField()


class CheckLicenseResponseSerializer(serializers.Serializer):
    """Serializer for check license response."""

    success = serializers.BooleanField()
    valid = serializers.BooleanField()
    status = serializers.CharField()
    expiryDate = serializers.DateTimeField(source="expiry_date")
    remainingDays = serializers.IntegerField(source="remaining_days")
    deviceBound = serializers.BooleanField(source="device_bound")


class CheckDeviceLicenseResponseSerializer(serializers.Serializer):
    """Serializer for check device license response."""

    success = serializers.BooleanField()
    licenseKey = serializers.CharField(source="license_key")
    valid = serializers.BooleanField()
    expiryDate = serializers.DateTimeField(source="expiry_date")
    remainingDays = serializers.IntegerField(source="remaining_days")
