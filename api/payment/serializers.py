"""
Serializers for Payment API endpoints.

Field names follow the client's camelCase wire format.
"""

from rest_framework import serializers


class CreatePaymentRequestSerializer(serializers.Serializer):
    """Serializer for create payment request."""

    productName = serializers.CharField(required=True, max_length=200, trim_whitespace=True)
    price = serializers.IntegerField(required=True, min_value=1)
    returnUrl = serializers.URLField(required=False)
    cancelUrl = serializers.URLField(required=False)

    def validate_price(self, value):
        """Reject booleans, which IntegerField would otherwise coerce."""
        if isinstance(self.initial_data.get("price"), bool):
            raise serializers.ValidationError("A valid integer is required.")
        return value


class CreatePaymentResponseSerializer(serializers.Serializer):
    """Serializer for create payment response."""

    success = serializers.BooleanField()
    checkoutUrl = serializers.URLField(source="checkout_url")
    orderId = serializers.IntegerField(source="order_id")
    message = serializers.CharField()


class OrderLicenseResponseSerializer(serializers.Serializer):
    """Serializer for license polling response."""

    success = serializers.BooleanField()
    orderId = serializers.CharField(source="order_id")
    status = serializers.ChoiceField(choices=["not_found", "pending", "completed"])
    licenseKey = serializers.CharField(source="license_key", allow_null=True, required=False)
    expiryDate = serializers.DateTimeField(source="expiry_date", allow_null=True, required=False)
    message = serializers.CharField()


class WebhookAckSerializer(serializers.Serializer):
    """Serializer for the webhook acknowledgement."""

    success = serializers.BooleanField()
