"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class OrderException(DomainException):
    """Base exception for payment ledger errors."""

    pass


class OrderNotFoundError(OrderException):
    """Raised when an order is not found."""

    def __init__(self, message: str = "Order not found"):
        super().__init__(message, code="ORDER_NOT_FOUND")


class DuplicateOrderError(OrderException):
    """Raised when an order id is already recorded in the ledger."""

    def __init__(self, message: str = "Order already exists"):
        super().__init__(message, code="DUPLICATE_ORDER")


class UpstreamError(OrderException):
    """Raised when the payment provider call fails."""

    def __init__(self, message: str = "Payment provider request failed"):
        super().__init__(message, code="UPSTREAM_ERROR")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseExpiredError(LicenseException):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class LicenseAlreadyUsedError(LicenseException):
    """Raised when a redeemed license is activated again without its device."""

    def __init__(self, message: str = "License has already been activated"):
        super().__init__(message, code="LICENSE_ALREADY_USED")


class DeviceMismatchError(LicenseException):
    """Raised when a license is bound to a different device."""

    def __init__(self, message: str = "License is already activated on another device"):
        super().__init__(message, code="DEVICE_MISMATCH")


class DeviceNotBoundError(LicenseException):
    """Raised when no license is bound to a device."""

    def __init__(self, message: str = "No license is bound to this device"):
        super().__init__(message, code="DEVICE_NOT_BOUND")


class LicenseKeyCollisionError(LicenseException):
    """Raised when no unique license key could be generated."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="LICENSE_KEY_COLLISION")


class AdminAccessDeniedError(DomainException):
    """Raised when the admin token is missing or wrong."""

    def __init__(self, message: str = "Admin access denied"):
        super().__init__(message, code="ADMIN_ACCESS_DENIED")
