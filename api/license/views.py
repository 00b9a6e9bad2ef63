"""
License API views.

These endpoints are used by the client extension to:
- Activate a license key, optionally on a device
- Bind a license to a device
- Check a license by key, or recover it by device
"""

from dataclasses import asdict

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.license.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    BindDeviceRequestSerializer,
    BindDeviceResponseSerializer,
    CheckDeviceLicenseRequestSerializer,
    CheckDeviceLicenseResponseSerializer,
    CheckLicenseRequestSerializer,
    CheckLicenseResponseSerializer,
)
from core.infrastructure.container import get_container
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.bind_device import BindDeviceCommand
from licenses.application.queries.check_device_license import CheckDeviceLicenseQuery
from licenses.application.queries.check_license import CheckLicenseQuery


class ActivateLicenseView(APIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Redeem a license key. With a device id the license is bound to that "
            "device; the same device may activate again."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: {"description": "Missing key, invalid device id, or license expired"},
            403: {"description": "License bound to another device"},
            404: {"description": "License key not found"},
            409: {"description": "License already activated"},
            429: {"description": "Too many activation attempts"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license."""
        serializer = ActivateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = async_to_sync(get_container().activate_license_handler.handle)(
            ActivateLicenseCommand(
                license_key=serializer.validated_data["licenseKey"],
                device_id=serializer.validated_data.get("deviceId"),
            )
        )
        response_serializer = ActivateLicenseResponseSerializer(
            {"success": True, "message": "Activation successful!", **asdict(result)}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class BindDeviceView(APIView):
    """View for binding a license to a device."""

    @extend_schema(
        operation_id="bind_device",
        summary="Bind Device",
        description="Bind a license to a device. Binding an unused license redeems it.",
        tags=["License API"],
        request=BindDeviceRequestSerializer,
        responses={
            200: BindDeviceResponseSerializer,
            400: {"description": "Missing input or license expired"},
            403: {"description": "License bound to another device"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Bind a license to a device."""
        serializer = BindDeviceRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = async_to_sync(get_container().bind_device_handler.handle)(
            BindDeviceCommand(
                license_key=serializer.validated_data["licenseKey"],
                device_id=serializer.validated_data["deviceId"],
            )
        )
        response_serializer = BindDeviceResponseSerializer({"success": True, **asdict(result)})
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class CheckLicenseView(APIView):
    """View for checking a license by key."""

    @extend_schema(
        operation_id="check_license",
        summary="Check License",
        description="Report validity, expiry and remaining days for a license key.",
        tags=["License API"],
        request=CheckLicenseRequestSerializer,
        responses={
            200: CheckLicenseResponseSerializer,
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Check a license key."""
        serializer = CheckLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = async_to_sync(get_container().check_license_handler.handle)(
            CheckLicenseQuery(license_key=serializer.validated_data["licenseKey"])
        )
        response_serializer = CheckLicenseResponseSerializer({"success": True, **asdict(result)})
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class CheckDeviceLicenseView(APIView):
    """View for recovering the license bound to a device."""

    @extend_schema(
        operation_id="check_device_license",
        summary="Check Device License",
        description="Find the license most recently bound to a device.",
        tags=["License API"],
        request=CheckDeviceLicenseRequestSerializer,
        responses={
            200: CheckDeviceLicenseResponseSerializer,
            404: {"description": "No license bound to this device"},
        },
    )
    def post(self, request: Request) -> Response:
        """Recover a license by device."""
        serializer = CheckDeviceLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = async_to_sync(get_container().check_device_license_handler.handle)(
            CheckDeviceLicenseQuery(device_id=serializer.validated_data["deviceId"])
        )
        response_serializer = CheckDeviceLicenseResponseSerializer(
            {"success": True, **asdict(result)}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)
