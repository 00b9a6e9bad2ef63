"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.license import views

urlpatterns = [
    path(
        "activate-license",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "bind-device",
        views.BindDeviceView.as_view(),
        name="bind-device",
    ),
    path(
        "check-license",
        views.CheckLicenseView.as_view(),
        name="check-license",
    ),
    path(
        "check-device-license",
        views.CheckDeviceLicenseView.as_view(),
        name="check-device-license",
    ),
]
