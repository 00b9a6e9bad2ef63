"""
URL configuration for payment API endpoints.
"""

from django.urls import path

from api.payment import views

urlpatterns = [
    path(
        "create-payment",
        views.CreatePaymentView.as_view(),
        name="create-payment",
    ),
    path(
        "payment-success",
        views.PaymentSuccessView.as_view(),
        name="payment-success",
    ),
    path(
        "payos-webhook",
        views.PayOSWebhookView.as_view(),
        name="payos-webhook",
    ),
    path(
        "get-license/<str:order_id>",
        views.GetLicenseByOrderView.as_view(),
        name="get-license",
    ),
]
