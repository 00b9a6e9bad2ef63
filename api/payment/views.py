"""
Payment API views.

These endpoints are used by the client extension and by PayOS to:
- Create a checkout link
- Confirm payments (return redirect and webhook)
- Poll for the license issued for an order
"""

import logging

from asgiref.sync import async_to_sync
from django.shortcuts import render
from django.views import View
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.payment.serializers import (
    CreatePaymentRequestSerializer,
    CreatePaymentResponseSerializer,
    OrderLicenseResponseSerializer,
    WebhookAckSerializer,
)
from confirmations.application.commands.confirm_payment import ConfirmPaymentCommand
from confirmations.domain.notifications import (
    CHANNEL_REDIRECT,
    CHANNEL_WEBHOOK,
    is_cancelled_redirect,
    parse_redirect_query,
    parse_webhook_body,
)
from core.infrastructure.container import get_container
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import payment_confirmations_total, webhook_errors_total
from payments.application.commands.create_payment import CreatePaymentCommand
from payments.application.queries.get_license_by_order import GetLicenseByOrderQuery

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

ORDER_STATUS_MESSAGES = {
    "not_found": "Waiting for payment confirmation...",
    "pending": "Waiting for payment...",
    "completed": "Payment successful!",
}


class CreatePaymentView(APIView):
    """View for creating a checkout link."""

    @extend_schema(
        operation_id="create_payment",
        summary="Create Payment",
        description=(
            "Create a PayOS checkout link for a product. The order is recorded "
            "only after the provider returns a link."
        ),
        tags=["Payment API"],
        request=CreatePaymentRequestSerializer,
        responses={
            200: CreatePaymentResponseSerializer,
            400: {"description": "Missing product name or invalid price"},
            502: {"description": "Payment provider request failed"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a checkout link."""
        serializer = CreatePaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = CreatePaymentCommand(
            product_name=data["productName"],
            price=data["price"],
            return_url=data.get("returnUrl"),
            cancel_url=data.get("cancelUrl"),
        )
        result = async_to_sync(get_container().create_payment_handler.handle)(command)

        response_serializer = CreatePaymentResponseSerializer(
            {
                "success": True,
                "checkout_url": result.checkout_url,
                "order_id": result.order_id,
                "message": "Payment link created",
            }
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class PayOSWebhookView(APIView):
    """
    Receiver for PayOS payment notifications.

    Always acknowledges with 200 so the provider does not retry;
    failures are logged and counted instead.
    """

    @extend_schema(
        operation_id="payos_webhook",
        summary="PayOS Webhook",
        description="Payment notification from PayOS. Always acknowledged.",
        tags=["Payment API"],
        request=None,
        responses={200: WebhookAckSerializer},
    )
    def post(self, request: Request) -> Response:
        """Handle a payment notification."""
        with tracer.start_as_current_span("payos_webhook") as span:
            try:
                body = request.data
            except (ParseError, UnsupportedMediaType):
                body = None

            try:
                confirmation = parse_webhook_body(body)
                if confirmation is None:
                    payment_confirmations_total.labels(
                        channel=CHANNEL_WEBHOOK, outcome="ignored"
                    ).inc()
                    logger.info("Webhook is not a payment success, ignoring")
                else:
                    span.set_attribute("order.id", confirmation.order_id)
                    async_to_sync(get_container().confirm_payment_handler.handle)(
                        ConfirmPaymentCommand(
                            order_id=confirmation.order_id,
                            amount=confirmation.amount,
                            channel=CHANNEL_WEBHOOK,
                        )
                    )
            except Exception:  # pylint: disable=broad-exception-caught
                webhook_errors_total.inc()
                span.set_status(Status(StatusCode.ERROR, "webhook processing failed"))
                logger.exception("Webhook processing failed")

            return Response({"success": True}, status=status.HTTP_200_OK)


class GetLicenseByOrderView(APIView):
    """View polled by the client until its order has a license."""

    @extend_schema(
        operation_id="get_license_by_order",
        summary="Get License By Order",
        description="Return not_found, pending, or completed with the issued license.",
        tags=["Payment API"],
        parameters=[
            OpenApiParameter(
                name="order_id",
                type=str,
                location=OpenApiParameter.PATH,
                description="Order id returned by create-payment",
            ),
        ],
        responses={200: OrderLicenseResponseSerializer},
    )
    def get(self, request: Request, order_id: str) -> Response:
        """Return the issuance status of an order."""
        result = async_to_sync(get_container().get_license_by_order_handler.handle)(
            GetLicenseByOrderQuery(order_id=order_id)
        )
        response_serializer = OrderLicenseResponseSerializer(
            {
                "success": result.status == "completed",
                "order_id": result.order_id,
                "status": result.status,
                "license_key": result.license_key,
                "expiry_date": result.expiry_date,
                "message": ORDER_STATUS_MESSAGES[result.status],
            }
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class PaymentSuccessView(View):
    """
    Human-facing page PayOS redirects to after checkout.

    A successful redirect is a second confirmation channel; the page
    shows the issued license when the confirmation goes through.
    """

    template_name = "payments/payment_success.html"

    def get(self, request):
        """Render the checkout result page."""
        params = request.GET.dict()
        confirmation = parse_redirect_query(params)

        if confirmation is not None:
            with tracer.start_as_current_span("payment_redirect") as span:
                span.set_attribute("order.id", confirmation.order_id)
                try:
                    result = async_to_sync(get_container().confirm_payment_handler.handle)(
                        ConfirmPaymentCommand(
                            order_id=confirmation.order_id,
                            amount=confirmation.amount,
                            channel=CHANNEL_REDIRECT,
                        )
                    )
                except Exception:  # pylint: disable=broad-exception-caught
                    span.set_status(Status(StatusCode.ERROR, "redirect confirmation failed"))
                    logger.exception(
                        "Redirect confirmation failed",
                        extra={"order_id": confirmation.order_id},
                    )
                    return render(
                        request,
                        self.template_name,
                        {
                            "outcome": "pending",
                            "title": "Payment pending",
                            "order_id": confirmation.order_id,
                        },
                    )
            return render(
                request,
                self.template_name,
                {
                    "outcome": "confirmed",
                    "title": "Payment successful!",
                    "order_id": result.order.order_id,
                    "license_key": result.license.key,
                    "expiry_date": result.license.expiry_date,
                },
            )

        payment_confirmations_total.labels(channel=CHANNEL_REDIRECT, outcome="ignored").inc()
        if is_cancelled_redirect(params):
            context = {"outcome": "cancelled", "title": "Payment cancelled"}
        else:
            context = {
                "outcome": "pending",
                "title": "Payment pending",
                "order_id": params.get("orderCode", ""),
            }
        return render(request, self.template_name, context)
