"""
Provider notification parsing.

Both confirmation channels deliver untrusted input. Anything that is
not a well-formed success notification parses to None and is ignored.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payments.domain.order import normalize_order_id

SUCCESS_CODE = "00"
PAID_STATUS = "PAID"

CHANNEL_WEBHOOK = "webhook"
CHANNEL_REDIRECT = "redirect"


@dataclass(frozen=True)
class PaymentConfirmation:
    """A success notification for one order."""

    order_id: str
    amount: Optional[int]
    channel: str


def _amount(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def parse_webhook_body(body: Any) -> Optional[PaymentConfirmation]:
    """
    Parse a PayOS webhook body.

    Expected shape::

        {"code": "00", "success": true, "data": {"orderCode": 123, "amount": 1000}}

    Args:
        body: Decoded JSON body

    Returns:
        PaymentConfirmation, or None if the body is not a success
    """
    if not isinstance(body, Mapping):
        return None
    if body.get("code") != SUCCESS_CODE or body.get("success") is not True:
        return None
    data = body.get("data")
    if not isinstance(data, Mapping):
        return None
    order_id = normalize_order_id(data.get("orderCode"))
    if not order_id:
        return None
    return PaymentConfirmation(
        order_id=order_id, amount=_amount(data.get("amount")), channel=CHANNEL_WEBHOOK
    )


def parse_redirect_query(params: Mapping[str, Any]) -> Optional[PaymentConfirmation]:
    """
    Parse the query string of the provider's return redirect.

    Success requires code=00, status=PAID and cancel other than "true".

    Args:
        params: Query parameters (single values)

    Returns:
        PaymentConfirmation, or None if the redirect is not a success
    """
    if params.get("code") != SUCCESS_CODE or params.get("status") != PAID_STATUS:
        return None
    if str(params.get("cancel", "")).lower() == "true":
        return None
    order_id = normalize_order_id(params.get("orderCode"))
    if not order_id:
        return None
    return PaymentConfirmation(order_id=order_id, amount=None, channel=CHANNEL_REDIRECT)


def is_cancelled_redirect(params: Mapping[str, Any]) -> bool:
    """True when the redirect reports a cancelled checkout."""
    return (
        str(params.get("cancel", "")).lower() == "true"
        or params.get("status") == "CANCELLED"
    )
