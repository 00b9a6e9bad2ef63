"""
Payment gateway port (interface).

Outbound contract for creating a hosted checkout with the provider.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentRequest:
    """Data sent to the provider to open a checkout."""

    order_code: int
    amount: int
    description: str
    return_url: str
    cancel_url: str


@dataclass(frozen=True)
class PaymentLink:
    """Checkout created by the provider."""

    order_code: int
    checkout_url: str


class PaymentGateway(ABC):
    """Abstract payment provider."""

    @abstractmethod
    def create_payment_link(self, request: PaymentRequest) -> PaymentLink:
        """
        Create a hosted checkout for an order.

        Args:
            request: Payment request data

        Returns:
            PaymentLink with the checkout URL

        Raises:
            UpstreamError: If the provider call fails
        """
        pass
