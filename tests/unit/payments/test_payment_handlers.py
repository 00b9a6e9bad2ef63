"""
Unit tests for payment application handlers.
"""
import pytest

from core.domain.exceptions import UpstreamError
from core.infrastructure.events import event_bus
from payments.application.commands.create_payment import CreatePaymentCommand
from payments.application.handlers.create_payment_handler import (
    MAX_DESCRIPTION_LENGTH,
    CreatePaymentHandler,
)
from payments.application.handlers.get_license_by_order_handler import GetLicenseByOrderHandler
from payments.application.queries.get_license_by_order import GetLicenseByOrderQuery
from payments.domain.events import OrderCreated
from payments.domain.services import OrderCodeGenerator

RETURN_URL = "http://testserver/api/payment-success"


class Recorder:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def create_handler(ledger, fake_gateway, clock):
    return CreatePaymentHandler(
        ledger,
        fake_gateway,
        OrderCodeGenerator(clock),
        default_return_url=RETURN_URL,
        default_cancel_url=RETURN_URL,
    )


@pytest.fixture
def created_events():
    recorder = Recorder()
    event_bus.subscribe(OrderCreated, recorder)
    return recorder.events


@pytest.mark.asyncio
class TestCreatePaymentHandler:
    """Tests for CreatePaymentHandler."""

    async def test_creates_order_after_link(self, create_handler, ledger, fake_gateway, clock, created_events):
        """Test a pending order is recorded once the link exists."""
        result = await create_handler.handle(CreatePaymentCommand(product_name="Pro plan", price=2000))

        assert result.order_id == int(clock().timestamp() * 1000)
        assert result.checkout_url == f"https://pay.payos.vn/web/{result.order_id}"
        order = await ledger.get(str(result.order_id))
        assert order.amount == 2000
        assert not order.is_completed
        assert [e.order_id for e in created_events] == [str(result.order_id)]

        request = fake_gateway.requests[0]
        assert request.return_url == RETURN_URL
        assert request.cancel_url == RETURN_URL

    async def test_custom_urls(self, create_handler, fake_gateway):
        """Test caller-supplied return and cancel URLs are forwarded."""
        await create_handler.handle(
            CreatePaymentCommand(
                product_name="Pro plan",
                price=2000,
                return_url="https://ext.example/ok",
                cancel_url="https://ext.example/cancel",
            )
        )
        request = fake_gateway.requests[0]
        assert request.return_url == "https://ext.example/ok"
        assert request.cancel_url == "https://ext.example/cancel"

    async def test_description_truncated(self, create_handler, fake_gateway):
        """Test long product names are cut to the provider limit."""
        await create_handler.handle(CreatePaymentCommand(product_name="X" * 40, price=2000))
        assert fake_gateway.requests[0].description == "X" * MAX_DESCRIPTION_LENGTH

    async def test_distinct_codes(self, create_handler):
        """Test two checkouts in the same millisecond get different codes."""
        first = await create_handler.handle(CreatePaymentCommand(product_name="A", price=1))
        second = await create_handler.handle(CreatePaymentCommand(product_name="B", price=1))
        assert first.order_id != second.order_id

    async def test_gateway_failure_leaves_no_order(self, create_handler, failing_gateway, ledger, created_events):
        """Test nothing is recorded when the provider call fails."""
        with pytest.raises(UpstreamError):
            await create_handler.handle(CreatePaymentCommand(product_name="Pro plan", price=2000))
        assert await ledger.list_orders() == []
        assert created_events == []

    async def test_confirmation_arrived_first(self, create_handler, ledger, clock, created_events):
        """Test an order already present in the ledger is left alone."""
        order_code = int(clock().timestamp() * 1000)
        placeholder = await ledger.get_or_create_placeholder(str(order_code))

        result = await create_handler.handle(CreatePaymentCommand(product_name="Pro plan", price=2000))

        assert result.order_id == order_code
        assert await ledger.get(str(order_code)) == placeholder
        assert created_events == []


@pytest.mark.asyncio
class TestGetLicenseByOrderHandler:
    """Tests for GetLicenseByOrderHandler."""

    @pytest.fixture
    def handler(self, ledger, registry):
        return GetLicenseByOrderHandler(ledger, registry)

    async def test_unknown_order(self, handler):
        """Test unknown orders report not_found."""
        result = await handler.handle(GetLicenseByOrderQuery(order_id="123"))
        assert result.status == "not_found"
        assert result.license_key is None

    async def test_malformed_order_id(self, handler):
        """Test unusable ids report not_found."""
        result = await handler.handle(GetLicenseByOrderQuery(order_id="  "))
        assert result.status == "not_found"

    async def test_pending_order(self, handler, ledger):
        """Test pending orders report pending."""
        await ledger.create("123", 2000, "Pro plan")
        result = await handler.handle(GetLicenseByOrderQuery(order_id="123"))
        assert result.status == "pending"
        assert result.license_key is None

    async def test_completed_order(self, handler, reconciler, ledger):
        """Test completed orders carry the key and expiry."""
        await ledger.create("123", 2000, "Pro plan")
        confirmation = await reconciler.confirm_payment("123")

        result = await handler.handle(GetLicenseByOrderQuery(order_id="123"))

        assert result.status == "completed"
        assert result.license_key == confirmation.license.key
        assert result.expiry_date == confirmation.license.expiry_date
