"""
Unit tests for orders and the payment ledger.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import DuplicateOrderError, OrderNotFoundError
from core.domain.value_objects import OrderStatus
from payments.domain.order import Order, normalize_order_id
from payments.domain.services import OrderCodeGenerator

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


class TestNormalizeOrderId:
    """Tests for order id normalisation."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1700000000000, "1700000000000"),
            ("1700000000000", "1700000000000"),
            ("  42 ", "42"),
            ("", None),
            ("   ", None),
            (None, None),
            (True, None),
            (1.5, None),
            ("a/b", None),
            ("a b", None),
            ("9" * 65, None),
        ],
    )
    def test_normalize(self, value, expected):
        """Test integers and strings map to the same decimal string."""
        assert normalize_order_id(value) == expected


class TestOrder:
    """Tests for Order entity."""

    def test_create_pending(self):
        """Test a new order is pending with no license."""
        order = Order.create("1", 2000, "Pro plan", now=NOW)
        assert order.status == OrderStatus.PENDING
        assert order.license_key is None
        assert not order.is_completed
        assert not order.is_placeholder

    def test_placeholder(self):
        """Test placeholders are pending and flagged."""
        order = Order.placeholder("1", now=NOW)
        assert order.status == OrderStatus.PENDING
        assert order.amount is None
        assert order.is_placeholder

    def test_complete(self):
        """Test completion records the license."""
        order = Order.create("1", 2000, "Pro plan", now=NOW)
        completed = order.complete("PACK-0A1B-2C3D-4E5F-6071", now=NOW)
        assert completed.is_completed
        assert completed.license_key == "PACK-0A1B-2C3D-4E5F-6071"
        assert completed.completed_at == NOW

    def test_complete_twice_keeps_first_license(self):
        """Test completion is terminal."""
        completed = Order.create("1", 2000, "x", now=NOW).complete("PACK-AAAA-AAAA-AAAA-AAAA")
        assert completed.complete("PACK-BBBB-BBBB-BBBB-BBBB") is completed

    def test_completed_requires_license(self):
        """Test a completed order must reference a license."""
        with pytest.raises(ValueError):
            Order(
                order_id="1",
                status=OrderStatus.COMPLETED,
                amount=1,
                description="",
                license_key=None,
                created_at=NOW,
                completed_at=NOW,
            )


class TestOrderCodeGenerator:
    """Tests for order code generation."""

    def test_codes_follow_clock(self, clock):
        """Test codes are milliseconds since the epoch."""
        codes = OrderCodeGenerator(clock)
        assert codes.next_code() == int(clock().timestamp() * 1000)

    def test_codes_strictly_increase(self, clock):
        """Test codes in the same millisecond stay distinct."""
        codes = OrderCodeGenerator(clock)
        generated = [codes.next_code() for _ in range(5)]
        assert generated == sorted(set(generated))

    def test_codes_never_go_back(self, clock):
        """Test a clock step backwards does not reuse codes."""
        codes = OrderCodeGenerator(clock)
        first = codes.next_code()
        clock.advance(timedelta(seconds=-5))
        assert codes.next_code() == first + 1


@pytest.mark.asyncio
class TestPaymentLedger:
    """Tests for PaymentLedger."""

    async def test_create_and_get(self, ledger, clock):
        """Test a created order can be read back."""
        order = await ledger.create("1", 2000, "Pro plan")
        assert await ledger.get("1") == order
        assert order.created_at == clock()

    async def test_create_duplicate(self, ledger):
        """Test order ids are unique."""
        await ledger.create("1", 2000, "Pro plan")
        with pytest.raises(DuplicateOrderError):
            await ledger.create("1", 3000, "Other")
        assert (await ledger.get("1")).amount == 2000

    async def test_get_unknown(self, ledger):
        """Test unknown orders read as None."""
        assert await ledger.get("missing") is None

    async def test_placeholder_for_unknown(self, ledger):
        """Test a placeholder is created for an unknown order."""
        order = await ledger.get_or_create_placeholder("99", amount=500)
        assert order.is_placeholder
        assert order.amount == 500
        assert await ledger.get("99") == order

    async def test_placeholder_keeps_existing(self, ledger):
        """Test an existing order is returned untouched."""
        created = await ledger.create("1", 2000, "Pro plan")
        assert await ledger.get_or_create_placeholder("1") == created

    async def test_mark_completed(self, ledger):
        """Test completion stores the license key."""
        await ledger.create("1", 2000, "Pro plan")
        completed = await ledger.mark_completed("1", "PACK-AAAA-AAAA-AAAA-AAAA")
        assert completed.is_completed
        assert (await ledger.get("1")).license_key == "PACK-AAAA-AAAA-AAAA-AAAA"

    async def test_mark_completed_is_terminal(self, ledger):
        """Test a second completion keeps the first license."""
        await ledger.create("1", 2000, "Pro plan")
        await ledger.mark_completed("1", "PACK-AAAA-AAAA-AAAA-AAAA")
        again = await ledger.mark_completed("1", "PACK-BBBB-BBBB-BBBB-BBBB")
        assert again.license_key == "PACK-AAAA-AAAA-AAAA-AAAA"

    async def test_mark_completed_unknown(self, ledger):
        """Test completing an unknown order fails."""
        with pytest.raises(OrderNotFoundError):
            await ledger.mark_completed("missing", "PACK-AAAA-AAAA-AAAA-AAAA")

    async def test_list_orders_oldest_first(self, ledger, clock):
        """Test orders are listed by creation time."""
        await ledger.create("2", 1, "a")
        clock.advance(timedelta(seconds=1))
        await ledger.create("1", 1, "b")
        assert [o.order_id for o in await ledger.list_orders()] == ["2", "1"]
