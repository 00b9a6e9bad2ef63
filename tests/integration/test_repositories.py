"""
Integration tests for repository implementations.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import DuplicateOrderError, LicenseKeyCollisionError
from licenses.domain.license import License
from payments.domain.order import Order

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)
KEY = "PACK-0A1B-2C3D-4E5F-6071"


@pytest.mark.integration
@pytest.mark.asyncio
class TestOrderRepository:
    """Integration tests for InMemoryOrderRepository."""

    async def test_add_and_find(self, order_repository):
        """Test adding and finding an order."""
        order = Order.create("1", 2000, "Pro plan", now=NOW)
        await order_repository.add(order)
        assert await order_repository.find_by_id("1") == order

    async def test_add_duplicate(self, order_repository):
        """Test add refuses an existing id."""
        await order_repository.add(Order.create("1", 2000, "Pro plan", now=NOW))
        with pytest.raises(DuplicateOrderError):
            await order_repository.add(Order.placeholder("1", now=NOW))

    async def test_save_replaces(self, order_repository):
        """Test save overwrites the stored order."""
        order = await order_repository.add(Order.create("1", 2000, "Pro plan", now=NOW))
        await order_repository.save(order.complete(KEY, now=NOW))
        assert (await order_repository.find_by_id("1")).license_key == KEY

    async def test_find_all_sorted(self, order_repository):
        """Test orders come back oldest first."""
        await order_repository.add(Order.create("b", 1, "", now=NOW + timedelta(seconds=1)))
        await order_repository.add(Order.create("a", 1, "", now=NOW))
        assert [o.order_id for o in await order_repository.find_all()] == ["a", "b"]


@pytest.mark.integration
@pytest.mark.asyncio
class TestLicenseRepository:
    """Integration tests for InMemoryLicenseRepository."""

    async def test_add_and_find(self, license_repository):
        """Test adding and finding a license."""
        license = License.create(KEY, "1", NOW + timedelta(days=365), now=NOW)
        await license_repository.add(license)
        assert await license_repository.find_by_key(KEY) == license
        assert await license_repository.find_by_key("PACK-FFFF-FFFF-FFFF-FFFF") is None

    async def test_add_collision(self, license_repository):
        """Test keys are unique."""
        await license_repository.add(License.create(KEY, "1", NOW, now=NOW))
        with pytest.raises(LicenseKeyCollisionError):
            await license_repository.add(License.create(KEY, "2", NOW, now=NOW))
        assert (await license_repository.find_by_key(KEY)).order_id == "1"

    async def test_save_replaces(self, license_repository):
        """Test save overwrites the stored license."""
        license = await license_repository.add(License.create(KEY, "1", NOW, now=NOW))
        await license_repository.save(license.redeem(NOW))
        assert (await license_repository.find_by_key(KEY)).is_redeemed


@pytest.mark.integration
@pytest.mark.asyncio
class TestDeviceIndexRepository:
    """Integration tests for InMemoryDeviceIndexRepository."""

    async def test_bind_and_find(self, device_index):
        """Test a device maps to its latest license."""
        await device_index.bind("a" * 64, KEY)
        await device_index.bind("a" * 64, "PACK-FFFF-FFFF-FFFF-FFFF")
        assert await device_index.find_license_key("a" * 64) == "PACK-FFFF-FFFF-FFFF-FFFF"
        assert await device_index.find_license_key("b" * 64) is None

    async def test_unbind_if(self, device_index):
        """Test unbinding only removes a matching entry."""
        await device_index.bind("a" * 64, KEY)
        await device_index.unbind_if("a" * 64, "PACK-FFFF-FFFF-FFFF-FFFF")
        assert await device_index.find_license_key("a" * 64) == KEY
        await device_index.unbind_if("a" * 64, KEY)
        assert await device_index.find_license_key("a" * 64) is None
