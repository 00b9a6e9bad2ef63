"""
Unit tests for the License entity and key format.
"""
import re
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import (
    generate_license_key,
    key_prefix_for_logs,
    normalize_key_prefix,
    normalize_license_key,
)

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)
EXPIRY = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def license():
    return License.create("PACK-0A1B-2C3D-4E5F-6071", order_id="1700000000000", expiry_date=EXPIRY, now=NOW)


class TestLicenseKey:
    """Tests for license key generation and normalisation."""

    def test_generated_format(self):
        """Test keys are PREFIX plus four groups of uppercase hex."""
        key = generate_license_key("PACK")
        assert re.fullmatch(r"PACK(-[0-9A-F]{4}){4}", key)

    def test_generated_keys_differ(self):
        """Test keys come from a random source."""
        assert len({generate_license_key() for _ in range(50)}) == 50

    def test_normalize_trims_and_uppercases(self):
        """Test lookup input round-trips through case and whitespace."""
        assert normalize_license_key("  pack-0a1b-2c3d-4e5f-6071 \n") == "PACK-0A1B-2C3D-4E5F-6071"

    @pytest.mark.parametrize(
        "value",
        ["", "   ", None, 123, "PACK-0A1B-2C3D-4E5F", "PACK-0A1B-2C3D-4E5F-60ZZ", "not a key"],
    )
    def test_normalize_rejects_malformed(self, value):
        """Test malformed input yields None."""
        assert normalize_license_key(value) is None

    def test_key_prefix_upper_cased(self):
        """Test a configured prefix is normalised to the key alphabet."""
        assert normalize_key_prefix(" pack ") == "PACK"
        assert normalize_key_prefix("Ext2") == "EXT2"

    @pytest.mark.parametrize("prefix", ["", "  ", "MY_APP", "PA-CK", "PÄCK", None])
    def test_key_prefix_rejects_unresolvable(self, prefix):
        """Test prefixes that could never be looked up are refused."""
        with pytest.raises(ValueError):
            normalize_key_prefix(prefix)

    def test_key_prefix_for_logs(self):
        """Test logs only carry the first group."""
        assert key_prefix_for_logs("PACK-0A1B-2C3D-4E5F-6071") == "PACK-0A1B"


class TestLicense:
    """Tests for License entity."""

    def test_create(self, license):
        """Test a minted license is unredeemed and unbound."""
        assert license.status == LicenseStatus.ACTIVE
        assert license.device_hash is None
        assert license.activated_at is None
        assert not license.is_redeemed
        assert not license.is_bound

    def test_is_valid_boundary(self, license):
        """Test validity is strictly before the expiry instant."""
        assert license.is_valid(EXPIRY - timedelta(microseconds=1))
        assert not license.is_valid(EXPIRY)
        assert not license.is_valid(EXPIRY + timedelta(days=1))

    def test_remaining_days(self, license):
        """Test remaining days count whole days and never go negative."""
        assert license.remaining_days(NOW) == 365
        assert license.remaining_days(EXPIRY + timedelta(days=3)) == 0

    def test_redeem(self, license):
        """Test redemption sets status and activation time once."""
        redeemed = license.redeem(NOW)
        assert redeemed.status == LicenseStatus.USED
        assert redeemed.activated_at == NOW
        assert redeemed.redeem(NOW + timedelta(days=1)).activated_at == NOW
        assert license.status == LicenseStatus.ACTIVE

    def test_bind_redeems(self, license):
        """Test binding an unredeemed license redeems it."""
        bound = license.bind("a" * 64, NOW)
        assert bound.status == LicenseStatus.USED
        assert bound.device_hash == "a" * 64
        assert bound.expiry_date == license.expiry_date

    def test_bound_license_must_be_used(self):
        """Test a bound license can never be active."""
        with pytest.raises(ValueError, match="must be redeemed"):
            License(
                key="PACK-0A1B-2C3D-4E5F-6071",
                order_id="1",
                status=LicenseStatus.ACTIVE,
                expiry_date=EXPIRY,
                device_hash="a" * 64,
                created_at=NOW,
            )
