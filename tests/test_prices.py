"""
Unit tests for the unit price table.
"""

import pytest

from firebase_cost_estimator.core.prices import (
    DEFAULT_PRICE_TABLE,
    DEFAULT_PRICES,
    PriceKey,
    PriceTable,
    resolve_price_key,
)


class TestPriceTable:
    """Test price table lookups and validation."""

    def test_has_sixteen_keys(self):
        """Verify the fixed price key set."""
        assert len(PriceKey) == 16
        assert len(DEFAULT_PRICE_TABLE.as_dict()) == 16

    def test_default_prices(self):
        """Verify a sample of default unit prices."""
        assert DEFAULT_PRICE_TABLE[PriceKey.FIRESTORE_READ_PER_100K] == 0.03
        assert DEFAULT_PRICE_TABLE[PriceKey.RTDB_STORAGE_PER_GB] == 5.0
        assert DEFAULT_PRICE_TABLE[PriceKey.FUNCTIONS_GB_SECOND] == 0.0000025
        assert DEFAULT_PRICE_TABLE[PriceKey.AUTH_SMS_PER_VERIFICATION] == 0.06

    def test_lookup_by_name(self):
        """Verify lookup by camelCase key name."""
        assert DEFAULT_PRICE_TABLE.get("hostingTransferPerGB") == 0.15
        assert DEFAULT_PRICE_TABLE["firestoreEgressPerGiB"] == 0.12

    def test_unknown_key_raises_error(self):
        """Verify error for unknown price keys."""
        with pytest.raises(ValueError, match="Unknown price key: bogusPerGB"):
            DEFAULT_PRICE_TABLE.get("bogusPerGB")

    def test_missing_keys_rejected(self):
        """Verify a table must cover every key."""
        partial = dict(DEFAULT_PRICES)
        del partial[PriceKey.HOSTING_STORAGE_PER_GB]
        with pytest.raises(ValueError, match="hostingStoragePerGB"):
            PriceTable(partial)

    def test_resolve_price_key(self):
        """Verify keys resolve from members and names."""
        assert resolve_price_key(PriceKey.RTDB_EGRESS_PER_GB) is PriceKey.RTDB_EGRESS_PER_GB
        assert resolve_price_key("rtdbEgressPerGB") is PriceKey.RTDB_EGRESS_PER_GB


class TestCopyOnWrite:
    """Test overrides never mutate an existing table."""

    def test_with_price_returns_new_table(self):
        """Verify with_price leaves the original unchanged."""
        updated = DEFAULT_PRICE_TABLE.with_price(PriceKey.RTDB_STORAGE_PER_GB, 4.5)
        assert updated[PriceKey.RTDB_STORAGE_PER_GB] == 4.5
        assert DEFAULT_PRICE_TABLE[PriceKey.RTDB_STORAGE_PER_GB] == 5.0

    def test_with_overrides(self):
        """Verify several entries can be replaced at once."""
        updated = DEFAULT_PRICE_TABLE.with_overrides({
            "firestoreReadPer100k": 0.06,
            PriceKey.HOSTING_TRANSFER_PER_GB: 0.2,
        })
        assert updated[PriceKey.FIRESTORE_READ_PER_100K] == 0.06
        assert updated[PriceKey.HOSTING_TRANSFER_PER_GB] == 0.2
        assert updated[PriceKey.FIRESTORE_WRITE_PER_100K] == 0.09

    def test_prices_mapping_is_read_only(self):
        """Verify the table's mapping can't be edited in place."""
        with pytest.raises(TypeError):
            DEFAULT_PRICE_TABLE.prices[PriceKey.FIRESTORE_READ_PER_100K] = 1.0

    def test_source_dict_changes_do_not_leak(self):
        """Verify the table keeps its own copy of the prices."""
        source = dict(DEFAULT_PRICES)
        table = PriceTable(source)
        source[PriceKey.FIRESTORE_READ_PER_100K] = 99.0
        assert table[PriceKey.FIRESTORE_READ_PER_100K] == 0.03
