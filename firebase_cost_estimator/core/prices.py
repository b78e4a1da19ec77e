"""
Unit price table and price management.

Holds the per-unit prices every cost formula reads from. Prices are
public list prices (USD, Aug 2025) and can be overridden entry by entry.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Union


class PriceKey(Enum):
    """The fixed set of overridable unit prices."""
    # Firestore (per 100k ops, per GiB)
    FIRESTORE_READ_PER_100K = "firestoreReadPer100k"
    FIRESTORE_WRITE_PER_100K = "firestoreWritePer100k"
    FIRESTORE_DELETE_PER_100K = "firestoreDeletePer100k"
    FIRESTORE_STORAGE_PER_GIB = "firestoreStoragePerGiB"
    FIRESTORE_EGRESS_PER_GIB = "firestoreEgressPerGiB"
    # Realtime Database
    RTDB_STORAGE_PER_GB = "rtdbStoragePerGB"
    RTDB_EGRESS_PER_GB = "rtdbEgressPerGB"
    # Cloud Storage (operation costs are not modelled)
    STORAGE_STORED_PER_GB = "storageStoredPerGB"
    STORAGE_DOWNLOAD_PER_GB = "storageDownloadPerGB"
    # Cloud Functions (blended 2nd gen compute)
    FUNCTIONS_INVOCATIONS_PER_MILLION = "functionsInvocationsPerMillion"
    FUNCTIONS_GB_SECOND = "functionsGBSecond"
    FUNCTIONS_VCPU_SECOND = "functionsVCPUSecond"
    FUNCTIONS_EGRESS_PER_GB = "functionsEgressPerGB"
    # Hosting
    HOSTING_STORAGE_PER_GB = "hostingStoragePerGB"
    HOSTING_TRANSFER_PER_GB = "hostingTransferPerGB"
    # Authentication (SMS, country specific)
    AUTH_SMS_PER_VERIFICATION = "authSmsPerVerification"


def resolve_price_key(key: Union[PriceKey, str]) -> PriceKey:
    """Resolve a price key from its enum member or its string name.

    Args:
        key: PriceKey member or its camelCase value (e.g. "rtdbStoragePerGB")

    Returns:
        The matching PriceKey

    Raises:
        ValueError: If the key is not a known price key
    """
    if isinstance(key, PriceKey):
        return key
    try:
        return PriceKey(key)
    except ValueError:
        raise ValueError(f"Unknown price key: {key}")


@dataclass(frozen=True)
class PriceTable:
    """Immutable mapping of every PriceKey to its unit price.

    Overrides never mutate a table; they return a new one so the pricing
    function can treat its input as a plain value.
    """
    prices: Mapping[PriceKey, float]

    def __post_init__(self):
        """Validate the table covers every price key exactly once."""
        missing = set(PriceKey) - set(self.prices)
        if missing:
            names = sorted(key.value for key in missing)
            raise ValueError(f"Price table missing keys: {names}")
        unknown = [key for key in self.prices if not isinstance(key, PriceKey)]
        if unknown:
            raise ValueError(f"Unknown price keys: {unknown}")
        # Freeze a private copy so callers can't edit the table through their dict
        frozen = MappingProxyType({key: float(self.prices[key]) for key in PriceKey})
        object.__setattr__(self, "prices", frozen)

    def get(self, key: Union[PriceKey, str]) -> float:
        """Get the unit price for a key.

        Raises:
            ValueError: If the key is not a known price key
        """
        return self.prices[resolve_price_key(key)]

    def __getitem__(self, key: Union[PriceKey, str]) -> float:
        return self.get(key)

    def with_price(self, key: Union[PriceKey, str], value: float) -> "PriceTable":
        """Return a copy of this table with one entry replaced."""
        updated = dict(self.prices)
        updated[resolve_price_key(key)] = float(value)
        return PriceTable(updated)

    def with_overrides(self, overrides: Mapping[Union[PriceKey, str], float]) -> "PriceTable":
        """Return a copy of this table with several entries replaced."""
        updated = dict(self.prices)
        for key, value in overrides.items():
            updated[resolve_price_key(key)] = float(value)
        return PriceTable(updated)

    def as_dict(self) -> Dict[str, float]:
        """Prices keyed by their camelCase names, in declaration order."""
        return {key.value: self.prices[key] for key in PriceKey}


DEFAULT_PRICES: Dict[PriceKey, float] = {
    PriceKey.FIRESTORE_READ_PER_100K: 0.03,
    PriceKey.FIRESTORE_WRITE_PER_100K: 0.09,
    PriceKey.FIRESTORE_DELETE_PER_100K: 0.01,
    PriceKey.FIRESTORE_STORAGE_PER_GIB: 0.026,
    PriceKey.FIRESTORE_EGRESS_PER_GIB: 0.12,
    PriceKey.RTDB_STORAGE_PER_GB: 5.0,
    PriceKey.RTDB_EGRESS_PER_GB: 1.0,
    PriceKey.STORAGE_STORED_PER_GB: 0.026,
    PriceKey.STORAGE_DOWNLOAD_PER_GB: 0.12,
    PriceKey.FUNCTIONS_INVOCATIONS_PER_MILLION: 0.40,
    PriceKey.FUNCTIONS_GB_SECOND: 0.0000025,
    PriceKey.FUNCTIONS_VCPU_SECOND: 0.000024,
    PriceKey.FUNCTIONS_EGRESS_PER_GB: 0.12,
    PriceKey.HOSTING_STORAGE_PER_GB: 0.026,
    PriceKey.HOSTING_TRANSFER_PER_GB: 0.15,
    PriceKey.AUTH_SMS_PER_VERIFICATION: 0.06,
}

DEFAULT_PRICE_TABLE = PriceTable(DEFAULT_PRICES)
