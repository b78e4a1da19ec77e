"""
Pricing calculations for the monthly cost breakdown.

Maps a price table and the six usage records to per-category subtotals
and a grand total. Everything here is a pure function: no rounding, no
validation, no I/O. Rounding happens only when values are displayed.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping

from .prices import PriceKey, PriceTable
from .usage import (
    AuthUsage,
    Category,
    FirestoreUsage,
    FunctionsUsage,
    HostingUsage,
    RealtimeDatabaseUsage,
    StorageUsage,
    UsageProfile,
)

LineItems = Dict[str, float]


def firestore_line_items(prices: PriceTable, usage: FirestoreUsage) -> LineItems:
    """Firestore ops are billed per 100k, storage and egress per GiB."""
    return {
        "reads": (usage.reads / 100_000) * prices[PriceKey.FIRESTORE_READ_PER_100K],
        "writes": (usage.writes / 100_000) * prices[PriceKey.FIRESTORE_WRITE_PER_100K],
        "deletes": (usage.deletes / 100_000) * prices[PriceKey.FIRESTORE_DELETE_PER_100K],
        "storage": usage.storage_gib * prices[PriceKey.FIRESTORE_STORAGE_PER_GIB],
        "egress": usage.egress_gib * prices[PriceKey.FIRESTORE_EGRESS_PER_GIB],
    }


def realtime_db_line_items(prices: PriceTable, usage: RealtimeDatabaseUsage) -> LineItems:
    return {
        "storage": usage.storage_gb * prices[PriceKey.RTDB_STORAGE_PER_GB],
        "egress": usage.egress_gb * prices[PriceKey.RTDB_EGRESS_PER_GB],
    }


def storage_line_items(prices: PriceTable, usage: StorageUsage) -> LineItems:
    return {
        "stored": usage.stored_gb * prices[PriceKey.STORAGE_STORED_PER_GB],
        "download": usage.download_gb * prices[PriceKey.STORAGE_DOWNLOAD_PER_GB],
    }


def functions_line_items(prices: PriceTable, usage: FunctionsUsage) -> LineItems:
    """Invocations are billed per million; compute per GB-second and vCPU-second."""
    return {
        "invocations": (usage.invocations / 1_000_000) * prices[PriceKey.FUNCTIONS_INVOCATIONS_PER_MILLION],
        "gb_seconds": usage.gb_seconds * prices[PriceKey.FUNCTIONS_GB_SECOND],
        "vcpu_seconds": usage.vcpu_seconds * prices[PriceKey.FUNCTIONS_VCPU_SECOND],
        "egress": usage.egress_gb * prices[PriceKey.FUNCTIONS_EGRESS_PER_GB],
    }


def hosting_line_items(prices: PriceTable, usage: HostingUsage) -> LineItems:
    return {
        "stored": usage.stored_gb * prices[PriceKey.HOSTING_STORAGE_PER_GB],
        "transfer": usage.transfer_gb * prices[PriceKey.HOSTING_TRANSFER_PER_GB],
    }


def auth_line_items(prices: PriceTable, usage: AuthUsage) -> LineItems:
    return {
        "sms": usage.sms_verifications * prices[PriceKey.AUTH_SMS_PER_VERIFICATION],
    }


# Order matters: subtotals and the grand total are summed in this order
LINE_ITEM_FUNCTIONS: Dict[Category, Callable[[PriceTable, object], LineItems]] = {
    Category.FIRESTORE: firestore_line_items,
    Category.REALTIME_DB: realtime_db_line_items,
    Category.STORAGE: storage_line_items,
    Category.FUNCTIONS: functions_line_items,
    Category.HOSTING: hosting_line_items,
    Category.AUTH: auth_line_items,
}


@dataclass(frozen=True)
class CostBreakdown:
    """Monthly cost per category plus the grand total.

    Derived from inputs on every change and never updated in place.
    """
    subtotals: Mapping[Category, float]
    line_items: Mapping[Category, Mapping[str, float]]
    total: float

    def subtotal(self, category: Category) -> float:
        return self.subtotals[category]


def calculate_breakdown(prices: PriceTable, usage: UsageProfile) -> CostBreakdown:
    """Calculate the monthly cost breakdown for a usage profile.

    Each subtotal is the sum of its category's line items and the total
    is the sum of the subtotals, so ``total == sum(subtotals.values())``
    holds exactly. Negative inputs are multiplied through unchanged;
    clamping is the input layer's job.

    Args:
        prices: Unit prices to apply
        usage: The six usage records for the month

    Returns:
        CostBreakdown with unrounded subtotals and total
    """
    line_items = {}
    subtotals = {}
    for category, line_item_fn in LINE_ITEM_FUNCTIONS.items():
        items = line_item_fn(prices, usage.record(category))
        line_items[category] = MappingProxyType(items)
        subtotals[category] = sum(items.values())

    return CostBreakdown(
        subtotals=MappingProxyType(subtotals),
        line_items=MappingProxyType(line_items),
        total=sum(subtotals.values()),
    )
