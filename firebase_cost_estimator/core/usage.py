"""
Monthly usage records per product category.

Each category has its own flat, immutable record of usage quantities.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Tuple, Union


class Category(Enum):
    """Product categories that contribute to the monthly bill."""
    FIRESTORE = "firestore"
    REALTIME_DB = "realtime_db"
    STORAGE = "storage"
    FUNCTIONS = "functions"
    HOSTING = "hosting"
    AUTH = "auth"


def resolve_category(category: Union[Category, str]) -> Category:
    """Resolve a category from its enum member or its string name.

    Raises:
        ValueError: If the category is unknown
    """
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise ValueError(f"Unknown category: {category}")


@dataclass(frozen=True)
class FirestoreUsage:
    """Cloud Firestore operations and data volume per month."""
    reads: float = 2_000_000
    writes: float = 1_000_000
    deletes: float = 0
    storage_gib: float = 10
    egress_gib: float = 5


@dataclass(frozen=True)
class RealtimeDatabaseUsage:
    """Realtime Database stored and downloaded data."""
    storage_gb: float = 0
    egress_gb: float = 0


@dataclass(frozen=True)
class StorageUsage:
    """Cloud Storage stored and downloaded data."""
    stored_gb: float = 50
    download_gb: float = 20


@dataclass(frozen=True)
class FunctionsUsage:
    """Cloud Functions invocations, compute time and egress."""
    invocations: float = 5_000_000
    gb_seconds: float = 100_000  # memory time consumed
    vcpu_seconds: float = 50_000  # CPU time consumed
    egress_gb: float = 10


@dataclass(frozen=True)
class HostingUsage:
    """Hosting stored assets and transfer."""
    stored_gb: float = 10
    transfer_gb: float = 50


@dataclass(frozen=True)
class AuthUsage:
    """Phone authentication SMS verifications."""
    sms_verifications: float = 0


UsageRecord = Union[
    FirestoreUsage,
    RealtimeDatabaseUsage,
    StorageUsage,
    FunctionsUsage,
    HostingUsage,
    AuthUsage,
]


def usage_field_names(record: UsageRecord) -> Tuple[str, ...]:
    """Field names of a usage record, in declaration order."""
    return tuple(f.name for f in fields(record))


@dataclass(frozen=True)
class UsageProfile:
    """The six usage records that together describe one month."""
    firestore: FirestoreUsage = field(default_factory=FirestoreUsage)
    realtime_db: RealtimeDatabaseUsage = field(default_factory=RealtimeDatabaseUsage)
    storage: StorageUsage = field(default_factory=StorageUsage)
    functions: FunctionsUsage = field(default_factory=FunctionsUsage)
    hosting: HostingUsage = field(default_factory=HostingUsage)
    auth: AuthUsage = field(default_factory=AuthUsage)

    @classmethod
    def zero(cls) -> "UsageProfile":
        """A profile with every usage quantity set to 0."""
        records = {}
        for category in Category:
            record = getattr(cls(), category.value)
            records[category.value] = replace(
                record, **{name: 0 for name in usage_field_names(record)}
            )
        return cls(**records)

    def record(self, category: Union[Category, str]) -> UsageRecord:
        """Get the usage record for a category."""
        return getattr(self, resolve_category(category).value)

    def with_record(self, record: UsageRecord) -> "UsageProfile":
        """Return a copy of this profile with one record replaced."""
        for category in Category:
            if isinstance(record, type(getattr(self, category.value))):
                return replace(self, **{category.value: record})
        raise ValueError(f"Not a usage record: {record!r}")

    def with_value(self, category: Union[Category, str], name: str, value: float) -> "UsageProfile":
        """Return a copy of this profile with one usage quantity replaced.

        Args:
            category: Category owning the field
            name: Field name within the category's record
            value: New quantity

        Returns:
            New UsageProfile; this one is left untouched

        Raises:
            ValueError: If the category or field is unknown
        """
        category = resolve_category(category)
        record = getattr(self, category.value)
        if name not in usage_field_names(record):
            raise ValueError(f"Unknown field '{name}' for category '{category.value}'")
        return replace(self, **{category.value: replace(record, **{name: float(value)})})
