"""
Form field catalogue.

Describes every input on the estimator form: its label, step granularity
and minimum. Usage fields are grouped per category, prices listed in
PriceKey order.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .prices import PriceKey
from .usage import Category


@dataclass(frozen=True)
class FieldSpec:
    """A single numeric form input."""
    name: str
    label: str
    step: float = 1
    minimum: float = 0.0


@dataclass(frozen=True)
class CategorySection:
    """A titled group of usage inputs for one category."""
    category: Category
    title: str
    fields: Tuple[FieldSpec, ...]
    hint: Optional[str] = None

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise ValueError(f"Unknown field '{name}' for category '{self.category.value}'")


USAGE_SECTIONS: Dict[Category, CategorySection] = {
    Category.FIRESTORE: CategorySection(
        category=Category.FIRESTORE,
        title="Cloud Firestore",
        fields=(
            FieldSpec("reads", "Reads / month"),
            FieldSpec("writes", "Writes / month"),
            FieldSpec("deletes", "Deletes / month"),
            FieldSpec("storage_gib", "Stored (GiB)", step=0.1),
            FieldSpec("egress_gib", "Egress (GiB)", step=0.1),
        ),
    ),
    Category.REALTIME_DB: CategorySection(
        category=Category.REALTIME_DB,
        title="Realtime Database",
        fields=(
            FieldSpec("storage_gb", "Stored (GB)", step=0.1),
            FieldSpec("egress_gb", "Egress (GB)", step=0.1),
        ),
    ),
    Category.STORAGE: CategorySection(
        category=Category.STORAGE,
        title="Cloud Storage (files)",
        fields=(
            FieldSpec("stored_gb", "Stored (GB)", step=0.1),
            FieldSpec("download_gb", "Downloaded (GB)", step=0.1),
        ),
    ),
    Category.FUNCTIONS: CategorySection(
        category=Category.FUNCTIONS,
        title="Cloud Functions",
        fields=(
            FieldSpec("invocations", "Invocations / month"),
            FieldSpec("gb_seconds", "GB-seconds / month"),
            FieldSpec("vcpu_seconds", "vCPU-seconds / month"),
            FieldSpec("egress_gb", "Egress (GB)", step=0.1),
        ),
    ),
    Category.HOSTING: CategorySection(
        category=Category.HOSTING,
        title="Hosting",
        fields=(
            FieldSpec("stored_gb", "Stored (GB)", step=0.1),
            FieldSpec("transfer_gb", "Transfer (GB)", step=0.1),
        ),
    ),
    Category.AUTH: CategorySection(
        category=Category.AUTH,
        title="Authentication (SMS)",
        fields=(
            FieldSpec("sms_verifications", "SMS verifications / month"),
        ),
        hint=(
            "SMS pricing varies by country. Override authSmsPerVerification "
            "to match your target market."
        ),
    ),
}

PRICE_FIELDS: Dict[PriceKey, FieldSpec] = {
    PriceKey.FIRESTORE_READ_PER_100K: FieldSpec(PriceKey.FIRESTORE_READ_PER_100K.value, "Firestore Read per 100k", step=0.001),
    PriceKey.FIRESTORE_WRITE_PER_100K: FieldSpec(PriceKey.FIRESTORE_WRITE_PER_100K.value, "Firestore Write per 100k", step=0.001),
    PriceKey.FIRESTORE_DELETE_PER_100K: FieldSpec(PriceKey.FIRESTORE_DELETE_PER_100K.value, "Firestore Delete per 100k", step=0.001),
    PriceKey.FIRESTORE_STORAGE_PER_GIB: FieldSpec(PriceKey.FIRESTORE_STORAGE_PER_GIB.value, "Firestore Storage $/GiB", step=0.001),
    PriceKey.FIRESTORE_EGRESS_PER_GIB: FieldSpec(PriceKey.FIRESTORE_EGRESS_PER_GIB.value, "Firestore Egress $/GiB", step=0.01),
    PriceKey.RTDB_STORAGE_PER_GB: FieldSpec(PriceKey.RTDB_STORAGE_PER_GB.value, "Realtime DB Storage $/GB", step=0.1),
    PriceKey.RTDB_EGRESS_PER_GB: FieldSpec(PriceKey.RTDB_EGRESS_PER_GB.value, "Realtime DB Egress $/GB", step=0.1),
    PriceKey.STORAGE_STORED_PER_GB: FieldSpec(PriceKey.STORAGE_STORED_PER_GB.value, "Cloud Storage Stored $/GB", step=0.001),
    PriceKey.STORAGE_DOWNLOAD_PER_GB: FieldSpec(PriceKey.STORAGE_DOWNLOAD_PER_GB.value, "Cloud Storage Download $/GB", step=0.01),
    PriceKey.FUNCTIONS_INVOCATIONS_PER_MILLION: FieldSpec(PriceKey.FUNCTIONS_INVOCATIONS_PER_MILLION.value, "Functions Invocations $/1M", step=0.01),
    PriceKey.FUNCTIONS_GB_SECOND: FieldSpec(PriceKey.FUNCTIONS_GB_SECOND.value, "Functions GB-second $", step=0.0000001),
    PriceKey.FUNCTIONS_VCPU_SECOND: FieldSpec(PriceKey.FUNCTIONS_VCPU_SECOND.value, "Functions vCPU-second $", step=0.000001),
    PriceKey.FUNCTIONS_EGRESS_PER_GB: FieldSpec(PriceKey.FUNCTIONS_EGRESS_PER_GB.value, "Functions Egress $/GB", step=0.01),
    PriceKey.HOSTING_STORAGE_PER_GB: FieldSpec(PriceKey.HOSTING_STORAGE_PER_GB.value, "Hosting Storage $/GB", step=0.001),
    PriceKey.HOSTING_TRANSFER_PER_GB: FieldSpec(PriceKey.HOSTING_TRANSFER_PER_GB.value, "Hosting Transfer $/GB", step=0.01),
    PriceKey.AUTH_SMS_PER_VERIFICATION: FieldSpec(PriceKey.AUTH_SMS_PER_VERIFICATION.value, "Auth SMS $/verification", step=0.01),
}

BUDGET_FIELD = FieldSpec("budget", "Budget (USD)", step=1)
