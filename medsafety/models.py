from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from .matcher import pair_key

class MedicationStatus(Enum):
    PRESCRIBED = "prescribed"
    SENT_TO_PHARMACY = "sent_to_pharmacy"
    PICKED_UP = "picked_up"
    ACTIVE = "active"
    DISCONTINUED = "discontinued"

    def next_status(self) -> "MedicationStatus":
        """
        Advance one step along prescribed -> sent_to_pharmacy -> picked_up -> active.
        Active and discontinued medications stay where they are.
        """
        if self in (MedicationStatus.ACTIVE, MedicationStatus.DISCONTINUED):
            return self
        order = _STATUS_SEQUENCE
        return order[order.index(self) + 1]

_STATUS_SEQUENCE = [
    MedicationStatus.PRESCRIBED,
    MedicationStatus.SENT_TO_PHARMACY,
    MedicationStatus.PICKED_UP,
    MedicationStatus.ACTIVE,
]

class Severity(Enum):
    MAJOR = "major"
    MODERATE = "moderate"

class Provenance(Enum):
    REFERENCE_DATABASE = "reference_database"
    OPENFDA = "openfda"

class ConflictReason(Enum):
    DIRECT = "direct"
    SAME_CLASS = "same_class"
    CROSS_REACTIVE = "cross_reactive"
    TRANSITIVE_INTERACTION = "transitive_interaction"

def _coerce_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])

@dataclass
class Medication:
    """Medication record as kept on a patient profile"""
    id: str
    name: str
    dosage: str = ""
    frequency: str = ""
    doctor: Optional[str] = None
    reason: str = ""  # comma-joined indications
    refill_date: Optional[date] = None
    created_at: datetime = field(default_factory=datetime.now)
    status: MedicationStatus = MedicationStatus.PRESCRIBED

    def __post_init__(self):
        self.refill_date = _coerce_date(self.refill_date)
        if isinstance(self.created_at, str):
            self.created_at = datetime.fromisoformat(self.created_at)
        if not isinstance(self.status, MedicationStatus):
            self.status = MedicationStatus(self.status)

    @property
    def reasons(self) -> List[str]:
        return [r.strip() for r in self.reason.split(",") if r.strip()]

    def advance_status(self) -> MedicationStatus:
        self.status = self.status.next_status()
        return self.status

    def discontinue(self):
        self.status = MedicationStatus.DISCONTINUED

@dataclass
class Allergy:
    """Declared allergen, matched purely by name"""
    id: str
    name: str
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if isinstance(self.created_at, str):
            self.created_at = datetime.fromisoformat(self.created_at)

@dataclass(frozen=True)
class Interaction:
    """One drug-drug interaction finding between two medications on the list"""
    med1: str
    med2: str
    severity: Severity
    description: str
    info: str
    source: Provenance

    @property
    def pair_key(self) -> str:
        return pair_key(self.med1, self.med2)

@dataclass(frozen=True)
class AllergyConflict:
    """
    One allergy finding. ``reason`` says why it was raised; ``rule_description``
    is only set for transitive interaction findings.
    """
    medication: str
    allergen: str
    reason: ConflictReason
    rule_description: Optional[str] = None

    @property
    def allergy(self) -> str:
        """Allergen annotated with the reason, as shown on alert cards"""
        if self.reason is ConflictReason.SAME_CLASS:
            return f"{self.allergen} (same drug class)"
        if self.reason is ConflictReason.CROSS_REACTIVE:
            return f"{self.allergen} (cross-reactivity)"
        if self.reason is ConflictReason.TRANSITIVE_INTERACTION:
            return f"{self.allergen} (known interaction: {self.rule_description})"
        return self.allergen

@dataclass(frozen=True)
class UpcomingRefill:
    medication: Medication
    days_until: int

    @property
    def name(self) -> str:
        return self.medication.name

@dataclass(frozen=True)
class OverdueRefill:
    medication: Medication
    days_overdue: int

    @property
    def name(self) -> str:
        return self.medication.name

@dataclass
class RefillStatus:
    upcoming: List[UpcomingRefill] = field(default_factory=list)
    overdue: List[OverdueRefill] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.upcoming or self.overdue)
