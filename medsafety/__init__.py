"""
MedSafety - Medication Safety Analysis Engine

This package contains the safety checks behind the medication tracker:
- Offline drug-drug interaction reference data and drug-class families
- Name matching shared by every check
- openFDA drug label lookups and label-based interaction hints
- Interaction, allergy conflict and refill status evaluation
"""

__version__ = "1.0.0"
__author__ = "MedSafety Team"

# Import main functions for easy access
from .models import (
    Allergy,
    AllergyConflict,
    ConflictReason,
    Interaction,
    Medication,
    MedicationStatus,
    Provenance,
    RefillStatus,
    Severity,
)
from .matcher import names_refer, pair_key
from .engine import (
    SafetyEngine,
    SafetyReport,
    evaluate_allergy_conflicts,
    evaluate_interactions,
    evaluate_refill_status,
)

__all__ = [
    "Allergy",
    "AllergyConflict",
    "ConflictReason",
    "Interaction",
    "Medication",
    "MedicationStatus",
    "Provenance",
    "RefillStatus",
    "Severity",
    "names_refer",
    "pair_key",
    "SafetyEngine",
    "SafetyReport",
    "evaluate_interactions",
    "evaluate_allergy_conflicts",
    "evaluate_refill_status",
]
