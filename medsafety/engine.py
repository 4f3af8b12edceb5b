"""
Entry points used by the app layer.

Callers re-run the evaluators whenever a patient's medication or allergy list
changes. Interaction evaluation may be slow (label lookups), so overlapping
evaluations are possible; every SafetyReport carries a generation number and
is_current() tells the caller whether a finished report is still the latest
one requested.
"""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from .allergies import AllergyConflictEvaluator
from .augmenter import LabelAugmenter
from .config import get_settings
from .exceptions import InvalidInputError
from .interactions import InteractionEvaluator
from .knowledge_base import INTERACTION_RULES, InteractionRule
from .models import Allergy, AllergyConflict, Interaction, Medication, RefillStatus
from .refills import RefillStatusEvaluator

# Set up logging
logger = logging.getLogger(__name__)

@dataclass
class SafetyReport:
    generation: int
    interactions: List[Interaction] = field(default_factory=list)
    allergy_conflicts: List[AllergyConflict] = field(default_factory=list)
    refill_status: RefillStatus = field(default_factory=RefillStatus)
    created_at: datetime = field(default_factory=datetime.now)

def _require_list(value: Optional[Iterable], what: str) -> list:
    if value is None:
        raise InvalidInputError(f"{what} must be a list, got None")
    if isinstance(value, (str, bytes)):
        raise InvalidInputError(f"{what} must be a list of records, got a string")
    return list(value)

class SafetyEngine:
    """
    Runs interaction, allergy and refill checks for one patient's lists
    """

    def __init__(self, augmenter: Optional[LabelAugmenter] = None,
                 rules: Sequence[InteractionRule] = INTERACTION_RULES,
                 refill_window_days: Optional[int] = None):
        if refill_window_days is None:
            refill_window_days = get_settings().refill_window_days

        self.interaction_evaluator = InteractionEvaluator(rules=rules, augmenter=augmenter)
        self.allergy_evaluator = AllergyConflictEvaluator(rules=rules)
        self.refill_evaluator = RefillStatusEvaluator(window_days=refill_window_days)

        self._generations = itertools.count(1)
        self._latest_generation = 0

    async def evaluate_interactions(self, medications: Sequence[Medication]) -> List[Interaction]:
        medications = _require_list(medications, "medications")
        return await self.interaction_evaluator.evaluate(medications)

    def evaluate_allergy_conflicts(self, medications: Sequence[Medication],
                                   allergies: Sequence[Allergy]) -> List[AllergyConflict]:
        medications = _require_list(medications, "medications")
        allergies = _require_list(allergies, "allergies")
        return self.allergy_evaluator.evaluate(medications, allergies)

    def evaluate_refill_status(self, medications: Sequence[Medication],
                               today: Optional[date] = None) -> RefillStatus:
        medications = _require_list(medications, "medications")
        return self.refill_evaluator.evaluate(medications, today=today)

    def next_generation(self) -> int:
        self._latest_generation = next(self._generations)
        return self._latest_generation

    def is_current(self, report: SafetyReport) -> bool:
        """False once a newer evaluation has been started"""
        return report.generation == self._latest_generation

    async def evaluate(self, medications: Sequence[Medication], allergies: Sequence[Allergy],
                       today: Optional[date] = None) -> SafetyReport:
        """
        Run all three checks. The generation is taken before any awaiting,
        so a later call always outranks this one.
        """
        medications = _require_list(medications, "medications")
        allergies = _require_list(allergies, "allergies")
        generation = self.next_generation()

        allergy_conflicts = self.evaluate_allergy_conflicts(medications, allergies)
        refill_status = self.evaluate_refill_status(medications, today=today)
        interactions = await self.evaluate_interactions(medications)

        report = SafetyReport(
            generation=generation,
            interactions=interactions,
            allergy_conflicts=allergy_conflicts,
            refill_status=refill_status,
        )
        if not self.is_current(report):
            logger.info(f"Evaluation {generation} finished after a newer one was started")
        return report

_default_engine: Optional[SafetyEngine] = None

def get_engine() -> SafetyEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = SafetyEngine()
    return _default_engine

# Convenience functions for easy use
async def evaluate_interactions(medications: Sequence[Medication]) -> List[Interaction]:
    return await get_engine().evaluate_interactions(medications)

def evaluate_allergy_conflicts(medications: Sequence[Medication],
                               allergies: Sequence[Allergy]) -> List[AllergyConflict]:
    return get_engine().evaluate_allergy_conflicts(medications, allergies)

def evaluate_refill_status(medications: Sequence[Medication],
                           today: Optional[date] = None) -> RefillStatus:
    return get_engine().evaluate_refill_status(medications, today=today)
