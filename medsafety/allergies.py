"""
Allergy conflict checking

Three independent passes over (medication, allergy) pairs:

1. direct name match
2. drug-class membership: same class, or an explicitly cross-reactive class
3. transitive relevance: a reference interaction rule links the allergen
   to something the patient is taking

A pair can be reported once per reason. Every medication on the list is
checked, whatever its status.
"""

import logging
from typing import List, Mapping, Optional, Sequence, Set, Tuple

from .knowledge_base import (
    CROSS_REACTIVE_CLASS_PAIRS,
    DRUG_CLASS_FAMILIES,
    INTERACTION_RULES,
    DrugClassFamily,
    InteractionRule,
    cross_reactive_families,
    family_for,
)
from .matcher import names_refer
from .models import Allergy, AllergyConflict, ConflictReason, Medication

# Set up logging
logger = logging.getLogger(__name__)

ConflictKey = Tuple[str, str, ConflictReason]

class AllergyConflictEvaluator:

    def __init__(self, rules: Sequence[InteractionRule] = INTERACTION_RULES,
                 families: Mapping[str, DrugClassFamily] = DRUG_CLASS_FAMILIES,
                 cross_pairs: Sequence[Tuple[str, str]] = CROSS_REACTIVE_CLASS_PAIRS):
        self.rules = tuple(rules)
        self.families = families
        self.cross_pairs = tuple(cross_pairs)

    def _emit(self, conflicts: List[AllergyConflict], seen: Set[ConflictKey],
              med: Medication, allergy: Allergy, reason: ConflictReason,
              rule_description: Optional[str] = None):
        key = (med.name.strip().lower(), allergy.name.strip().lower(), reason)
        if key in seen:
            return
        seen.add(key)
        conflicts.append(AllergyConflict(
            medication=med.name,
            allergen=allergy.name,
            reason=reason,
            rule_description=rule_description,
        ))

    def _direct_matches(self, medications, allergies, conflicts, seen):
        for med in medications:
            for allergy in allergies:
                if names_refer(med.name, allergy.name):
                    self._emit(conflicts, seen, med, allergy, ConflictReason.DIRECT)

    def _class_matches(self, medications, allergies, conflicts, seen):
        for allergy in allergies:
            family = family_for(allergy.name, self.families)
            if family is None:
                continue

            # Members the allergen itself names are covered by the direct pass
            siblings = [m for m in family.members if not names_refer(m, allergy.name)]
            related = [
                self.families[name] for name in cross_reactive_families(family.name, self.cross_pairs)
                if name in self.families
            ]

            for med in medications:
                if any(names_refer(med.name, member) for member in siblings):
                    self._emit(conflicts, seen, med, allergy, ConflictReason.SAME_CLASS)

                for other_family in related:
                    if other_family.find_member(med.name):
                        self._emit(conflicts, seen, med, allergy, ConflictReason.CROSS_REACTIVE)
                        break

    def _transitive_matches(self, medications, allergies, conflicts, seen):
        for allergy in allergies:
            for med in medications:
                for rule in self.rules:
                    if rule.matches(allergy.name, med.name):
                        self._emit(conflicts, seen, med, allergy,
                                   ConflictReason.TRANSITIVE_INTERACTION, rule.description)
                        break

    def evaluate(self, medications: Sequence[Medication],
                 allergies: Sequence[Allergy]) -> List[AllergyConflict]:
        """
        Check medications against declared allergies

        Returns:
            Direct findings, then class findings, then transitive findings
        """
        medications = list(medications)
        allergies = list(allergies)
        if not medications or not allergies:
            return []

        conflicts: List[AllergyConflict] = []
        seen: Set[ConflictKey] = set()

        self._direct_matches(medications, allergies, conflicts, seen)
        self._class_matches(medications, allergies, conflicts, seen)
        self._transitive_matches(medications, allergies, conflicts, seen)

        logger.info(f"Found {len(conflicts)} allergy conflicts for {len(medications)} medications "
                    f"and {len(allergies)} allergies")
        return conflicts
