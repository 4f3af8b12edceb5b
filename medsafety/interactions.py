import itertools
import logging
from typing import Any, Dict, List, Optional, Sequence, Set

from .augmenter import LabelAugmenter, default_augmenter
from .knowledge_base import INTERACTION_RULES, InteractionRule
from .matcher import names_refer, pair_key
from .models import Interaction, Medication, Provenance, Severity

# Set up logging
logger = logging.getLogger(__name__)

LABEL_GUIDANCE = "Review the full drug label or ask your pharmacist for details about this interaction."

class InteractionEvaluator:
    """
    Drug-drug interaction checker.

    Phase 1 matches every medication pair against the offline rule table.
    Phase 2 adds moderate findings for pairs whose label interaction text
    mentions the other drug. Phase 2 only ever appends.
    """

    def __init__(self, rules: Sequence[InteractionRule] = INTERACTION_RULES,
                 augmenter: Optional[LabelAugmenter] = None):
        self.rules = tuple(rules)
        self._augmenter = augmenter

    @property
    def augmenter(self) -> LabelAugmenter:
        if self._augmenter is None:
            self._augmenter = default_augmenter()
        return self._augmenter

    def find_rule(self, name_a: str, name_b: str) -> Optional[InteractionRule]:
        """
        First rule matching two medication names, in either order
        """
        for rule in self.rules:
            if rule.matches(name_a, name_b):
                return rule
        return None

    def _check_local(self, medications: Sequence[Medication], found: Set[str]) -> List[Interaction]:
        interactions = []

        for med_a, med_b in itertools.combinations(medications, 2):
            key = pair_key(med_a.name, med_b.name)
            if key in found:
                continue

            rule = self.find_rule(med_a.name, med_b.name)
            if rule:
                found.add(key)
                interactions.append(Interaction(
                    med1=med_a.name,
                    med2=med_b.name,
                    severity=rule.severity,
                    description=rule.description,
                    info=rule.info,
                    source=Provenance.REFERENCE_DATABASE,
                ))

        return interactions

    def check_local(self, medications: Sequence[Medication]) -> List[Interaction]:
        """Offline reference-database pass only (no network)"""
        return self._check_local(list(medications), set())

    async def _check_labels(self, medications: Sequence[Medication], found: Set[str],
                            interactions: List[Interaction]):
        """Append label-derived findings to ``interactions`` as they are found"""
        for i, med in enumerate(medications):
            try:
                mentioned = await self.augmenter.mentioned_drugs(med.name)
            except Exception as e:
                logger.error(f"Label interaction check failed for '{med.name}': {e}")
                continue

            if not mentioned:
                continue

            for j, other in enumerate(medications):
                if i == j:
                    continue
                key = pair_key(med.name, other.name)
                if key in found:
                    continue

                if any(names_refer(other.name, drug) for drug in mentioned):
                    found.add(key)
                    interactions.append(Interaction(
                        med1=med.name,
                        med2=other.name,
                        severity=Severity.MODERATE,
                        description=f"FDA labeling for {med.name} mentions a potential interaction with {other.name}.",
                        info=LABEL_GUIDANCE,
                        source=Provenance.OPENFDA,
                    ))

    async def evaluate(self, medications: Sequence[Medication]) -> List[Interaction]:
        """
        Find all interactions among a medication list

        Args:
            medications: Medications to check against each other

        Returns:
            Reference-database findings in pair order, then label findings
        """
        medications = list(medications)
        if len(medications) < 2:
            return []

        found: Set[str] = set()
        interactions = self._check_local(medications, found)
        logger.info(f"Found {len(interactions)} reference interactions among {len(medications)} medications")

        local_count = len(interactions)

        try:
            await self._check_labels(medications, found, interactions)
        except Exception as e:
            logger.error(f"Label interaction checking error: {e}")

        if len(interactions) > local_count:
            logger.info(f"Found {len(interactions) - local_count} additional interactions from drug labels")

        return interactions

def get_interaction_summary(interactions: List[Interaction]) -> Dict[str, Any]:
    """
    Get summary statistics of interactions
    """
    if not interactions:
        return {
            'total': 0,
            'major': 0,
            'moderate': 0,
            'reference_database': 0,
            'openfda': 0,
            'max_severity': 'none'
        }

    severity_counts = {severity.value: 0 for severity in Severity}
    source_counts = {source.value: 0 for source in Provenance}

    for interaction in interactions:
        severity_counts[interaction.severity.value] += 1
        source_counts[interaction.source.value] += 1

    max_severity = 'major' if severity_counts['major'] > 0 else 'moderate'

    return {
        'total': len(interactions),
        **severity_counts,
        **source_counts,
        'max_severity': max_severity
    }
