"""
Offline interaction reference data and drug-class families.

Interaction rules ship as ``data/interaction_rules.csv`` and are loaded once at
import. Sources: ONC High-Priority DDI list, FDA drug labels, clinical
references. This is general reference information, not medical advice.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import pandas as pd

from .exceptions import KnowledgeBaseError
from .matcher import names_refer
from .models import Severity

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "data" / "interaction_rules.csv"
RULE_COLUMNS = ['drug1', 'drug2', 'severity', 'description', 'info']

@dataclass(frozen=True)
class InteractionRule:
    """Unordered pair of generic-name terms with severity and guidance"""
    drug1: str
    drug2: str
    severity: Severity
    description: str
    info: str

    def matches(self, name_a: str, name_b: str) -> bool:
        """Check both orientations: (a, b) against (drug1, drug2) and (drug2, drug1)"""
        return (
            (names_refer(name_a, self.drug1) and names_refer(name_b, self.drug2)) or
            (names_refer(name_a, self.drug2) and names_refer(name_b, self.drug1))
        )

@dataclass(frozen=True)
class DrugClassFamily:
    name: str
    members: Tuple[str, ...]

    def find_member(self, name: str) -> Optional[str]:
        for member in self.members:
            if names_refer(name, member):
                return member
        return None

def load_interaction_rules(path: Path = DEFAULT_RULES_PATH) -> Tuple[InteractionRule, ...]:
    """
    Load and validate the interaction rule table.

    A malformed table is a packaging defect, so it raises instead of
    degrading to an empty rule set.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError) as e:
        raise KnowledgeBaseError(f"Cannot read interaction rules from {path}: {e}") from e

    missing = [c for c in RULE_COLUMNS if c not in df.columns]
    if missing:
        raise KnowledgeBaseError(f"Interaction rules missing columns: {missing}")

    rules = []
    for row_number, row in enumerate(df[RULE_COLUMNS].itertuples(index=False), start=2):
        drug1, drug2 = row.drug1.strip().lower(), row.drug2.strip().lower()
        if not drug1 or not drug2:
            raise KnowledgeBaseError(f"Row {row_number}: both drug terms are required")
        try:
            severity = Severity(row.severity.strip().lower())
        except ValueError:
            raise KnowledgeBaseError(f"Row {row_number}: unknown severity '{row.severity}'") from None

        rules.append(InteractionRule(
            drug1=drug1,
            drug2=drug2,
            severity=severity,
            description=row.description.strip(),
            info=row.info.strip(),
        ))

    logger.info(f"Loaded {len(rules)} interaction rules from {path.name}")
    return tuple(rules)

INTERACTION_RULES: Tuple[InteractionRule, ...] = load_interaction_rules()

# ── Drug-class families (brand and generic member terms) ──
# Order matters: an allergen resolves to the first family with a matching member.
_FAMILIES = [
    DrugClassFamily('penicillin', (
        'penicillin', 'amoxicillin', 'ampicillin', 'dicloxacillin', 'nafcillin',
        'oxacillin', 'piperacillin', 'augmentin', 'amoxil',
    )),
    DrugClassFamily('cephalosporin', (
        'cephalosporin', 'cephalexin', 'cefazolin', 'cefuroxime', 'cefdinir',
        'ceftriaxone', 'cefepime', 'cefpodoxime', 'cefadroxil', 'keflex',
    )),
    DrugClassFamily('sulfonamide', (
        'sulfa', 'sulfamethoxazole', 'sulfasalazine', 'sulfadiazine', 'bactrim', 'septra',
    )),
    DrugClassFamily('salicylate', (
        'aspirin', 'salsalate', 'diflunisal', 'subsalicylate', 'ecotrin',
    )),
    DrugClassFamily('nsaid', (
        'nsaid', 'ibuprofen', 'naproxen', 'diclofenac', 'ketorolac', 'indomethacin',
        'meloxicam', 'celecoxib', 'piroxicam', 'advil', 'motrin', 'aleve', 'celebrex',
    )),
    DrugClassFamily('macrolide', (
        'macrolide', 'azithromycin', 'clarithromycin', 'erythromycin', 'zithromax',
    )),
    DrugClassFamily('fluoroquinolone', (
        'fluoroquinolone', 'quinolone', 'ciprofloxacin', 'levofloxacin', 'moxifloxacin',
        'cipro', 'levaquin',
    )),
    DrugClassFamily('tetracycline', (
        'tetracycline', 'doxycycline', 'minocycline',
    )),
    DrugClassFamily('statin', (
        'atorvastatin', 'simvastatin', 'rosuvastatin', 'lovastatin',
        'pravastatin', 'lipitor', 'zocor', 'crestor',
    )),
    DrugClassFamily('ace inhibitor', (
        'ace inhibitor', 'lisinopril', 'enalapril', 'ramipril', 'benazepril',
        'captopril', 'quinapril', 'zestril', 'prinivil', 'vasotec',
    )),
    DrugClassFamily('arb', (
        'losartan', 'valsartan', 'irbesartan', 'olmesartan', 'candesartan',
        'telmisartan', 'cozaar', 'diovan',
    )),
    DrugClassFamily('opioid', (
        'opioid', 'codeine', 'morphine', 'oxycodone', 'hydrocodone', 'tramadol',
        'fentanyl', 'hydromorphone', 'percocet', 'vicodin',
    )),
    DrugClassFamily('benzodiazepine', (
        'benzodiazepine', 'alprazolam', 'diazepam', 'lorazepam', 'clonazepam',
        'xanax', 'valium', 'ativan', 'klonopin',
    )),
    DrugClassFamily('ssri', (
        'ssri', 'sertraline', 'fluoxetine', 'paroxetine', 'citalopram', 'escitalopram',
        'zoloft', 'prozac', 'lexapro',
    )),
]

DRUG_CLASS_FAMILIES: Mapping[str, DrugClassFamily] = MappingProxyType(
    {family.name: family for family in _FAMILIES}
)

# Distinct classes that still cross-react (order within a pair is not significant)
CROSS_REACTIVE_CLASS_PAIRS: Tuple[Tuple[str, str], ...] = (
    ('penicillin', 'cephalosporin'),
    ('salicylate', 'nsaid'),
    ('ace inhibitor', 'arb'),
)

def family_for(name: str,
               families: Mapping[str, DrugClassFamily] = DRUG_CLASS_FAMILIES) -> Optional[DrugClassFamily]:
    """First family with a member the name refers to"""
    for family in families.values():
        if family.find_member(name):
            return family
    return None

def cross_reactive_families(family_name: str,
                            pairs: Tuple[Tuple[str, str], ...] = CROSS_REACTIVE_CLASS_PAIRS) -> Tuple[str, ...]:
    related = []
    for first, second in pairs:
        if first == family_name:
            related.append(second)
        elif second == family_name:
            related.append(first)
    return tuple(related)
