"""
Best-effort interaction hints from public drug labels.

For a medication, fetch its openFDA label and report which well-known drugs
its "drug interactions" narrative mentions. Results (including empty ones)
are memoized per case-folded name. Nothing here raises to the caller: any
lookup problem means "no additional information".
"""

import asyncio
import logging
import re
from typing import List, Optional, Protocol, Sequence

from cachetools import Cache

from .cache import make_memo
from .config import Settings, get_settings
from .matcher import generic_query
from .openfda import OpenFDAClient, interaction_text

# Set up logging
logger = logging.getLogger(__name__)

# Well-known generic names searched for in label interaction text
COMMON_DRUGS = [
    'warfarin', 'aspirin', 'ibuprofen', 'naproxen', 'acetaminophen',
    'metformin', 'insulin', 'glipizide', 'glyburide',
    'lisinopril', 'enalapril', 'losartan', 'valsartan', 'amlodipine',
    'metoprolol', 'atenolol', 'propranolol', 'carvedilol',
    'simvastatin', 'atorvastatin', 'rosuvastatin', 'lovastatin', 'pravastatin',
    'omeprazole', 'pantoprazole', 'esomeprazole', 'lansoprazole',
    'sertraline', 'fluoxetine', 'paroxetine', 'citalopram', 'escitalopram',
    'amiodarone', 'digoxin', 'verapamil', 'diltiazem',
    'furosemide', 'hydrochlorothiazide', 'spironolactone',
    'alprazolam', 'diazepam', 'lorazepam', 'clonazepam',
    'oxycodone', 'hydrocodone', 'tramadol', 'morphine', 'codeine',
    'gabapentin', 'pregabalin', 'carbamazepine', 'phenytoin', 'valproic acid',
    'ciprofloxacin', 'levofloxacin', 'azithromycin', 'amoxicillin',
    'clarithromycin', 'erythromycin', 'metronidazole', 'fluconazole',
    'ketoconazole', 'itraconazole',
    'prednisone', 'prednisolone', 'dexamethasone',
    'levothyroxine', 'lithium', 'theophylline', 'cyclosporine',
    'rivaroxaban', 'apixaban', 'dabigatran', 'clopidogrel',
    'sumatriptan', 'tizanidine',
]

class LabelSource(Protocol):
    def fetch_label(self, generic_name: str) -> Optional[dict]:
        ...

class LabelAugmenter:
    """
    Finds vocabulary drugs mentioned in a medication's label interaction text
    """

    def __init__(self, client: Optional[LabelSource] = None, cache: Optional[Cache] = None,
                 vocabulary: Sequence[str] = COMMON_DRUGS, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.client = client if client is not None else OpenFDAClient(settings=settings)
        self.cache = cache if cache is not None else make_memo(
            maxsize=settings.label_cache_size, ttl=settings.label_cache_ttl
        )
        self.vocabulary = [term.lower() for term in vocabulary]

    def extract_mentions(self, name: str, text: str) -> List[str]:
        """
        Vocabulary terms found in the text, skipping the queried drug itself.
        Only whole-word occurrences in the bare drug name count as the drug
        itself, so "escitalopram" still reports "citalopram".
        """
        query = generic_query(name) or (name or "").strip().lower()
        lower_text = text.lower()
        return [
            term for term in self.vocabulary
            if term in lower_text and not re.search(rf"\b{re.escape(term)}\b", query)
        ]

    async def mentioned_drugs(self, name: str) -> List[str]:
        """
        Vocabulary drugs named in the label interaction narrative for ``name``.
        Returns [] when the label is unavailable.
        """
        key = (name or "").strip().lower()
        if not key:
            return []

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Label mentions cache hit for '{key}'")
            return list(cached)

        mentioned: List[str] = []
        try:
            label = await asyncio.to_thread(self.client.fetch_label, generic_query(name) or key)
            text = interaction_text(label)
            if text:
                mentioned = self.extract_mentions(name, text)
                logger.info(f"Label for '{name}' mentions {len(mentioned)} known drugs")
            else:
                logger.info(f"No interaction narrative available for '{name}'")
        except Exception as e:
            logger.error(f"Label lookup error for '{name}': {e}")
            mentioned = []

        self.cache[key] = mentioned
        return list(mentioned)

_default_augmenter: Optional[LabelAugmenter] = None

def default_augmenter() -> LabelAugmenter:
    """Process-wide augmenter sharing one label cache"""
    global _default_augmenter
    if _default_augmenter is None:
        _default_augmenter = LabelAugmenter()
    return _default_augmenter
