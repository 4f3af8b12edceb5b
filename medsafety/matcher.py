import re

PAIR_SEPARATOR = "|||"

# Strength and dosage-form tokens that trail a display name ("Lisinopril 10mg tablet")
_STRENGTH_PATTERN = re.compile(r'\b\d+(?:\.\d+)?\s*(?:mg|mcg|g|ml|units?|iu)\b', re.IGNORECASE)
_FORM_WORDS = ['tab', 'tablet', 'tablets', 'cap', 'capsule', 'capsules', 'inj', 'injection',
               'syrup', 'suspension', 'er', 'xr', 'sr', 'oral']

def _clean(name: str) -> str:
    return (name or "").strip().lower()

def names_refer(a: str, b: str) -> bool:
    """
    True when one name contains the other, ignoring case and surrounding
    whitespace. "Lisinopril 10mg" refers to "lisinopril" and vice versa.
    Empty names never refer to anything.
    """
    a, b = _clean(a), _clean(b)
    if not a or not b:
        return False
    return a in b or b in a

def pair_key(a: str, b: str) -> str:
    """
    Order-independent key for a pair of medication names
    """
    return PAIR_SEPARATOR.join(sorted([_clean(a), _clean(b)]))

def generic_query(name: str) -> str:
    """
    Reduce a display name to the bare drug name used for label searches,
    e.g. "Metformin 500mg ER tablet" -> "metformin"
    """
    normalized = _clean(name)
    normalized = _STRENGTH_PATTERN.sub('', normalized)
    normalized = re.sub(r'\([^)]*\)', '', normalized)

    for term in _FORM_WORDS:
        normalized = re.sub(rf'\b{term}\b', '', normalized)

    return ' '.join(normalized.split())
