"""
Error types raised by the medication safety engine.

Remote label failures are never raised; they are logged and treated as
"no additional information" inside the openFDA client and the augmenter.
"""


class MedSafetyError(Exception):
    """Base class for all medsafety errors"""


class KnowledgeBaseError(MedSafetyError):
    """The packaged interaction reference data is malformed"""


class InvalidInputError(MedSafetyError, ValueError):
    """A caller passed something the engine cannot evaluate (e.g. None instead of a list)"""
