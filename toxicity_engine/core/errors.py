"""
Error taxonomy for the clinical decision engine.

Every failure carries enough structure (resource, symptom, item code, the
individual validation messages) for the calling layer to build a precise
user-facing message.
"""

from typing import Any, List, Optional


class EngineError(Exception):
    """Base class for all engine errors"""


class NotFoundError(EngineError):
    """Required reference data (treatment, regimen, cycle, item) is missing"""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} not found"
        if identifier is not None:
            message += f": {identifier}"
        super().__init__(message)


class GradingValidationError(EngineError):
    """Grouped responses for a symptom failed validation; grading did not run"""

    def __init__(self, symptom_term: str, errors: List[str]):
        self.symptom_term = symptom_term
        self.errors = list(errors)
        super().__init__(
            f"Invalid responses for '{symptom_term}': {'; '.join(self.errors)}"
        )


class SymptomMappingError(EngineError):
    """An answered item could not be mapped to a symptom term"""

    def __init__(self, item_code: str):
        self.item_code = item_code
        super().__init__(
            f"Failed to extract symptom term from item code: {item_code!r}"
        )


class SkippedItemError(EngineError):
    """An answer was submitted for an item the current answers skip"""

    def __init__(self, item_id: str, trigger_item_id: str):
        self.item_id = item_id
        self.trigger_item_id = trigger_item_id
        super().__init__(
            f"Item {item_id} is skipped by the answer to {trigger_item_id}"
        )


class AlertPersistenceError(EngineError):
    """
    Raised when the caller's alert sink fails.

    The computed alerts and grades stay attached so a grade 3/4 finding is
    never lost because storage failed.
    """

    def __init__(self,
                 alerts: List[Any],
                 grades: List[Any],
                 cause: BaseException,
                 fallback_alert: Any = None):
        self.alerts = list(alerts)
        self.grades = list(grades)
        self.cause = cause
        self.fallback_alert = fallback_alert
        super().__init__(f"Alert creation failed: {cause}")
