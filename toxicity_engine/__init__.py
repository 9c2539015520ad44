"""
Toxicity Engine - clinical decision engine for chemotherapy symptom monitoring
"""

from .core.catalog import ReferenceCatalog
from .core.engine import (
    ClinicalDecisionEngine,
    CompletionResult,
    GeneratedQuestionnaire,
    QuestionnaireApproach,
)

__version__ = "0.1.0"

__all__ = [
    "ClinicalDecisionEngine",
    "CompletionResult",
    "GeneratedQuestionnaire",
    "QuestionnaireApproach",
    "ReferenceCatalog",
]
