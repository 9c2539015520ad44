"""Composite grading and CTCAE mapping"""

from .ctcae_mapper import (
    CTCAEMapping,
    get_clinical_action,
    get_symptoms_with_specific_mappings,
    has_specific_mapping,
    map_multiple_to_ctcae,
    map_to_ctcae,
)
from .grading import (
    ALGORITHM_VERSION,
    GradeTrend,
    GradingInput,
    GradingResult,
    SymptomResponses,
    ValidationReport,
    calculate_composite_grade,
    calculate_grade_trend,
    calculate_multiple_grades,
    calculate_toxicity_burden,
    extract_symptom_term,
    filter_by_grade,
    get_grade_explanation,
    get_highest_grade,
    group_responses_by_symptom,
    requires_urgent_review,
    validate_grading_input,
)

__all__ = [
    "ALGORITHM_VERSION",
    "CTCAEMapping",
    "GradeTrend",
    "GradingInput",
    "GradingResult",
    "SymptomResponses",
    "ValidationReport",
    "calculate_composite_grade",
    "calculate_grade_trend",
    "calculate_multiple_grades",
    "calculate_toxicity_burden",
    "extract_symptom_term",
    "filter_by_grade",
    "get_clinical_action",
    "get_grade_explanation",
    "get_highest_grade",
    "get_symptoms_with_specific_mappings",
    "group_responses_by_symptom",
    "has_specific_mapping",
    "map_multiple_to_ctcae",
    "map_to_ctcae",
    "requires_urgent_review",
    "validate_grading_input",
]
