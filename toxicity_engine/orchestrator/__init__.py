"""Question selection and adaptive branching"""

from .branching import (
    NCI_BRANCHING_RULES,
    BranchingEvaluation,
    BranchingRule,
    collect_branching_questions,
    deduplicate_and_order_follow_ups,
    determine_skip_items,
    estimate_branching_time,
    evaluate_branching,
    get_branching_explanation,
)
from .drug_module_selector import (
    ActiveDrugsResult,
    DrugModuleSelectionMetadata,
    DrugModuleSelectionResult,
    apply_optional_phase_filtering,
    get_active_drugs,
    select_questions_via_drug_modules,
    union_symptoms,
)
from .question_selector import (
    PHASE_SYMPTOM_PRIORITIES,
    QuestionPriority,
    QuestionSelectionResult,
    SelectedQuestion,
    SelectionMetadata,
    apply_historical_escalation,
    ensure_attribute_completeness,
    select_questions,
)
from .session import AnswerOutcome, QuestionnaireSession, QuestionQueue

__all__ = [
    "NCI_BRANCHING_RULES",
    "PHASE_SYMPTOM_PRIORITIES",
    "ActiveDrugsResult",
    "AnswerOutcome",
    "BranchingEvaluation",
    "BranchingRule",
    "DrugModuleSelectionMetadata",
    "DrugModuleSelectionResult",
    "QuestionPriority",
    "QuestionQueue",
    "QuestionSelectionResult",
    "QuestionnaireSession",
    "SelectedQuestion",
    "SelectionMetadata",
    "apply_historical_escalation",
    "apply_optional_phase_filtering",
    "collect_branching_questions",
    "deduplicate_and_order_follow_ups",
    "determine_skip_items",
    "ensure_attribute_completeness",
    "estimate_branching_time",
    "evaluate_branching",
    "get_active_drugs",
    "get_branching_explanation",
    "select_questions",
    "select_questions_via_drug_modules",
    "union_symptoms",
]
