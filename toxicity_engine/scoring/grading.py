"""
NCI PRO-CTCAE composite grading.

  1. Base grade = MAX(frequency, severity), whichever are present
  2. Both frequency >= 3 and severity >= 3: +1
  3. Interference >= 3: +1
  4. Clamp to [0, 4]

Every step appends a clause to the rationale trail, which clinicians audit.

Grade scale: 0 none, 1 mild, 2 moderate, 3 severe, 4 life-threatening/disabling.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.catalog import ReferenceCatalog
from ..core.errors import SymptomMappingError
from ..core.models import Attribute, Trend

logger = logging.getLogger(__name__)

ALGORITHM_VERSION = "NCI_v1.0"
MAX_GRADE = 4

# Grade 0-4 weights; 200 points = 8 symptoms at grade 4
BURDEN_WEIGHTS = [0, 3, 8, 15, 25]
BURDEN_MAX_POINTS = 200

ITEM_CODE_SUFFIXES = ("FREQ", "SEV", "INTERF", "PRESENT", "AMOUNT")

GRADE_EXPLANATIONS = {
    0: "No symptoms reported",
    1: "Mild symptoms - usually manageable with minimal intervention",
    2: "Moderate symptoms - may require medication or supportive care",
    3: "Severe symptoms - requires medical attention and intervention",
    4: "Very severe symptoms - potentially serious, requires immediate attention",
}


@dataclass(frozen=True)
class SymptomResponses:
    """Grouped answers for one symptom; presence-class answers fill frequency."""
    symptom_term: str
    frequency: Optional[int] = None
    severity: Optional[int] = None
    interference: Optional[int] = None


@dataclass(frozen=True)
class GradingResult:
    symptom_term: str
    composite_grade: int
    components: Dict[str, Optional[int]]
    rationale: Tuple[str, ...]
    algorithm_version: str = ALGORITHM_VERSION

    @property
    def grading_rationale(self) -> str:
        return "; ".join(self.rationale)


@dataclass(frozen=True)
class GradeTrend:
    direction: Trend
    change: int


@dataclass
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)


# ----------------------------------------------------------------------
# Input validation
# ----------------------------------------------------------------------

Score = Annotated[int, Field(strict=True, ge=0, le=MAX_GRADE)]


class GradingInput(BaseModel):
    """Validated grading input: integer scores in [0, 4], at least one present."""
    model_config = ConfigDict(frozen=True)

    symptom_term: str
    frequency: Optional[Score] = None
    severity: Optional[Score] = None
    interference: Optional[Score] = None

    @model_validator(mode="after")
    def _require_one_attribute(self) -> "GradingInput":
        if self.frequency is None and self.severity is None and self.interference is None:
            raise ValueError(
                "At least one attribute (frequency, severity, or interference) must be provided"
            )
        return self


def _format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "input"
        messages.append(f"{location}: {error['msg']}")
    return messages


def validate_grading_input(responses: SymptomResponses) -> ValidationReport:
    """One message per violated constraint; grading must not run when invalid."""
    try:
        GradingInput(
            symptom_term=responses.symptom_term,
            frequency=responses.frequency,
            severity=responses.severity,
            interference=responses.interference,
        )
    except ValidationError as exc:
        return ValidationReport(valid=False, errors=_format_errors(exc))
    return ValidationReport(valid=True)


# ----------------------------------------------------------------------
# Composite grade
# ----------------------------------------------------------------------

def calculate_composite_grade(symptom_term: str,
                              frequency: Optional[int] = None,
                              severity: Optional[int] = None,
                              interference: Optional[int] = None,
                              algorithm_version: str = ALGORITHM_VERSION) -> GradingResult:
    if frequency is None and severity is None and interference is None:
        return GradingResult(
            symptom_term=symptom_term,
            composite_grade=0,
            components={},
            rationale=("No symptom reported",),
            algorithm_version=algorithm_version,
        )

    grade = 0
    rationale: List[str] = []

    if frequency is not None and severity is not None:
        grade = max(frequency, severity)
        rationale.append(
            f"Base grade: MAX(frequency={frequency}, severity={severity}) = {grade}"
        )
    elif frequency is not None:
        grade = frequency
        rationale.append(f"Base grade from frequency: {grade}")
    elif severity is not None:
        grade = severity
        rationale.append(f"Base grade from severity: {grade}")

    if (frequency is not None and severity is not None
            and frequency >= 3 and severity >= 3):
        grade = min(MAX_GRADE, grade + 1)
        rationale.append("Escalated +1: Both frequency ≥3 and severity ≥3")

    if interference is not None and interference >= 3:
        grade = min(MAX_GRADE, grade + 1)
        rationale.append(f"Escalated +1: Interference ≥3 (interference={interference})")

    grade = max(0, min(MAX_GRADE, grade))

    return GradingResult(
        symptom_term=symptom_term,
        composite_grade=grade,
        components={
            "frequency": frequency,
            "severity": severity,
            "interference": interference,
        },
        rationale=tuple(rationale),
        algorithm_version=algorithm_version,
    )


def calculate_multiple_grades(responses: Iterable[SymptomResponses],
                              algorithm_version: str = ALGORITHM_VERSION) -> List[GradingResult]:
    return [
        calculate_composite_grade(
            r.symptom_term, r.frequency, r.severity, r.interference, algorithm_version
        )
        for r in responses
    ]


# ----------------------------------------------------------------------
# Grouping answers by symptom
# ----------------------------------------------------------------------

def extract_symptom_term(item_code: str) -> str:
    """NAUSEA_FREQ -> nausea. Codes without a known suffix are lowercased whole."""
    parts = item_code.split("_")
    if parts[-1] in ITEM_CODE_SUFFIXES:
        return "_".join(parts[:-1]).lower()
    return item_code.lower()


def group_responses_by_symptom(answers: Dict[str, int],
                               catalog: ReferenceCatalog) -> List[SymptomResponses]:
    """
    Group item answers into per-symptom responses, in first-answer order.

    Unknown item ids raise NotFoundError; codes that yield no symptom term
    raise SymptomMappingError. Neither is dropped silently.
    """
    slots: Dict[str, Dict[Attribute, int]] = {}
    for item_id, value in answers.items():
        item = catalog.get_item(item_id)
        term = extract_symptom_term(item.item_code)
        if not term.strip():
            logger.error("Empty symptom term from item code %r", item.item_code)
            raise SymptomMappingError(item.item_code)
        slots.setdefault(term, {})[item.attribute] = value

    grouped = []
    for term, values in slots.items():
        frequency = values.get(Attribute.FREQUENCY)
        if frequency is None:
            frequency = values.get(Attribute.PRESENT_ABSENT, values.get(Attribute.AMOUNT))
        grouped.append(SymptomResponses(
            symptom_term=term,
            frequency=frequency,
            severity=values.get(Attribute.SEVERITY),
            interference=values.get(Attribute.INTERFERENCE),
        ))
    return grouped


# ----------------------------------------------------------------------
# Derived utilities
# ----------------------------------------------------------------------

def get_highest_grade(grades: Sequence[GradingResult]) -> Optional[GradingResult]:
    """Worst symptom; the first one wins ties."""
    highest = None
    for grade in grades:
        if highest is None or grade.composite_grade > highest.composite_grade:
            highest = grade
    return highest


def filter_by_grade(grades: Iterable[GradingResult], min_grade: int) -> List[GradingResult]:
    return [g for g in grades if g.composite_grade >= min_grade]


def calculate_toxicity_burden(grades: Sequence[GradingResult],
                              weights: Sequence[int] = BURDEN_WEIGHTS,
                              max_points: int = BURDEN_MAX_POINTS) -> float:
    """0-100 summary of total toxicity; >60 high, 30-60 moderate, <30 low."""
    if not grades:
        return 0.0
    total = sum(weights[g.composite_grade] for g in grades)
    return min(100, total / max_points * 100)


def get_grade_explanation(grade: int) -> str:
    return GRADE_EXPLANATIONS[grade]


def requires_urgent_review(grade: int) -> bool:
    return grade >= 3


def calculate_grade_trend(current_grade: int, previous_grade: int) -> GradeTrend:
    change = current_grade - previous_grade
    if change > 0:
        direction = Trend.WORSENING
    elif change < 0:
        direction = Trend.IMPROVING
    else:
        direction = Trend.STABLE
    return GradeTrend(direction=direction, change=change)
