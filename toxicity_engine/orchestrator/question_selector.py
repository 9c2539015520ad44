"""
Regimen-based question selection.

Pipeline:
  1. Filter the catalog by the regimen's high-risk symptom list
  2. Filter by cycle phase (regimen phase priorities, else universal table)
  3. Score by symptom history
  4. Complete each symptom group (presence/frequency + severity)
  5. Sort by score; every qualifying item is returned, no cap
  6. Flag frequency/severity items for conditional branching
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.models import (
    Attribute,
    CyclePhase,
    SymptomHistory,
    SymptomItem,
    TreatmentContext,
    Trend,
    symptom_history_lookup,
)

logger = logging.getLogger(__name__)

# Universal phase -> symptom category table, used when a regimen defines no
# phase priorities for the current phase.
PHASE_SYMPTOM_PRIORITIES: Dict[CyclePhase, List[str]] = {
    CyclePhase.PRE_SESSION: ["constitutional", "pain", "neurological", "cardiac"],
    CyclePhase.POST_SESSION: ["gastrointestinal", "pain", "constitutional"],
    CyclePhase.RECOVERY: ["gastrointestinal", "constitutional", "pain", "oral", "neurological"],
    CyclePhase.NADIR: ["infection_signs", "hematological", "constitutional", "musculoskeletal"],
    CyclePhase.INTER_CYCLE: [
        "constitutional", "neurological", "dermatological", "pain", "gastrointestinal",
    ],
}

BASE_SCORE = 1.0


class QuestionPriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SelectedQuestion:
    item: SymptomItem
    priority: QuestionPriority
    reason: str
    score: float
    requires_conditional_branching: bool


@dataclass(frozen=True)
class SelectionMetadata:
    cycle_phase: CyclePhase
    treatment_day: int
    in_nadir_window: bool
    regimen_code: str


@dataclass(frozen=True)
class QuestionSelectionResult:
    selected_questions: List[SelectedQuestion]
    total_count: int
    metadata: SelectionMetadata

    @property
    def items(self) -> List[SymptomItem]:
        return [q.item for q in self.selected_questions]


def selection_metadata(context: TreatmentContext) -> SelectionMetadata:
    return SelectionMetadata(
        cycle_phase=context.phase,
        treatment_day=context.treatment_day,
        in_nadir_window=context.in_nadir_window,
        regimen_code=context.regimen.regimen_code,
    )


# ----------------------------------------------------------------------
# Filtering
# ----------------------------------------------------------------------

def filter_by_regimen_toxicity(items: List[SymptomItem],
                               context: TreatmentContext) -> List[SymptomItem]:
    """Keep items whose symptom is high-risk for the regimen; no list means no filter."""
    high_risk = context.regimen.toxicity_profile.high_risk
    if high_risk is None:
        return list(items)
    wanted = set(high_risk)
    return [item for item in items if item.symptom_term in wanted]


def filter_by_cycle_phase(items: List[SymptomItem],
                          context: TreatmentContext) -> List[SymptomItem]:
    phase_priorities = context.regimen.toxicity_profile.phase_priorities
    if phase_priorities and phase_priorities.get(context.phase):
        wanted = set(phase_priorities[context.phase])
        return [item for item in items if item.symptom_term in wanted]

    categories = PHASE_SYMPTOM_PRIORITIES.get(context.phase, [])
    if not categories:
        return list(items)
    wanted = set(categories)
    return [item for item in items if item.symptom_category in wanted]


# ----------------------------------------------------------------------
# History escalation
# ----------------------------------------------------------------------

def calculate_escalation_score(record: Optional[SymptomHistory]) -> float:
    """
    Score one symptom from its history.

    1 base; +2 at grade >= 2; a further +2 at grade >= 3; +1 when worsening;
    -0.5 when improving below grade 2.
    """
    if record is None:
        return BASE_SCORE

    score = BASE_SCORE
    if record.last_grade >= 2:
        score += 2
    if record.last_grade >= 3:
        score += 2
    if record.trend is Trend.WORSENING:
        score += 1
    if record.trend is Trend.IMPROVING and record.last_grade < 2:
        score -= 0.5
    return score


def apply_historical_escalation(items: Iterable[SymptomItem],
                                history: Optional[List[SymptomHistory]] = None) -> Dict[str, float]:
    """item_id -> score. Items of the same symptom always share a score."""
    lookup = symptom_history_lookup(history)
    return {
        item.item_id: calculate_escalation_score(lookup.get(item.symptom_term))
        for item in items
    }


def priority_for_score(score: float) -> Tuple[QuestionPriority, str]:
    if score >= 4:
        return QuestionPriority.HIGH, "High-grade symptom history (Grade ≥ 3)"
    if score >= 2:
        return QuestionPriority.MEDIUM, "Previous symptom reported (Grade ≥ 2)"
    return QuestionPriority.LOW, "Regimen-specific or phase-appropriate"


# ----------------------------------------------------------------------
# Completeness & ordering
# ----------------------------------------------------------------------

def ensure_attribute_completeness(items: List[SymptomItem],
                                  all_items: List[SymptomItem]) -> List[SymptomItem]:
    """
    Group by symptom and make every group gradeable.

    A group missing a presence-class item gets the catalog's frequency item;
    a group missing severity gets the catalog's severity item. Interference
    is never added. Output order per group: presence (present_absent, then
    amount, then frequency), severity, interference.
    """
    groups: Dict[str, Dict[Attribute, SymptomItem]] = {}
    for item in items:
        groups.setdefault(item.symptom_term, {})[item.attribute] = item

    complete: List[SymptomItem] = []
    for term, attributes in groups.items():
        if not any(a.is_presence_class for a in attributes):
            freq = _first(all_items, term, Attribute.FREQUENCY)
            if freq is not None:
                attributes[Attribute.FREQUENCY] = freq
        if Attribute.SEVERITY not in attributes:
            sev = _first(all_items, term, Attribute.SEVERITY)
            if sev is not None:
                attributes[Attribute.SEVERITY] = sev

        for presence in (Attribute.PRESENT_ABSENT, Attribute.AMOUNT, Attribute.FREQUENCY):
            if presence in attributes:
                complete.append(attributes[presence])
                break
        if Attribute.SEVERITY in attributes:
            complete.append(attributes[Attribute.SEVERITY])
        if Attribute.INTERFERENCE in attributes:
            complete.append(attributes[Attribute.INTERFERENCE])

    return complete


def _first(items: List[SymptomItem], term: str, attribute: Attribute) -> Optional[SymptomItem]:
    for item in items:
        if item.symptom_term == term and item.attribute == attribute:
            return item
    return None


def prioritize_items(items: List[SymptomItem], scores: Dict[str, float]) -> List[SymptomItem]:
    """Descending score; ties keep their incoming order."""
    return sorted(items, key=lambda item: -scores.get(item.item_id, BASE_SCORE))


def determine_conditional_branching(items: List[SymptomItem]) -> Dict[str, bool]:
    return {
        item.item_id: item.attribute in (Attribute.FREQUENCY, Attribute.SEVERITY)
        for item in items
    }


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def select_questions(context: TreatmentContext,
                     available_items: List[SymptomItem],
                     history: Optional[List[SymptomHistory]] = None) -> QuestionSelectionResult:
    """Select a personalised question set from the regimen's toxicity profile."""
    filtered = filter_by_regimen_toxicity(available_items, context)
    after_toxicity = len(filtered)
    filtered = filter_by_cycle_phase(filtered, context)
    logger.debug(
        "Regimen %s day %d (%s): %d catalog -> %d high-risk -> %d phase-appropriate",
        context.regimen.regimen_code, context.treatment_day, context.phase.value,
        len(available_items), after_toxicity, len(filtered),
    )

    complete = ensure_attribute_completeness(filtered, available_items)
    scores = apply_historical_escalation(complete, history)
    ordered = prioritize_items(complete, scores)
    branching = determine_conditional_branching(ordered)

    selected = []
    for item in ordered:
        score = scores[item.item_id]
        priority, reason = priority_for_score(score)
        selected.append(SelectedQuestion(
            item=item,
            priority=priority,
            reason=reason,
            score=score,
            requires_conditional_branching=branching[item.item_id],
        ))

    return QuestionSelectionResult(
        selected_questions=selected,
        total_count=len(selected),
        metadata=selection_metadata(context),
    )
