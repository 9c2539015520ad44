"""
Conditional branching rules for PRO-CTCAE.

NCI guidance: when frequency >= 2 (Occasionally) or severity >= 2 (Moderate),
ask the interference question for the same symptom. Zero answers make the
dependent attributes of that symptom unnecessary.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.models import Attribute, SymptomItem


@dataclass(frozen=True)
class BranchingRule:
    trigger_attribute: Attribute
    trigger_threshold: int
    target_attribute: Attribute
    reason: str


@dataclass(frozen=True)
class BranchingEvaluation:
    should_branch: bool
    triggered_by: str
    target_question: Optional[SymptomItem]
    branching_reason: str


NCI_BRANCHING_RULES = [
    BranchingRule(
        trigger_attribute=Attribute.FREQUENCY,
        trigger_threshold=2,  # Occasionally
        target_attribute=Attribute.INTERFERENCE,
        reason="Symptom occurs frequently enough to potentially impact daily life",
    ),
    BranchingRule(
        trigger_attribute=Attribute.SEVERITY,
        trigger_threshold=2,  # Moderate
        target_attribute=Attribute.INTERFERENCE,
        reason="Symptom severity sufficient to potentially impact daily life",
    ),
]

# Attribute answered with 0 -> attributes of the same symptom that become unnecessary
SKIP_RULES: Dict[Attribute, Tuple[Attribute, ...]] = {
    Attribute.FREQUENCY: (Attribute.SEVERITY, Attribute.INTERFERENCE),
    Attribute.PRESENT_ABSENT: (Attribute.SEVERITY, Attribute.INTERFERENCE),
    Attribute.SEVERITY: (Attribute.INTERFERENCE,),
}

SECONDS_PER_QUESTION = 10


def _rule_for(item: SymptomItem, rules: List[BranchingRule]) -> Optional[BranchingRule]:
    for rule in rules:
        if rule.trigger_attribute == item.attribute:
            return rule
    return None


def evaluate_branching_trigger(item: SymptomItem,
                               value: int,
                               rules: List[BranchingRule] = NCI_BRANCHING_RULES) -> bool:
    rule = _rule_for(item, rules)
    return rule is not None and value >= rule.trigger_threshold


def find_branching_target(item: SymptomItem,
                          all_items: Iterable[SymptomItem],
                          rules: List[BranchingRule] = NCI_BRANCHING_RULES) -> Optional[SymptomItem]:
    rule = _rule_for(item, rules)
    if rule is None:
        return None
    for candidate in all_items:
        if (candidate.symptom_term == item.symptom_term
                and candidate.attribute == rule.target_attribute):
            return candidate
    return None


def evaluate_branching(item: SymptomItem,
                       value: int,
                       all_items: Iterable[SymptomItem],
                       rules: List[BranchingRule] = NCI_BRANCHING_RULES) -> BranchingEvaluation:
    if not evaluate_branching_trigger(item, value, rules):
        return BranchingEvaluation(
            should_branch=False,
            triggered_by="",
            target_question=None,
            branching_reason="Response below branching threshold",
        )

    rule = _rule_for(item, rules)
    return BranchingEvaluation(
        should_branch=True,
        triggered_by=f"{item.symptom_term}_{item.attribute.value}",
        target_question=find_branching_target(item, all_items, rules),
        branching_reason=rule.reason if rule else "Branching threshold met",
    )


def determine_skip_items(item: SymptomItem,
                         value: int,
                         candidates: Iterable[SymptomItem]) -> List[str]:
    """Ids among candidates made unnecessary by a zero answer to item."""
    if value != 0:
        return []
    skipped = SKIP_RULES.get(item.attribute, ())
    return [
        candidate.item_id for candidate in candidates
        if candidate.symptom_term == item.symptom_term
        and candidate.attribute in skipped
    ]


# ----------------------------------------------------------------------
# Batch helpers
# ----------------------------------------------------------------------

def collect_branching_questions(responses: Iterable[Tuple[SymptomItem, int]],
                                all_items: List[SymptomItem]) -> List[SymptomItem]:
    """Follow-ups for a batch of answers, at most one per symptom."""
    by_symptom: Dict[str, SymptomItem] = {}
    for item, value in responses:
        evaluation = evaluate_branching(item, value, all_items)
        if evaluation.should_branch and evaluation.target_question is not None:
            target = evaluation.target_question
            by_symptom[target.symptom_term] = target
    return list(by_symptom.values())


def is_question_already_asked(target: SymptomItem, existing: Iterable[SymptomItem]) -> bool:
    return any(q.item_id == target.item_id for q in existing)


def deduplicate_and_order_follow_ups(follow_ups: List[SymptomItem],
                                     existing: List[SymptomItem]) -> List[SymptomItem]:
    unique = [q for q in follow_ups if not is_question_already_asked(q, existing)]
    return sorted(unique, key=lambda q: q.symptom_term)


def get_branching_explanation(symptom_term: str) -> str:
    name = " ".join(word.capitalize() for word in symptom_term.split("_"))
    return (
        f"You reported {name.lower()}. "
        "We'd like to understand how this affects your daily activities."
    )


def estimate_branching_time(question_count: int,
                            seconds_per_question: int = SECONDS_PER_QUESTION) -> int:
    """Additional seconds of questionnaire time for follow-up questions."""
    return question_count * seconds_per_question
