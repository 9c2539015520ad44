"""
Drug-module question selection.

Drug -> symptoms -> union -> phase filter -> history -> questions.
Safety-proxy symptoms bypass phase filtering; the result is capped to a
target item count.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from ..core.models import (
    CyclePhase,
    DrugModule,
    SymptomHistory,
    SymptomItem,
    SymptomSource,
    TreatmentContext,
    find_drug_module,
)
from .question_selector import (
    apply_historical_escalation,
    ensure_attribute_completeness,
    prioritize_items,
)

logger = logging.getLogger(__name__)

DEFAULT_TARGET_ITEM_COUNT = 50


@dataclass(frozen=True)
class ActiveDrugsResult:
    drugs: List[str]
    regimen_step: Optional[str]
    cycle_number: int


@dataclass(frozen=True)
class DrugModuleSelectionMetadata:
    active_drugs: List[str]
    regimen_step: Optional[str]
    symptom_sources: List[SymptomSource]
    included_symptoms: List[str]
    missing_drug_modules: List[str]
    total_symptoms_before_dedup: int
    total_symptoms_after_dedup: int
    phase_filtering_applied: bool
    cycle_phase: CyclePhase
    treatment_day: int
    in_nadir_window: bool
    regimen_code: str


@dataclass(frozen=True)
class DrugModuleSelectionResult:
    selected_questions: List[SymptomItem]
    metadata: DrugModuleSelectionMetadata


def get_active_drugs(context: TreatmentContext) -> ActiveDrugsResult:
    """
    Drugs active in the current cycle.

    The first composition step covering the cycle wins. Without a
    composition, fall back to the regimen's drug components.
    """
    regimen = context.regimen
    composition = regimen.drug_module_composition
    cycle_number = context.current_cycle

    if composition is None or not composition.steps:
        return ActiveDrugsResult(
            drugs=[component.name for component in regimen.drug_components],
            regimen_step=None,
            cycle_number=cycle_number,
        )

    for step in composition.steps:
        if step.applies_to(cycle_number):
            return ActiveDrugsResult(
                drugs=list(step.drug_modules),
                regimen_step=step.step_name,
                cycle_number=cycle_number,
            )

    logger.warning(
        "Regimen %s has no composition step for cycle %d",
        regimen.regimen_code, cycle_number,
    )
    return ActiveDrugsResult(drugs=[], regimen_step=None, cycle_number=cycle_number)


def resolve_drug_modules(drugs: List[str],
                         drug_modules: List[DrugModule]) -> Tuple[List[DrugModule], List[str]]:
    """Match drug names (or alternative names, case-insensitive) to modules."""
    active: List[DrugModule] = []
    missing: List[str] = []
    for drug in drugs:
        module = find_drug_module(drug, drug_modules)
        if module is None:
            missing.append(drug)
        elif module not in active:
            active.append(module)
    return active, missing


# ----------------------------------------------------------------------
# Union & phase filtering
# ----------------------------------------------------------------------

class _SourceBuilder:
    """Mutable accumulator for one symptom while unioning modules."""

    def __init__(self, symptom_term: str):
        self.symptom_term = symptom_term
        self.sources: List[str] = []
        self.is_safety_proxy = False
        self.phases: Optional[Set[CyclePhase]] = None

    def add_source(self, drug_name: str) -> None:
        if drug_name not in self.sources:
            self.sources.append(drug_name)

    def add_phases(self, phases: FrozenSet[CyclePhase]) -> None:
        if self.phases is None:
            self.phases = set()
        self.phases.update(phases)

    def build(self) -> SymptomSource:
        restriction = None
        # safety proxies are always asked
        if not self.is_safety_proxy and self.phases:
            restriction = frozenset(self.phases)
        return SymptomSource(
            symptom_term=self.symptom_term,
            sources=tuple(self.sources),
            is_safety_proxy=self.is_safety_proxy,
            phase_restriction=restriction,
        )


def union_symptoms(drug_modules: List[DrugModule]) -> List[SymptomSource]:
    """Deduplicate symptom terms across modules, tracking contributing drugs."""
    builders: Dict[str, _SourceBuilder] = {}

    for module in drug_modules:
        for term in module.symptom_terms:
            builder = builders.setdefault(term, _SourceBuilder(term))
            builder.add_source(module.drug_name)
            rule = module.phase_filtering_rules.get(term)
            if rule:
                builder.add_phases(rule)

        for proxy in module.safety_proxy_items:
            for term in proxy.symptoms:
                builder = builders.setdefault(term, _SourceBuilder(term))
                builder.add_source(module.drug_name)
                builder.is_safety_proxy = True

    return [builder.build() for builder in builders.values()]


def apply_optional_phase_filtering(sources: List[SymptomSource],
                                   phase: CyclePhase) -> List[SymptomSource]:
    return [
        source for source in sources
        if source.is_safety_proxy
        or not source.phase_restriction
        or phase in source.phase_restriction
    ]


def count_symptoms_before_dedup(drug_modules: List[DrugModule]) -> int:
    return sum(
        len(module.symptom_terms) + sum(len(p.symptoms) for p in module.safety_proxy_items)
        for module in drug_modules
    )


def cap_symptom_groups(items: List[SymptomItem], target_item_count: int) -> List[SymptomItem]:
    """
    Truncate to at most target_item_count items without splitting a symptom.

    Items of one symptom are contiguous after completion and sorting. Groups
    that would overflow are passed over so smaller ones further down can still
    fill the target. When the top group alone exceeds the target, its leading
    items (presence/frequency, then severity) are kept so the result is never
    empty.
    """
    capped: List[SymptomItem] = []
    index = 0
    while index < len(items) and len(capped) < target_item_count:
        term = items[index].symptom_term
        end = index
        while end < len(items) and items[end].symptom_term == term:
            end += 1
        group = items[index:end]
        index = end
        if len(capped) + len(group) <= target_item_count:
            capped.extend(group)
        elif not capped:
            capped.extend(group[:target_item_count])
    return capped


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def select_questions_via_drug_modules(
    context: TreatmentContext,
    drug_modules: List[DrugModule],
    available_items: List[SymptomItem],
    history: Optional[List[SymptomHistory]] = None,
    target_item_count: int = DEFAULT_TARGET_ITEM_COUNT,
) -> DrugModuleSelectionResult:
    active = get_active_drugs(context)
    active_modules, missing = resolve_drug_modules(active.drugs, drug_modules)
    if missing:
        logger.warning(
            "Regimen %s references drugs with no module: %s",
            context.regimen.regimen_code, ", ".join(missing),
        )

    all_sources = union_symptoms(active_modules)
    filtered_sources = apply_optional_phase_filtering(all_sources, context.phase)
    included = [source.symptom_term for source in filtered_sources]

    wanted = set(included)
    relevant = [item for item in available_items if item.symptom_term in wanted]

    complete = ensure_attribute_completeness(relevant, available_items)
    scores = apply_historical_escalation(complete, history)
    ordered = prioritize_items(complete, scores)
    selected = cap_symptom_groups(ordered, target_item_count)

    logger.debug(
        "Drugs %s (step %s): %d symptoms -> %d after phase filter -> %d items (%d before cap)",
        active.drugs, active.regimen_step, len(all_sources), len(filtered_sources),
        len(selected), len(ordered),
    )

    return DrugModuleSelectionResult(
        selected_questions=selected,
        metadata=DrugModuleSelectionMetadata(
            active_drugs=list(active.drugs),
            regimen_step=active.regimen_step,
            symptom_sources=all_sources,
            included_symptoms=included,
            missing_drug_modules=missing,
            total_symptoms_before_dedup=count_symptoms_before_dedup(active_modules),
            total_symptoms_after_dedup=len(all_sources),
            phase_filtering_applied=len(filtered_sources) < len(all_sources),
            cycle_phase=context.phase,
            treatment_day=context.treatment_day,
            in_nadir_window=context.in_nadir_window,
            regimen_code=context.regimen.regimen_code,
        ),
    )
