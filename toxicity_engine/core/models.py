"""Shared domain models for treatment timelines, regimens and symptom tracking."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

DateLike = Union[date, datetime]


class CyclePhase(Enum):
    PRE_SESSION = "pre_session"    # approaching the next infusion
    POST_SESSION = "post_session"  # days 1-3
    RECOVERY = "recovery"          # days 4-6
    NADIR = "nadir"                # regimen-specific window
    INTER_CYCLE = "inter_cycle"


class Attribute(Enum):
    FREQUENCY = "frequency"
    SEVERITY = "severity"
    INTERFERENCE = "interference"
    PRESENT_ABSENT = "present_absent"
    AMOUNT = "amount"

    @property
    def is_presence_class(self) -> bool:
        """Attributes that establish whether/how often a symptom occurs"""
        return self in (Attribute.FREQUENCY, Attribute.PRESENT_ABSENT, Attribute.AMOUNT)


class Trend(Enum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


@dataclass(frozen=True)
class ResponseOption:
    value: int
    label: str


@dataclass(frozen=True)
class SymptomItem:
    """A single catalog question about one attribute of one symptom."""
    item_id: str
    item_code: str              # e.g. NAUSEA_FREQ
    symptom_term: str           # e.g. nausea
    symptom_category: str       # e.g. gastrointestinal
    attribute: Attribute
    question_text: str
    response_options: Tuple[ResponseOption, ...] = ()

    def label_for(self, value: int) -> Optional[str]:
        for option in self.response_options:
            if option.value == value:
                return option.label
        return None


@dataclass(frozen=True)
class SafetyProxyItem:
    type: str                   # e.g. myelosuppression, cardiotoxicity
    symptoms: Tuple[str, ...]
    rationale: str


@dataclass(frozen=True)
class DrugModule:
    """One drug's contribution of symptoms and safety-monitoring proxies."""
    drug_name: str
    drug_class: str
    symptom_terms: Tuple[str, ...]
    safety_proxy_items: Tuple[SafetyProxyItem, ...] = ()
    phase_filtering_rules: Dict[str, FrozenSet[CyclePhase]] = field(default_factory=dict)
    is_myelosuppressive: bool = False
    alternative_names: Tuple[str, ...] = ()
    clinical_notes: str = ""

    def matches_name(self, name: str) -> bool:
        """Case-insensitive match on the drug name or any alternative name"""
        wanted = name.strip().lower()
        return any(n.lower() == wanted for n in (self.drug_name,) + tuple(self.alternative_names))


@dataclass(frozen=True)
class CompositionStep:
    step_name: Optional[str]              # 'AC', 'T', or None for single-step regimens
    cycles: Union[str, Tuple[int, ...]]   # 'all' or explicit cycle numbers
    drug_modules: Tuple[str, ...]

    def applies_to(self, cycle_number: int) -> bool:
        if self.cycles == "all":
            return True
        return cycle_number in self.cycles


@dataclass(frozen=True)
class DrugModuleComposition:
    steps: Tuple[CompositionStep, ...]
    safety_profile: Dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class DrugComponent:
    name: str
    dose: str = ""
    route: Optional[str] = None


@dataclass(frozen=True)
class ToxicityProfile:
    high_risk: Optional[Tuple[str, ...]] = None
    moderate: Tuple[str, ...] = ()
    low: Tuple[str, ...] = ()
    phase_priorities: Optional[Dict[CyclePhase, Tuple[str, ...]]] = None


@dataclass(frozen=True)
class Regimen:
    """A named chemotherapy protocol. Immutable reference data."""
    regimen_code: str
    regimen_name: str
    cycle_length_days: int
    toxicity_profile: ToxicityProfile
    nadir_window_start: Optional[int] = None
    nadir_window_end: Optional[int] = None
    drug_components: Tuple[DrugComponent, ...] = ()
    drug_module_composition: Optional[DrugModuleComposition] = None
    total_cycles: Optional[int] = None

    @property
    def has_nadir_window(self) -> bool:
        # a 0/0 window means "no significant nadir"
        return bool(self.nadir_window_start) and bool(self.nadir_window_end)


@dataclass(frozen=True)
class PatientTreatment:
    treatment_id: str
    patient_id: str
    regimen_code: str
    start_date: DateLike
    current_cycle: int
    total_planned_cycles: Optional[int] = None
    status: str = "active"


@dataclass(frozen=True)
class TreatmentCycle:
    cycle_id: str
    treatment_id: str
    cycle_number: int
    infusion_date: DateLike
    planned_next_infusion: Optional[DateLike] = None


@dataclass(frozen=True)
class TreatmentContext:
    """Read-only snapshot of where a patient is in treatment at one instant."""
    patient_id: str
    treatment_id: str
    regimen: Regimen
    current_cycle: int
    treatment_day: int
    absolute_treatment_day: int
    last_infusion_date: DateLike
    next_infusion_date: Optional[DateLike]
    days_until_next_infusion: int
    phase: CyclePhase
    in_nadir_window: bool
    cycle: TreatmentCycle


@dataclass(frozen=True)
class SymptomHistory:
    symptom_term: str
    last_grade: int
    trend: Trend
    last_reported_date: Optional[DateLike] = None


@dataclass(frozen=True)
class SymptomSource:
    """Which drugs contributed a symptom and whether a phase restriction applies."""
    symptom_term: str
    sources: Tuple[str, ...]
    is_safety_proxy: bool
    phase_restriction: Optional[FrozenSet[CyclePhase]] = None


def symptom_history_lookup(history: Optional[List[SymptomHistory]]) -> Dict[str, SymptomHistory]:
    """Normalize optional history into a term -> record map."""
    if not history:
        return {}
    return {h.symptom_term: h for h in history}


def find_drug_module(name: str, drug_modules: Iterable[DrugModule]) -> Optional[DrugModule]:
    """First module whose name or alternative name matches, ignoring case."""
    for module in drug_modules:
        if module.matches_name(name):
            return module
    return None
