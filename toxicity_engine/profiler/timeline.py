"""
Timeline profiler: where a patient is within the current treatment cycle.

Every value here is a pure function of (infusion date, evaluation date,
regimen) and is recomputed on each call.

Phase windows (1-based treatment day, infusion day = day 1):
  - pre_session:  cycle_length-1 .. cycle_length+1 (checked first)
  - post_session: days 1-3
  - recovery:     days 4-6
  - nadir:        regimen-specific window
  - inter_cycle:  everything else
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.errors import NotFoundError
from ..core.models import (
    CyclePhase,
    DateLike,
    PatientTreatment,
    Regimen,
    TreatmentContext,
    TreatmentCycle,
)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class TimelineResult:
    treatment_day: int
    phase: CyclePhase
    in_nadir_window: bool
    days_until_next_infusion: int
    days_since_last_infusion: int


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _elapsed_days(start: DateLike, end: DateLike) -> float:
    return (_as_datetime(end) - _as_datetime(start)).total_seconds() / SECONDS_PER_DAY


def calculate_treatment_day(last_infusion_date: DateLike,
                            current_date: Optional[DateLike] = None) -> int:
    """1-based day within the cycle; the infusion day itself is day 1."""
    if current_date is None:
        current_date = datetime.now()
    return math.floor(_elapsed_days(last_infusion_date, current_date)) + 1


def is_in_nadir_window(treatment_day: int, regimen: Regimen) -> bool:
    """Nadir window test, independent of the phase precedence chain."""
    if not regimen.has_nadir_window:
        return False
    return regimen.nadir_window_start <= treatment_day <= regimen.nadir_window_end


def determine_cycle_phase(treatment_day: int, regimen: Regimen) -> CyclePhase:
    cycle_length = regimen.cycle_length_days

    if cycle_length - 1 <= treatment_day <= cycle_length + 1:
        return CyclePhase.PRE_SESSION
    if 1 <= treatment_day <= 3:
        return CyclePhase.POST_SESSION
    if 4 <= treatment_day <= 6:
        return CyclePhase.RECOVERY
    if is_in_nadir_window(treatment_day, regimen):
        return CyclePhase.NADIR
    return CyclePhase.INTER_CYCLE


def calculate_days_until_next_infusion(current_date: DateLike,
                                       next_infusion_date: DateLike) -> int:
    """Rounded up; negative when the infusion is overdue."""
    return math.ceil(_elapsed_days(current_date, next_infusion_date))


def calculate_timeline(regimen: Regimen,
                       cycle: TreatmentCycle,
                       current_date: DateLike) -> TimelineResult:
    treatment_day = calculate_treatment_day(cycle.infusion_date, current_date)

    if cycle.planned_next_infusion is not None:
        days_until_next = calculate_days_until_next_infusion(
            current_date, cycle.planned_next_infusion
        )
    else:
        days_until_next = regimen.cycle_length_days - treatment_day

    return TimelineResult(
        treatment_day=treatment_day,
        phase=determine_cycle_phase(treatment_day, regimen),
        in_nadir_window=is_in_nadir_window(treatment_day, regimen),
        days_until_next_infusion=days_until_next,
        days_since_last_infusion=math.floor(_elapsed_days(cycle.infusion_date, current_date)),
    )


def build_treatment_context(treatment: Optional[PatientTreatment],
                            regimen: Optional[Regimen],
                            cycle: Optional[TreatmentCycle],
                            current_date: Optional[DateLike] = None) -> TreatmentContext:
    """
    Combine treatment records with the computed timeline.

    Missing treatment, regimen or cycle records raise NotFoundError; no
    default is ever substituted.
    """
    if treatment is None:
        raise NotFoundError("Active treatment")
    if regimen is None:
        raise NotFoundError("Regimen", treatment.regimen_code)
    if cycle is None:
        raise NotFoundError("Current cycle", treatment.treatment_id)
    if current_date is None:
        current_date = datetime.now()

    timeline = calculate_timeline(regimen, cycle, current_date)
    absolute_day = math.floor(_elapsed_days(treatment.start_date, current_date)) + 1

    return TreatmentContext(
        patient_id=treatment.patient_id,
        treatment_id=treatment.treatment_id,
        regimen=regimen,
        current_cycle=cycle.cycle_number,
        treatment_day=timeline.treatment_day,
        absolute_treatment_day=absolute_day,
        last_infusion_date=cycle.infusion_date,
        next_infusion_date=cycle.planned_next_infusion,
        days_until_next_infusion=timeline.days_until_next_infusion,
        phase=timeline.phase,
        in_nadir_window=timeline.in_nadir_window,
        cycle=cycle,
    )
