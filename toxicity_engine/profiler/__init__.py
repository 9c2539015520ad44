"""Treatment timeline and nadir profiling"""

from .nadir import (
    InfectionRisk,
    NadirAnalysis,
    NadirSeverity,
    analyze_nadir_status,
    calculate_nadir_dates,
    generate_nadir_guidance,
    get_infection_risk_level,
    get_nadir_priority_symptoms,
    should_show_nadir_warnings,
)
from .timeline import (
    TimelineResult,
    build_treatment_context,
    calculate_days_until_next_infusion,
    calculate_timeline,
    calculate_treatment_day,
    determine_cycle_phase,
    is_in_nadir_window,
)

__all__ = [
    "InfectionRisk",
    "NadirAnalysis",
    "NadirSeverity",
    "TimelineResult",
    "analyze_nadir_status",
    "build_treatment_context",
    "calculate_days_until_next_infusion",
    "calculate_nadir_dates",
    "calculate_timeline",
    "calculate_treatment_day",
    "determine_cycle_phase",
    "generate_nadir_guidance",
    "get_infection_risk_level",
    "get_nadir_priority_symptoms",
    "is_in_nadir_window",
    "should_show_nadir_warnings",
]
