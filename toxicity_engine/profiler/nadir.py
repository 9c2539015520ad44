"""
Nadir analyzer: position within the regimen's nadir window and the
infection-risk guidance that follows from it.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import List, Optional, Tuple

from ..core.models import DateLike, Regimen
from .timeline import is_in_nadir_window


class NadirSeverity(Enum):
    NONE = "none"
    EARLY = "early"
    PEAK = "peak"
    LATE = "late"


class InfectionRisk(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


@dataclass(frozen=True)
class NadirAnalysis:
    is_in_nadir_window: bool
    nadir_severity: NadirSeverity
    nadir_day: Optional[int] = None
    days_into_nadir: Optional[int] = None
    days_until_nadir_end: Optional[int] = None


CORE_NADIR_SYMPTOMS = ["infection_signs", "fever", "bleeding", "bruising"]

PHASE_NADIR_SYMPTOMS = {
    NadirSeverity.EARLY: ["fatigue", "weakness"],
    NadirSeverity.PEAK: ["shortness_of_breath", "dizziness", "chills"],
    NadirSeverity.LATE: ["mouth_sores", "skin_changes"],
}

_RISK_BY_SEVERITY = {
    NadirSeverity.EARLY: InfectionRisk.MODERATE,
    NadirSeverity.PEAK: InfectionRisk.VERY_HIGH,
    NadirSeverity.LATE: InfectionRisk.HIGH,
    NadirSeverity.NONE: InfectionRisk.LOW,
}

NADIR_GUIDANCE = {
    InfectionRisk.LOW: "Your infection risk is currently low. Continue normal precautions.",
    InfectionRisk.MODERATE: (
        "You are entering the nadir period. Be extra vigilant about infection signs."
    ),
    InfectionRisk.HIGH: (
        "Your white blood cell counts are likely low. Avoid crowds and practice good hygiene."
    ),
    InfectionRisk.VERY_HIGH: (
        "PEAK NADIR PERIOD: Your infection risk is at its highest. Monitor for fever "
        "(>100.4°F), chills, or any signs of infection. Contact your care team "
        "immediately if symptoms develop."
    ),
}

_OUTSIDE = NadirAnalysis(is_in_nadir_window=False, nadir_severity=NadirSeverity.NONE)


def analyze_nadir_status(treatment_day: int, regimen: Regimen) -> NadirAnalysis:
    """
    Split the nadir window into thirds by days into the window.

    For a 7-12 window: days 7-8 early, 9-10 peak, 11-12 late.
    """
    if not is_in_nadir_window(treatment_day, regimen):
        return _OUTSIDE

    start, end = regimen.nadir_window_start, regimen.nadir_window_end
    days_into = treatment_day - start
    window_length = end - start + 1

    early_threshold = math.ceil(window_length * 0.33)
    late_threshold = math.floor(window_length * 0.67)

    if days_into < early_threshold:
        severity = NadirSeverity.EARLY
    elif days_into >= late_threshold:
        severity = NadirSeverity.LATE
    else:
        severity = NadirSeverity.PEAK

    return NadirAnalysis(
        is_in_nadir_window=True,
        nadir_severity=severity,
        nadir_day=treatment_day,
        days_into_nadir=days_into,
        days_until_nadir_end=end - treatment_day,
    )


def get_infection_risk_level(analysis: NadirAnalysis) -> InfectionRisk:
    if not analysis.is_in_nadir_window:
        return InfectionRisk.LOW
    return _RISK_BY_SEVERITY[analysis.nadir_severity]


def get_nadir_priority_symptoms(analysis: NadirAnalysis) -> List[str]:
    if not analysis.is_in_nadir_window:
        return []
    return CORE_NADIR_SYMPTOMS + PHASE_NADIR_SYMPTOMS.get(analysis.nadir_severity, [])


def should_show_nadir_warnings(analysis: NadirAnalysis) -> bool:
    return analysis.is_in_nadir_window and analysis.nadir_severity in (
        NadirSeverity.EARLY,
        NadirSeverity.PEAK,
    )


def generate_nadir_guidance(analysis: NadirAnalysis) -> str:
    """Patient-facing message; empty outside the nadir window."""
    if not analysis.is_in_nadir_window:
        return ""
    return NADIR_GUIDANCE[get_infection_risk_level(analysis)]


def calculate_nadir_dates(infusion_date: DateLike,
                          regimen: Regimen) -> Optional[Tuple[DateLike, DateLike]]:
    """Calendar dates of the nadir window for a cycle starting on infusion_date."""
    if not regimen.has_nadir_window:
        return None
    return (
        infusion_date + timedelta(days=regimen.nadir_window_start - 1),
        infusion_date + timedelta(days=regimen.nadir_window_end - 1),
    )
