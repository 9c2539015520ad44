"""
Triage queue: rank patients for clinician review.

Score = 100 per red alert + 25 per yellow + 5 per green,
        +10 when the questionnaire was completed within the last hour,
        +15 when the treatment day falls in days 7-12.
The day 7-12 bonus is a fixed heuristic, independent of any regimen window.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from .emergency_detector import Alert, AlertSeverity

RED_POINTS = 100
YELLOW_POINTS = 25
GREEN_POINTS = 5
RECENT_COMPLETION_POINTS = 10
NADIR_POINTS = 15

RECENT_COMPLETION_HOURS = 1
NADIR_HEURISTIC_DAYS = (7, 12)

# Target response time per band, in hours
RESPONSE_HOURS = {
    "emergency": 0.5,
    "urgent": 12,
    "routine": 72,
}

_FILTER_LEVEL = {
    AlertSeverity.RED: 3,
    AlertSeverity.YELLOW: 2,
    AlertSeverity.GREEN: 1,
}


@dataclass(frozen=True)
class TriagePatient:
    patient_id: str
    patient_name: str
    alerts: List[Alert]
    questionnaire_completed_at: datetime
    regimen_code: str
    current_cycle: int
    treatment_day: int

    def count(self, severity: AlertSeverity) -> int:
        return sum(1 for a in self.alerts if a.severity is severity)

    def has(self, severity: AlertSeverity) -> bool:
        return any(a.severity is severity for a in self.alerts)


@dataclass(frozen=True)
class TriagePriority:
    rank: int
    patient: TriagePatient
    priority_score: int
    priority_reason: str
    recommended_action: str
    timeline_target: str


@dataclass(frozen=True)
class QueueStatistics:
    total_patients: int
    emergency_count: int
    urgent_count: int
    routine_count: int
    avg_response_time: str


@dataclass(frozen=True)
class TriageQueue:
    entries: List[TriagePriority]
    statistics: QueueStatistics


def _in_nadir_heuristic(treatment_day: int, days: Tuple[int, int] = NADIR_HEURISTIC_DAYS) -> bool:
    return days[0] <= treatment_day <= days[1]


def calculate_priority_score(patient: TriagePatient,
                             now: Optional[datetime] = None,
                             recent_completion_hours: float = RECENT_COMPLETION_HOURS,
                             nadir_days: Tuple[int, int] = NADIR_HEURISTIC_DAYS) -> int:
    if now is None:
        now = datetime.now(patient.questionnaire_completed_at.tzinfo)

    score = (
        patient.count(AlertSeverity.RED) * RED_POINTS
        + patient.count(AlertSeverity.YELLOW) * YELLOW_POINTS
        + patient.count(AlertSeverity.GREEN) * GREEN_POINTS
    )

    hours_since = (now - patient.questionnaire_completed_at).total_seconds() / 3600
    if hours_since < recent_completion_hours:
        score += RECENT_COMPLETION_POINTS

    if _in_nadir_heuristic(patient.treatment_day, nadir_days):
        score += NADIR_POINTS

    return score


def get_priority_reason(patient: TriagePatient,
                        nadir_days: Tuple[int, int] = NADIR_HEURISTIC_DAYS) -> str:
    reasons = []
    red = patient.count(AlertSeverity.RED)
    yellow = patient.count(AlertSeverity.YELLOW)

    if red:
        reasons.append(f"{red} emergency alert{'s' if red > 1 else ''}")
    if yellow:
        reasons.append(f"{yellow} urgent alert{'s' if yellow > 1 else ''}")
    if _in_nadir_heuristic(patient.treatment_day, nadir_days):
        reasons.append("in nadir window")

    return ", ".join(reasons) if reasons else "routine monitoring"


def get_recommended_action(patient: TriagePatient) -> str:
    if patient.has(AlertSeverity.RED):
        return "Contact patient immediately. Consider emergency evaluation or ED referral."
    if patient.has(AlertSeverity.YELLOW):
        return "Schedule same-day or next-day phone call or visit. Review management plan."
    return "Routine follow-up. Document in chart. No immediate action needed."


def get_timeline_target(patient: TriagePatient) -> str:
    if patient.has(AlertSeverity.RED):
        return "Within 30 minutes"
    if patient.has(AlertSeverity.YELLOW):
        return "Within 24 hours"
    return "Within 3-5 days"


def prioritize_triage_queue(patients: Iterable[TriagePatient],
                            now: Optional[datetime] = None,
                            recent_completion_hours: float = RECENT_COMPLETION_HOURS,
                            nadir_days: Tuple[int, int] = NADIR_HEURISTIC_DAYS) -> List[TriagePriority]:
    """Highest score first, ranks starting at 1; equal scores keep input order."""
    scored = [
        (calculate_priority_score(p, now, recent_completion_hours, nadir_days), p)
        for p in patients
    ]
    scored.sort(key=lambda pair: -pair[0])

    return [
        TriagePriority(
            rank=index + 1,
            patient=patient,
            priority_score=score,
            priority_reason=get_priority_reason(patient, nadir_days),
            recommended_action=get_recommended_action(patient),
            timeline_target=get_timeline_target(patient),
        )
        for index, (score, patient) in enumerate(scored)
    ]


def filter_by_severity(queue: Sequence[TriagePriority],
                       min_severity: AlertSeverity) -> List[TriagePriority]:
    """Entries with at least one alert at or above min_severity."""
    minimum = _FILTER_LEVEL[min_severity]
    return [
        entry for entry in queue
        if any(_FILTER_LEVEL[a.severity] >= minimum for a in entry.patient.alerts)
    ]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_response_time(hours: float) -> str:
    if hours < 1:
        return f"{_round_half_up(hours * 60)} minutes"
    if hours < 24:
        return f"{_round_half_up(hours)} hours"
    return f"{_round_half_up(hours / 24)} days"


def get_queue_statistics(queue: Sequence[TriagePriority]) -> QueueStatistics:
    emergency = sum(1 for e in queue if e.patient.has(AlertSeverity.RED))
    urgent = sum(
        1 for e in queue
        if e.patient.has(AlertSeverity.YELLOW) and not e.patient.has(AlertSeverity.RED)
    )
    routine = len(queue) - emergency - urgent

    avg_hours = (
        emergency * RESPONSE_HOURS["emergency"]
        + urgent * RESPONSE_HOURS["urgent"]
        + routine * RESPONSE_HOURS["routine"]
    ) / (len(queue) or 1)

    return QueueStatistics(
        total_patients=len(queue),
        emergency_count=emergency,
        urgent_count=urgent,
        routine_count=routine,
        avg_response_time=format_response_time(avg_hours),
    )


def get_next_patient(queue: Sequence[TriagePriority],
                     acknowledged_ids: Iterable[str] = ()) -> Optional[TriagePriority]:
    """Highest-ranked entry whose patient has not been acknowledged yet."""
    acknowledged = set(acknowledged_ids)
    for entry in queue:
        if entry.patient.patient_id not in acknowledged:
            return entry
    return None
