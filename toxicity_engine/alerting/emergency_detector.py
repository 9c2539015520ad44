"""
Emergency detection from composite grades.

RED (emergency):
  - any grade 4
  - grade 3 fever during the nadir window (neutropenic fever risk)
  - grade 3 fever, infection signs, bleeding, shortness of breath,
    chest pain or confusion
YELLOW (urgent / concerning trend):
  - any other grade 3
  - grade 2 with a worsening trend
  - three or more grade 2 symptoms at once
Grade 1, and grade 2 without a worsening trend, raise nothing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..core.models import SymptomHistory, TreatmentContext, Trend, symptom_history_lookup
from ..scoring.grading import GradingResult


class AlertSeverity(Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"

    @property
    def rank(self) -> int:
        """1 is most severe"""
        return _SEVERITY_ORDER[self]


_SEVERITY_ORDER = {
    AlertSeverity.RED: 1,
    AlertSeverity.YELLOW: 2,
    AlertSeverity.GREEN: 3,
}


class AlertType(Enum):
    EMERGENCY = "emergency"
    URGENT = "urgent"
    ROUTINE = "routine"
    CONCERNING_TREND = "concerning_trend"


EMERGENCY_SYMPTOMS = frozenset({
    "fever",
    "infection_signs",
    "bleeding",
    "shortness_of_breath",
    "chest_pain",
    "confusion",
})

MULTIPLE_MODERATE_THRESHOLD = 3


@dataclass(frozen=True)
class Alert:
    alert_type: AlertType
    severity: AlertSeverity
    symptom_term: str
    grade: int
    alert_message: str
    patient_instructions: str
    clinician_instructions: str
    requires_immediate_action: bool


@dataclass(frozen=True)
class PatientAlertContext:
    in_nadir_window: bool = False
    treatment_day: Optional[int] = None
    current_cycle: Optional[int] = None
    regimen_code: Optional[str] = None

    @classmethod
    def from_treatment_context(cls, context: TreatmentContext) -> "PatientAlertContext":
        return cls(
            in_nadir_window=context.in_nadir_window,
            treatment_day=context.treatment_day,
            current_cycle=context.current_cycle,
            regimen_code=context.regimen.regimen_code,
        )


def format_symptom_name(symptom_term: str) -> str:
    """shortness_of_breath -> Shortness Of Breath"""
    return " ".join(word[:1].upper() + word[1:] for word in symptom_term.split("_"))


# ----------------------------------------------------------------------
# Alert builders
# ----------------------------------------------------------------------

def _grade4_alert(grade: GradingResult) -> Alert:
    name = format_symptom_name(grade.symptom_term)
    return Alert(
        alert_type=AlertType.EMERGENCY,
        severity=AlertSeverity.RED,
        symptom_term=grade.symptom_term,
        grade=grade.composite_grade,
        alert_message=f"EMERGENCY: Grade 4 {name}",
        patient_instructions=(
            "EMERGENCY: This is a serious symptom that requires immediate medical "
            "attention. Please contact your oncology team immediately or go to the "
            "emergency room if they are unavailable. Do not wait."
        ),
        clinician_instructions=(
            f"Grade 4 {name} reported. Immediate evaluation required. Consider "
            "hospitalization, treatment interruption, and supportive care. Contact "
            "patient within 30 minutes."
        ),
        requires_immediate_action=True,
    )


def _grade3_alert(grade: GradingResult, context: Optional[PatientAlertContext]) -> Alert:
    name = format_symptom_name(grade.symptom_term)

    if grade.symptom_term == "fever" and context is not None and context.in_nadir_window:
        window = "Patient in nadir window"
        if context.treatment_day is not None:
            window += f" (Day {context.treatment_day})"
        return Alert(
            alert_type=AlertType.EMERGENCY,
            severity=AlertSeverity.RED,
            symptom_term=grade.symptom_term,
            grade=grade.composite_grade,
            alert_message=f"EMERGENCY: Neutropenic Fever Risk - Grade 3 {name} during nadir",
            patient_instructions=(
                "EMERGENCY: Fever during chemotherapy can be serious. Please check your "
                "temperature. If it is 100.4°F (38°C) or higher, go to the emergency "
                "room immediately or call your oncology team. Do not wait."
            ),
            clinician_instructions=(
                f"URGENT: Possible neutropenic fever. {window}. Immediate evaluation "
                "required for fever workup and empiric antibiotics. Contact patient "
                "immediately."
            ),
            requires_immediate_action=True,
        )

    if grade.symptom_term in EMERGENCY_SYMPTOMS:
        return Alert(
            alert_type=AlertType.EMERGENCY,
            severity=AlertSeverity.RED,
            symptom_term=grade.symptom_term,
            grade=grade.composite_grade,
            alert_message=f"EMERGENCY: Grade 3 {name}",
            patient_instructions=(
                f"URGENT: Your {name} is severe and requires prompt medical attention. "
                "Please contact your oncology team today or go to urgent care if they "
                "are unavailable."
            ),
            clinician_instructions=(
                f"Grade 3 {name} reported. Same-day evaluation recommended. Consider "
                "treatment modification, supportive care, or referral for urgent evaluation."
            ),
            requires_immediate_action=True,
        )

    return Alert(
        alert_type=AlertType.URGENT,
        severity=AlertSeverity.YELLOW,
        symptom_term=grade.symptom_term,
        grade=grade.composite_grade,
        alert_message=f"URGENT: Grade 3 {name}",
        patient_instructions=(
            f"Your {name} is severe. Please contact your oncology team within 24 hours "
            "to discuss management. They may want to see you or adjust your treatment."
        ),
        clinician_instructions=(
            f"Grade 3 {name} reported. Evaluate within 24-48 hours. Consider dose "
            "modification, supportive medications, or treatment delay for next cycle."
        ),
        requires_immediate_action=False,
    )


def _worsening_trend_alert(grade: GradingResult, previous_grade: int) -> Alert:
    name = format_symptom_name(grade.symptom_term)
    change = f"Grade {previous_grade} → {grade.composite_grade}"
    return Alert(
        alert_type=AlertType.CONCERNING_TREND,
        severity=AlertSeverity.YELLOW,
        symptom_term=grade.symptom_term,
        grade=grade.composite_grade,
        alert_message=f"CONCERNING TREND: {name} worsening ({change})",
        patient_instructions=(
            f"Your {name} has gotten worse since last report. Please contact your "
            "oncology team if it continues to worsen or becomes difficult to manage."
        ),
        clinician_instructions=(
            f"{name} showing worsening trend ({change}). Monitor closely and consider "
            "proactive intervention before it reaches Grade 3."
        ),
        requires_immediate_action=False,
    )


def _multiple_moderate_alert(count: int) -> Alert:
    return Alert(
        alert_type=AlertType.CONCERNING_TREND,
        severity=AlertSeverity.YELLOW,
        symptom_term="multiple_symptoms",
        grade=2,
        alert_message=f"CONCERNING: {count} moderate symptoms (Grade 2)",
        patient_instructions=(
            "You are experiencing several moderate symptoms. Your care team will review "
            "all of them to help manage your treatment side effects."
        ),
        clinician_instructions=(
            f"Patient reporting {count} Grade 2 symptoms. Consider overall toxicity "
            "burden. May indicate need for comprehensive supportive care review or "
            "treatment modification."
        ),
        requires_immediate_action=False,
    )


def build_system_error_alert(critical_count: int) -> Alert:
    """Stand-in alert raised when computed alerts could not be stored."""
    return Alert(
        alert_type=AlertType.EMERGENCY,
        severity=AlertSeverity.RED,
        symptom_term="system_error",
        grade=4,
        alert_message=(
            f"SYSTEM ERROR: Alert creation failed for questionnaire with "
            f"{critical_count} critical symptom(s). MANUAL REVIEW REQUIRED."
        ),
        patient_instructions=(
            "Please contact your care team immediately. There was a technical issue "
            "submitting your questionnaire responses."
        ),
        clinician_instructions=(
            "Alerts for this questionnaire were not stored. Review the graded "
            "responses manually and contact the patient."
        ),
        requires_immediate_action=True,
    )


def is_critical_alert(alert: Alert) -> bool:
    return alert.severity is AlertSeverity.RED or alert.grade >= 3


# ----------------------------------------------------------------------
# Detection
# ----------------------------------------------------------------------

def detect_emergency_alerts(grades: List[GradingResult],
                            context: Optional[PatientAlertContext] = None,
                            history: Optional[List[SymptomHistory]] = None,
                            multiple_moderate_threshold: int = MULTIPLE_MODERATE_THRESHOLD) -> List[Alert]:
    """Alerts for a set of grades, red before yellow before green."""
    lookup = symptom_history_lookup(history)
    alerts: List[Alert] = []

    for grade in grades:
        if grade.composite_grade == 4:
            alerts.append(_grade4_alert(grade))
        elif grade.composite_grade == 3:
            alerts.append(_grade3_alert(grade, context))
        elif grade.composite_grade == 2:
            record = lookup.get(grade.symptom_term)
            if record is not None and record.trend is Trend.WORSENING:
                alerts.append(_worsening_trend_alert(grade, record.last_grade))

    moderate_count = sum(1 for g in grades if g.composite_grade == 2)
    if moderate_count >= multiple_moderate_threshold:
        alerts.append(_multiple_moderate_alert(moderate_count))

    return sort_alerts(alerts)


def sort_alerts(alerts: List[Alert]) -> List[Alert]:
    return sorted(alerts, key=lambda a: a.severity.rank)


def get_highest_priority_alert(alerts: List[Alert]) -> Optional[Alert]:
    if not alerts:
        return None
    for severity in (AlertSeverity.RED, AlertSeverity.YELLOW):
        for alert in alerts:
            if alert.severity is severity:
                return alert
    return alerts[0]


def requires_immediate_action(alerts: List[Alert]) -> bool:
    return any(a.requires_immediate_action for a in alerts)


def group_alerts_by_severity(alerts: List[Alert]) -> Dict[AlertSeverity, List[Alert]]:
    return {
        severity: [a for a in alerts if a.severity is severity]
        for severity in AlertSeverity
    }


def generate_patient_summary(alerts: List[Alert]) -> str:
    if not alerts:
        return "No concerning symptoms reported. Continue routine monitoring."

    red = sum(1 for a in alerts if a.severity is AlertSeverity.RED)
    yellow = sum(1 for a in alerts if a.severity is AlertSeverity.YELLOW)

    if red:
        plural = "s" if red > 1 else ""
        return (
            f"URGENT: You have {red} symptom{plural} that require immediate medical "
            f"attention. Please review the alert{plural} below and contact your care "
            "team right away."
        )
    if yellow:
        plural = "s" if yellow > 1 else ""
        return (
            f"You have {yellow} symptom{plural} that need attention. Please contact "
            "your care team within 24-48 hours to discuss management."
        )
    return "Your symptoms are being monitored. Your care team will review your responses."
