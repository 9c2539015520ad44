"""Emergency detection and clinician triage"""

from .emergency_detector import (
    EMERGENCY_SYMPTOMS,
    Alert,
    AlertSeverity,
    AlertType,
    PatientAlertContext,
    build_system_error_alert,
    detect_emergency_alerts,
    format_symptom_name,
    generate_patient_summary,
    get_highest_priority_alert,
    group_alerts_by_severity,
    is_critical_alert,
    requires_immediate_action,
    sort_alerts,
)
from .triage import (
    QueueStatistics,
    TriageQueue,
    TriagePatient,
    TriagePriority,
    calculate_priority_score,
    filter_by_severity,
    format_response_time,
    get_next_patient,
    get_priority_reason,
    get_queue_statistics,
    get_recommended_action,
    get_timeline_target,
    prioritize_triage_queue,
)

__all__ = [
    "EMERGENCY_SYMPTOMS",
    "Alert",
    "AlertSeverity",
    "AlertType",
    "PatientAlertContext",
    "QueueStatistics",
    "TriagePatient",
    "TriageQueue",
    "TriagePriority",
    "build_system_error_alert",
    "calculate_priority_score",
    "detect_emergency_alerts",
    "filter_by_severity",
    "format_response_time",
    "format_symptom_name",
    "generate_patient_summary",
    "get_highest_priority_alert",
    "get_next_patient",
    "get_priority_reason",
    "get_queue_statistics",
    "get_recommended_action",
    "get_timeline_target",
    "group_alerts_by_severity",
    "is_critical_alert",
    "prioritize_triage_queue",
    "requires_immediate_action",
    "sort_alerts",
]
