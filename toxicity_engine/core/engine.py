"""
Clinical Decision Engine - ties the profiling, selection, branching, grading
and alerting paths together over an explicitly supplied reference catalog.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from ..alerting import (
    Alert,
    PatientAlertContext,
    TriagePatient,
    TriageQueue,
    build_system_error_alert,
    detect_emergency_alerts,
    generate_patient_summary,
    get_queue_statistics,
    is_critical_alert,
    prioritize_triage_queue,
)
from ..orchestrator import (
    QuestionnaireSession,
    SelectedQuestion,
    select_questions,
    select_questions_via_drug_modules,
)
from ..profiler import NadirAnalysis, analyze_nadir_status, build_treatment_context
from ..scoring import (
    ALGORITHM_VERSION,
    CTCAEMapping,
    GradingResult,
    calculate_grade_trend,
    calculate_multiple_grades,
    calculate_toxicity_burden,
    get_highest_grade,
    group_responses_by_symptom,
    map_multiple_to_ctcae,
    validate_grading_input,
)
from .catalog import ReferenceCatalog
from .config import config as global_config
from .errors import AlertPersistenceError, GradingValidationError
from .models import (
    DateLike,
    PatientTreatment,
    Regimen,
    SymptomHistory,
    SymptomItem,
    TreatmentContext,
    TreatmentCycle,
    Trend,
    symptom_history_lookup,
)

logger = logging.getLogger(__name__)

AlertSink = Callable[[List[Alert]], Any]


class QuestionnaireApproach(Enum):
    """How the question set is chosen"""
    REGIMEN = "regimen"          # regimen toxicity profile + phase priorities
    DRUG_MODULE = "drug_module"  # union of the active drugs' modules


@dataclass
class GeneratedQuestionnaire:
    items: List[SymptomItem]
    approach: QuestionnaireApproach
    context: TreatmentContext
    metadata: Any
    selected_questions: List[SelectedQuestion] = field(default_factory=list)  # regimen approach only
    nadir: Optional[NadirAnalysis] = None


@dataclass
class CompletionResult:
    grades: List[GradingResult]
    alerts: List[Alert]
    toxicity_burden: float
    highest_grade: Optional[GradingResult]
    ctcae_mappings: List[CTCAEMapping]
    patient_summary: str


class ClinicalDecisionEngine:
    """
    Entry point for the four request paths: questionnaire generation, the
    per-answer session, questionnaire completion and clinician triage.

    Holds no patient state between calls; everything patient-specific is passed in.
    """

    def __init__(self, catalog: ReferenceCatalog, config: Dict[str, Any] = None):
        self.catalog = catalog
        self.config = global_config.get_engine_config()
        self.config.update(config or {})

        self.target_item_count = self.config.get('drug_module_target_item_count', 50)
        self.default_approach = QuestionnaireApproach(
            self.config.get('default_approach', QuestionnaireApproach.DRUG_MODULE.value)
        )
        self.seconds_per_question = self.config.get('seconds_per_question', 10)
        self.algorithm_version = self.config.get('algorithm_version', ALGORITHM_VERSION)
        self.burden_weights = self.config.get('burden_weights', [0, 3, 8, 15, 25])
        self.burden_max_points = self.config.get('burden_max_points', 200)
        self.multiple_moderate_threshold = self.config.get('multiple_moderate_threshold', 3)
        self.recent_completion_hours = self.config.get('recent_completion_hours', 1)
        self.nadir_heuristic_days = tuple(self.config.get('nadir_heuristic_days', (7, 12)))

        self.is_initialized = False

    def initialize(self):
        """Load the bundled reference data unless the catalog was built explicitly"""
        if not self.catalog.is_loaded:
            self.catalog.initialize()
        self.is_initialized = True

    def _ensure_initialized(self):
        if not self.is_initialized:
            self.initialize()

    # ------------------------------------------------------------------
    # Profiling
    # ------------------------------------------------------------------

    def build_context(self,
                      treatment: Optional[PatientTreatment],
                      regimen: Optional[Regimen],
                      cycle: Optional[TreatmentCycle],
                      current_date: Optional[DateLike] = None) -> TreatmentContext:
        return build_treatment_context(treatment, regimen, cycle, current_date)

    def nadir_status(self, context: TreatmentContext) -> NadirAnalysis:
        return analyze_nadir_status(context.treatment_day, context.regimen)

    # ------------------------------------------------------------------
    # Generation path
    # ------------------------------------------------------------------

    def generate_questionnaire(self,
                               context: TreatmentContext,
                               history: Optional[List[SymptomHistory]] = None,
                               approach: Union[QuestionnaireApproach, str, None] = None
                               ) -> GeneratedQuestionnaire:
        self._ensure_initialized()
        if approach is None:
            approach = self.default_approach
        approach = QuestionnaireApproach(approach)

        selected_questions: List[SelectedQuestion] = []
        if approach is QuestionnaireApproach.REGIMEN:
            result = select_questions(context, self.catalog.items, history)
            items = result.items
            selected_questions = result.selected_questions
            metadata = result.metadata
        else:
            result = select_questions_via_drug_modules(
                context,
                self.catalog.drug_modules,
                self.catalog.items,
                history,
                target_item_count=self.target_item_count,
            )
            items = result.selected_questions
            metadata = result.metadata

        logger.info(
            "Generated %d questions for patient %s (%s, %s cycle %d day %d, %s)",
            len(items), context.patient_id, approach.value,
            context.regimen.regimen_code, context.current_cycle,
            context.treatment_day, context.phase.value,
        )

        return GeneratedQuestionnaire(
            items=items,
            approach=approach,
            context=context,
            metadata=metadata,
            selected_questions=selected_questions,
            nadir=self.nadir_status(context),
        )

    # ------------------------------------------------------------------
    # Answer path
    # ------------------------------------------------------------------

    def start_session(self, generated: GeneratedQuestionnaire) -> QuestionnaireSession:
        self._ensure_initialized()
        return QuestionnaireSession(
            generated.items,
            self.catalog,
            seconds_per_question=self.seconds_per_question,
        )

    # ------------------------------------------------------------------
    # Completion path
    # ------------------------------------------------------------------

    def complete_questionnaire(self,
                               answers: Dict[str, int],
                               context: Optional[TreatmentContext] = None,
                               history: Optional[List[SymptomHistory]] = None,
                               alert_sink: Optional[AlertSink] = None) -> CompletionResult:
        """
        Grade the answers and derive alerts.

        Invalid grouped input raises GradingValidationError before anything is
        graded. When alert_sink fails, the computed alerts and grades travel
        on the raised AlertPersistenceError.
        """
        self._ensure_initialized()

        responses = group_responses_by_symptom(answers, self.catalog)
        for response in responses:
            report = validate_grading_input(response)
            if not report.valid:
                logger.warning(
                    "Rejected responses for %s: %s",
                    response.symptom_term, "; ".join(report.errors),
                )
                raise GradingValidationError(response.symptom_term, report.errors)

        grades = calculate_multiple_grades(responses, self.algorithm_version)
        alert_context = (
            PatientAlertContext.from_treatment_context(context) if context is not None else None
        )
        alerts = detect_emergency_alerts(
            grades,
            alert_context,
            self._current_trends(grades, history),
            multiple_moderate_threshold=self.multiple_moderate_threshold,
        )

        result = CompletionResult(
            grades=grades,
            alerts=alerts,
            toxicity_burden=calculate_toxicity_burden(
                grades, self.burden_weights, self.burden_max_points
            ),
            highest_grade=get_highest_grade(grades),
            ctcae_mappings=map_multiple_to_ctcae(
                (g.symptom_term, g.composite_grade) for g in grades
            ),
            patient_summary=generate_patient_summary(alerts),
        )

        logger.info(
            "Graded %d symptoms (highest %s), %d alerts, burden %.1f",
            len(grades),
            result.highest_grade.composite_grade if result.highest_grade else "n/a",
            len(alerts),
            result.toxicity_burden,
        )

        if alert_sink is not None:
            self._persist_alerts(alert_sink, alerts, grades)

        return result

    def _current_trends(self,
                        grades: List[GradingResult],
                        history: Optional[List[SymptomHistory]]) -> List[SymptomHistory]:
        """
        Supplied history, with a symptom also marked worsening when the new
        grade is above its last recorded grade. A supplied worsening trend is
        never downgraded.
        """
        lookup = symptom_history_lookup(history)
        trends = []
        for grade in grades:
            previous = lookup.get(grade.symptom_term)
            if previous is None:
                continue
            if previous.trend == Trend.WORSENING:
                trends.append(previous)
                continue
            trend = calculate_grade_trend(grade.composite_grade, previous.last_grade)
            if trend.direction == Trend.WORSENING:
                previous = replace(previous, trend=Trend.WORSENING)
            trends.append(previous)
        return trends

    def _persist_alerts(self,
                        alert_sink: AlertSink,
                        alerts: List[Alert],
                        grades: List[GradingResult]):
        try:
            alert_sink(alerts)
        except Exception as e:
            critical = [a for a in alerts if is_critical_alert(a)]
            fallback = build_system_error_alert(len(critical)) if critical else None
            if critical:
                logger.critical(
                    "Alert creation failed with %d critical alert(s) unsaved: %s",
                    len(critical), ", ".join(a.alert_message for a in critical),
                )
            else:
                logger.error("Alert creation failed for %d alert(s): %s", len(alerts), e)
            raise AlertPersistenceError(alerts, grades, e, fallback_alert=fallback) from e

    # ------------------------------------------------------------------
    # Triage path
    # ------------------------------------------------------------------

    def prioritize(self,
                   patients: List[TriagePatient],
                   now: Optional[datetime] = None) -> TriageQueue:
        entries = prioritize_triage_queue(
            patients,
            now,
            recent_completion_hours=self.recent_completion_hours,
            nadir_days=self.nadir_heuristic_days,
        )
        return TriageQueue(entries=entries, statistics=get_queue_statistics(entries))
