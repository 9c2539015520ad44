"""
Main application entry point
Demonstrates the Toxicity Engine on the bundled reference data
"""

import logging
from datetime import datetime, timedelta

from toxicity_engine import ClinicalDecisionEngine, ReferenceCatalog
from toxicity_engine.alerting import TriagePatient
from toxicity_engine.core.config import config
from toxicity_engine.core.models import PatientTreatment, SymptomHistory, TreatmentCycle, Trend
from toxicity_engine.profiler import generate_nadir_guidance

logging.basicConfig(
    level=config.logging_config['level'],
    format=config.logging_config['format'],
)


def main():
    """Main application workflow"""

    print("=" * 60)
    print("Toxicity Engine - Chemotherapy Symptom Monitoring")
    print("Loading reference catalog...")
    print("=" * 60)

    catalog = ReferenceCatalog()
    engine = ClinicalDecisionEngine(catalog)
    engine.initialize()

    # Patient on AC-T, cycle 2, evaluated on treatment day 9 (peak nadir)
    now = datetime(2025, 3, 10, 9, 0)
    infusion = now - timedelta(days=8)
    treatment = PatientTreatment(
        treatment_id="tx-001",
        patient_id="patient-001",
        regimen_code="AC-T",
        start_date=infusion - timedelta(days=21),
        current_cycle=2,
        total_planned_cycles=8,
    )
    cycle = TreatmentCycle(
        cycle_id="cycle-002",
        treatment_id="tx-001",
        cycle_number=2,
        infusion_date=infusion,
        planned_next_infusion=infusion + timedelta(days=21),
    )
    regimen = catalog.get_regimen(treatment.regimen_code)
    context = engine.build_context(treatment, regimen, cycle, now)

    print(f"\nRegimen: {regimen.regimen_name}")
    print(f"Cycle {context.current_cycle}, day {context.treatment_day} ({context.phase.value})")
    print(f"In nadir window: {context.in_nadir_window}")

    history = [SymptomHistory("fatigue", last_grade=2, trend=Trend.WORSENING)]

    # 1. Generate the questionnaire
    print("\n[1/4] Generating questionnaire...")
    generated = engine.generate_questionnaire(context, history)
    print(f"   ✓ {len(generated.items)} questions ({generated.approach.value})")
    print(f"   Active drugs: {', '.join(generated.metadata.active_drugs)}")
    guidance = generate_nadir_guidance(generated.nadir)
    if guidance:
        print(f"   Nadir guidance: {guidance}")

    # 2. Answer it, one question at a time
    print("\n[2/4] Answering questions...")
    session = engine.start_session(generated)
    scripted = {
        "proctcae-fever-freq": 3,
        "proctcae-fever-sev": 3,
        "proctcae-fatigue-sev": 3,
        "proctcae-nausea-freq": 0,
    }
    for item in list(session.queue):
        value = scripted.get(item.item_id, 1)
        if item.item_id not in {i.item_id for i in session.pending_items()}:
            continue
        outcome = session.submit_answer(item.item_id, value)
        if outcome.branching_questions:
            added = ", ".join(q.item_code for q in outcome.branching_questions)
            print(f"   + follow-up after {item.item_code}: {added}")
        if outcome.skip_item_ids:
            print(f"   - skipped after {item.item_code}: {len(outcome.skip_item_ids)} item(s)")

    # follow-ups inserted during the pass above
    for item in session.pending_items():
        session.submit_answer(item.item_id, 2)
    print(f"   ✓ {len(session.answers)} answers recorded")

    # 3. Complete: grade and alert
    print("\n[3/4] Grading responses...")
    result = engine.complete_questionnaire(session.answers, context, history)
    for grade in result.grades:
        if grade.composite_grade >= 2:
            print(f"   {grade.symptom_term}: Grade {grade.composite_grade} ({grade.grading_rationale})")
    print(f"   Toxicity burden: {result.toxicity_burden:.1f}")

    if result.alerts:
        print(f"\n⚠️  Alerts ({len(result.alerts)}):")
        for alert in result.alerts:
            print(f"   • [{alert.severity.value}] {alert.alert_message}")
    print(f"\n{result.patient_summary}")

    # 4. Triage against another patient
    print("\n[4/4] Building triage queue...")
    queue = engine.prioritize([
        TriagePatient(
            patient_id="patient-002",
            patient_name="Patient Two",
            alerts=[],
            questionnaire_completed_at=now - timedelta(hours=5),
            regimen_code="TC",
            current_cycle=1,
            treatment_day=15,
        ),
        TriagePatient(
            patient_id=context.patient_id,
            patient_name="Patient One",
            alerts=result.alerts,
            questionnaire_completed_at=now,
            regimen_code=regimen.regimen_code,
            current_cycle=context.current_cycle,
            treatment_day=context.treatment_day,
        ),
    ], now=now)

    print("\n" + "=" * 60)
    print("TRIAGE QUEUE")
    print("=" * 60)
    for entry in queue.entries:
        print(f"\n#{entry.rank} {entry.patient.patient_name} (score {entry.priority_score})")
        print(f"   Reason: {entry.priority_reason}")
        print(f"   Action: {entry.recommended_action}")
        print(f"   Target: {entry.timeline_target}")

    stats = queue.statistics
    print(f"\nEmergency: {stats.emergency_count}  Urgent: {stats.urgent_count}  "
          f"Routine: {stats.routine_count}  Avg response: {stats.avg_response_time}")

    print("\n" + "=" * 60)
    print("✓ Done!")


if __name__ == "__main__":
    main()
