"""Tests for regimen-based question selection."""

from dataclasses import replace

import pytest

from toxicity_engine.core.models import (
    Attribute,
    CyclePhase,
    SymptomHistory,
    ToxicityProfile,
    Trend,
)
from toxicity_engine.orchestrator import (
    QuestionPriority,
    ensure_attribute_completeness,
    select_questions,
)
from toxicity_engine.orchestrator.question_selector import (
    apply_historical_escalation,
    calculate_escalation_score,
    determine_conditional_branching,
    filter_by_cycle_phase,
    priority_for_score,
)


def _terms(items):
    return {item.symptom_term for item in items}


def assert_complete(items, catalog):
    """Every selected symptom has severity unless the catalog has none for it."""
    for term in _terms(items):
        has_severity = any(
            i.symptom_term == term and i.attribute == Attribute.SEVERITY for i in items
        )
        assert has_severity or not catalog.find_items(term, Attribute.SEVERITY), term


# ------------------------------------------------------------------
# Selection pipeline
# ------------------------------------------------------------------

class TestSelectQuestions:
    def test_ac_t_nadir_includes_core_nadir_symptoms(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=9)
        assert context.phase == CyclePhase.NADIR
        assert context.in_nadir_window

        result = select_questions(context, catalog.items)

        assert {"fever", "chills"} <= _terms(result.items)
        assert _terms(result.items) == {
            "fever", "chills", "bruising", "bleeding", "fatigue", "mouth_sores",
        }
        assert result.total_count == len(result.items) == 11

    def test_metadata(self, catalog, make_context):
        result = select_questions(make_context("AC-T", treatment_day=9), catalog.items)
        assert result.metadata.cycle_phase == CyclePhase.NADIR
        assert result.metadata.treatment_day == 9
        assert result.metadata.in_nadir_window is True
        assert result.metadata.regimen_code == "AC-T"

    def test_no_history_keeps_catalog_group_order(self, catalog, make_context):
        result = select_questions(make_context("AC-T", treatment_day=9), catalog.items)
        assert [q.item.item_id for q in result.selected_questions[:2]] == [
            "proctcae-fatigue-sev",
            "proctcae-fatigue-interf",
        ]
        assert all(q.priority == QuestionPriority.LOW for q in result.selected_questions)

    def test_history_moves_symptom_first(self, catalog, make_context):
        history = [SymptomHistory("fever", last_grade=3, trend=Trend.WORSENING)]
        result = select_questions(make_context("AC-T", treatment_day=9), catalog.items, history)

        first, second = result.selected_questions[:2]
        assert first.item.symptom_term == "fever"
        assert second.item.symptom_term == "fever"
        assert first.score == 6
        assert first.priority == QuestionPriority.HIGH

    def test_no_item_count_cap(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=9)
        no_filter = replace(
            context.regimen,
            toxicity_profile=ToxicityProfile(high_risk=None, phase_priorities=None),
        )
        result = select_questions(make_context(regimen=no_filter, treatment_day=15), catalog.items)
        assert result.total_count > 20

    def test_completeness_invariant(self, catalog, make_context):
        for code in ("AC-T", "TC", "T-DM1", "CAPECITABINE", "PEMBROLIZUMAB"):
            for day in (2, 5, 9, 15, 20):
                result = select_questions(make_context(code, treatment_day=day), catalog.items)
                assert_complete(result.items, catalog)

    def test_conditional_branching_flags(self, catalog, make_context):
        result = select_questions(make_context("AC-T", treatment_day=9), catalog.items)
        for question in result.selected_questions:
            expected = question.item.attribute in (Attribute.FREQUENCY, Attribute.SEVERITY)
            assert question.requires_conditional_branching is expected


# ------------------------------------------------------------------
# Phase filtering
# ------------------------------------------------------------------

class TestPhaseFiltering:
    def test_universal_table_when_regimen_has_no_priorities(self, catalog, make_context):
        context = make_context("CAPECITABINE", treatment_day=12)
        assert context.phase == CyclePhase.NADIR

        result = select_questions(context, catalog.items)
        assert _terms(result.items) == {"fatigue", "decreased_appetite", "fever"}

    def test_universal_table_when_phase_missing(self, catalog, make_context):
        tc = catalog.get_regimen("TC")
        partial = replace(tc, toxicity_profile=replace(
            tc.toxicity_profile,
            phase_priorities={CyclePhase.PRE_SESSION: ("fatigue",)},
        ))
        context = make_context(regimen=partial, treatment_day=9)

        filtered = filter_by_cycle_phase(catalog.items, context)
        categories = {item.symptom_category for item in filtered}
        assert categories == {"infection_signs", "hematological", "constitutional", "musculoskeletal"}

    def test_regimen_priorities_match_symptom_terms(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=2)
        filtered = filter_by_cycle_phase(catalog.items, context)
        assert _terms(filtered) == {"nausea", "vomiting", "fatigue", "decreased_appetite"}


# ------------------------------------------------------------------
# History escalation
# ------------------------------------------------------------------

class TestEscalation:
    @pytest.mark.parametrize("grade,trend,score", [
        (0, Trend.STABLE, 1.0),
        (2, Trend.STABLE, 3.0),
        (2, Trend.IMPROVING, 3.0),
        (3, Trend.WORSENING, 6.0),
        (4, Trend.STABLE, 5.0),
        (1, Trend.IMPROVING, 0.5),
        (1, Trend.WORSENING, 2.0),
    ])
    def test_scores(self, grade, trend, score):
        assert calculate_escalation_score(SymptomHistory("nausea", grade, trend)) == score

    def test_no_history_is_base_score(self):
        assert calculate_escalation_score(None) == 1.0

    def test_group_shares_score(self, catalog):
        history = [SymptomHistory("pain", 2, Trend.STABLE)]
        scores = apply_historical_escalation(catalog.find_items("pain"), history)
        assert set(scores.values()) == {3.0}

    def test_priority_bands(self):
        assert priority_for_score(4)[0] == QuestionPriority.HIGH
        assert priority_for_score(3)[0] == QuestionPriority.MEDIUM
        assert priority_for_score(1)[0] == QuestionPriority.LOW


# ------------------------------------------------------------------
# Attribute completeness
# ------------------------------------------------------------------

class TestAttributeCompleteness:
    def test_adds_frequency_before_severity(self, catalog):
        fever_sev = catalog.get_item("proctcae-fever-sev")
        complete = ensure_attribute_completeness([fever_sev], catalog.items)
        assert [i.item_id for i in complete] == ["proctcae-fever-freq", "proctcae-fever-sev"]

    def test_adds_missing_severity(self, catalog):
        nausea_freq = catalog.get_item("proctcae-nausea-freq")
        complete = ensure_attribute_completeness([nausea_freq], catalog.items)
        assert [i.item_id for i in complete] == ["proctcae-nausea-freq", "proctcae-nausea-sev"]

    def test_presence_class_counts_as_presence(self, catalog):
        hair = catalog.get_item("proctcae-hair-loss-amount")
        assert ensure_attribute_completeness([hair], catalog.items) == [hair]

    def test_never_adds_interference(self, catalog):
        fatigue_sev = catalog.get_item("proctcae-fatigue-sev")
        assert ensure_attribute_completeness([fatigue_sev], catalog.items) == [fatigue_sev]

    def test_group_order(self, catalog):
        pain = list(reversed(catalog.find_items("pain")))
        complete = ensure_attribute_completeness(pain, catalog.items)
        assert [i.attribute for i in complete] == [
            Attribute.FREQUENCY, Attribute.SEVERITY, Attribute.INTERFERENCE,
        ]

    def test_conditional_branching_map(self, catalog):
        flags = determine_conditional_branching(catalog.find_items("pain"))
        assert flags == {
            "proctcae-pain-freq": True,
            "proctcae-pain-sev": True,
            "proctcae-pain-interf": False,
        }
