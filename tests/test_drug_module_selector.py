"""Tests for drug-module question selection."""

import logging
from dataclasses import replace

import pytest

from toxicity_engine.core.models import (
    Attribute,
    CompositionStep,
    CyclePhase,
    DrugModule,
    DrugModuleComposition,
    SafetyProxyItem,
)
from toxicity_engine.orchestrator import (
    apply_optional_phase_filtering,
    get_active_drugs,
    select_questions_via_drug_modules,
    union_symptoms,
)
from toxicity_engine.orchestrator.drug_module_selector import (
    cap_symptom_groups,
    resolve_drug_modules,
)


def _module(name, terms=(), proxies=(), rules=None):
    return DrugModule(
        drug_name=name,
        drug_class="test",
        symptom_terms=tuple(terms),
        safety_proxy_items=tuple(proxies),
        phase_filtering_rules=rules or {},
    )


def _terms(items):
    return {item.symptom_term for item in items}


# ------------------------------------------------------------------
# Active drugs
# ------------------------------------------------------------------

class TestActiveDrugs:
    def test_ac_step(self, make_context):
        active = get_active_drugs(make_context("AC-T", cycle_number=2))
        assert active.drugs == ["Doxorubicin", "Cyclophosphamide"]
        assert active.regimen_step == "AC"
        assert active.cycle_number == 2

    def test_t_step(self, make_context):
        active = get_active_drugs(make_context("AC-T", cycle_number=6))
        assert active.drugs == ["Paclitaxel"]
        assert active.regimen_step == "T"

    def test_all_cycles_step(self, make_context):
        active = get_active_drugs(make_context("TC", cycle_number=3))
        assert active.drugs == ["Docetaxel", "Cyclophosphamide"]
        assert active.regimen_step is None

    def test_falls_back_to_drug_components(self, make_context):
        active = get_active_drugs(make_context("PEMBROLIZUMAB"))
        assert active.drugs == ["Pembrolizumab"]
        assert active.regimen_step is None

    def test_no_matching_step(self, make_context, caplog):
        with caplog.at_level(logging.WARNING):
            active = get_active_drugs(make_context("AC-T", cycle_number=9))
        assert active.drugs == []
        assert "no composition step" in caplog.text

    def test_alternative_names_resolve(self, catalog):
        modules, missing = resolve_drug_modules(["kadcyla", "TAXOL"], catalog.drug_modules)
        assert [m.drug_name for m in modules] == ["Trastuzumab emtansine", "Paclitaxel"]
        assert missing == []


# ------------------------------------------------------------------
# Union
# ------------------------------------------------------------------

class TestUnionSymptoms:
    def test_safety_proxy_overrides_phase_rule(self):
        proxy = _module("A", proxies=[SafetyProxyItem("myelosuppression", ("fever",), "")])
        direct = _module("B", terms=["fever"], rules={"fever": frozenset({CyclePhase.RECOVERY})})

        for order in ([proxy, direct], [direct, proxy]):
            sources = {s.symptom_term: s for s in union_symptoms(order)}
            fever = sources["fever"]
            assert fever.is_safety_proxy is True
            assert fever.phase_restriction is None
            assert set(fever.sources) == {"A", "B"}

    def test_sources_deduplicated(self, catalog):
        modules, _ = resolve_drug_modules(["Doxorubicin", "Cyclophosphamide"], catalog.drug_modules)
        sources = {s.symptom_term: s for s in union_symptoms(modules)}
        assert sources["nausea"].sources == ("Doxorubicin", "Cyclophosphamide")
        assert sources["nausea"].phase_restriction == frozenset(
            {CyclePhase.POST_SESSION, CyclePhase.RECOVERY}
        )
        assert sources["fever"].is_safety_proxy

    def test_phase_filter_keeps_proxies_and_unrestricted(self, catalog):
        modules, _ = resolve_drug_modules(["Doxorubicin"], catalog.drug_modules)
        kept = apply_optional_phase_filtering(union_symptoms(modules), CyclePhase.NADIR)
        terms = {s.symptom_term for s in kept}
        assert "nausea" not in terms
        assert "fatigue" in terms
        assert "fever" in terms


# ------------------------------------------------------------------
# Selection
# ------------------------------------------------------------------

class TestSelectViaDrugModules:
    def test_ac_cycle_two_nadir(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=9, cycle_number=2)
        result = select_questions_via_drug_modules(context, catalog.drug_modules, catalog.items)
        meta = result.metadata

        assert meta.active_drugs == ["Doxorubicin", "Cyclophosphamide"]
        assert meta.regimen_step == "AC"
        assert meta.total_symptoms_before_dedup == 24
        assert meta.total_symptoms_after_dedup == 14
        assert meta.phase_filtering_applied is True
        assert set(meta.included_symptoms) == {
            "fatigue", "hair_loss", "mouth_sores", "decreased_appetite",
            "fever", "chills", "sore_throat", "bruising", "bleeding",
            "shortness_of_breath", "heart_palpitations", "swelling",
        }
        assert meta.missing_drug_modules == []
        assert "nausea" not in _terms(result.selected_questions)
        assert meta.cycle_phase == CyclePhase.NADIR

    def test_post_session_keeps_restricted_symptoms(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=2, cycle_number=1)
        result = select_questions_via_drug_modules(context, catalog.drug_modules, catalog.items)
        assert {"nausea", "vomiting"} <= _terms(result.selected_questions)
        assert result.metadata.phase_filtering_applied is False

    def test_drug_component_fallback(self, catalog, make_context):
        context = make_context("PEMBROLIZUMAB", treatment_day=9)
        result = select_questions_via_drug_modules(context, catalog.drug_modules, catalog.items)
        assert result.metadata.active_drugs == ["Pembrolizumab"]
        assert {"cough", "rash", "shortness_of_breath"} <= _terms(result.selected_questions)

    def test_missing_module_reported(self, catalog, make_context, caplog):
        tc = catalog.get_regimen("TC")
        broken = replace(tc, drug_module_composition=DrugModuleComposition(
            steps=(CompositionStep(None, "all", ("Docetaxel", "Unobtainium")),),
        ))
        with caplog.at_level(logging.WARNING):
            result = select_questions_via_drug_modules(
                make_context(regimen=broken), catalog.drug_modules, catalog.items
            )
        assert result.metadata.missing_drug_modules == ["Unobtainium"]
        assert "Unobtainium" in caplog.text
        assert result.selected_questions

    def test_completeness_invariant(self, catalog, make_context):
        for code in ("AC-T", "TC", "T-DM1", "CAPECITABINE", "PEMBROLIZUMAB"):
            for day in (2, 5, 9, 15, 20):
                result = select_questions_via_drug_modules(
                    make_context(code, treatment_day=day), catalog.drug_modules, catalog.items
                )
                items = result.selected_questions
                for term in _terms(items):
                    has_severity = any(
                        i.symptom_term == term and i.attribute == Attribute.SEVERITY for i in items
                    )
                    assert has_severity or not catalog.find_items(term, Attribute.SEVERITY)

    def test_cap_keeps_groups_whole(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=9, cycle_number=2)
        full = select_questions_via_drug_modules(context, catalog.drug_modules, catalog.items)
        capped = select_questions_via_drug_modules(
            context, catalog.drug_modules, catalog.items, target_item_count=5
        )
        assert 0 < len(capped.selected_questions) <= 5
        for term in _terms(capped.selected_questions):
            in_capped = [i for i in capped.selected_questions if i.symptom_term == term]
            in_full = [i for i in full.selected_questions if i.symptom_term == term]
            assert in_capped == in_full

    def test_small_targets_never_empty(self, catalog, make_context):
        context = make_context("AC-T", treatment_day=9, cycle_number=2)
        full = select_questions_via_drug_modules(
            context, catalog.drug_modules, catalog.items
        ).selected_questions

        for target in (1, 2, 3, 20, 21):
            capped = select_questions_via_drug_modules(
                context, catalog.drug_modules, catalog.items, target_item_count=target
            ).selected_questions
            assert 0 < len(capped) <= target
            assert capped[0] == full[0]


class TestCapSymptomGroups:
    @pytest.fixture
    def grouped_items(self, make_item):
        return [
            make_item("a", Attribute.FREQUENCY), make_item("a", Attribute.SEVERITY),
            make_item("b", Attribute.FREQUENCY), make_item("b", Attribute.SEVERITY),
            make_item("b", Attribute.INTERFERENCE),
            make_item("c", Attribute.SEVERITY),
        ]

    def test_passes_over_overflowing_group(self, grouped_items):
        terms = [i.symptom_term for i in cap_symptom_groups(grouped_items, 4)]
        assert terms == ["a", "a", "c"]
        assert len(cap_symptom_groups(grouped_items, 6)) == 6

    def test_target_below_top_group_keeps_prefix(self, grouped_items):
        assert [i.item_id for i in cap_symptom_groups(grouped_items, 1)] == ["a-freq"]
        assert [i.item_id for i in cap_symptom_groups(grouped_items[2:], 2)] == [
            "b-freq", "b-sev",
        ]

    def test_zero_target(self, grouped_items):
        assert cap_symptom_groups(grouped_items, 0) == []
