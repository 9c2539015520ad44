"""Tests for the PRO-CTCAE to CTCAE mapping."""

from toxicity_engine.scoring import (
    get_clinical_action,
    get_symptoms_with_specific_mappings,
    has_specific_mapping,
    map_multiple_to_ctcae,
    map_to_ctcae,
)


class TestMapToCTCAE:
    def test_nausea_grade_four_maps_to_three(self):
        mapping = map_to_ctcae("nausea", 4)
        assert mapping.ctcae_grade == 3
        assert mapping.ctcae_term == "Nausea - Grade 3"
        assert mapping.proctcae_grade == 4

    def test_vomiting_grade_four_stays_four(self):
        assert map_to_ctcae("vomiting", 4).ctcae_grade == 4

    def test_general_mapping(self):
        mapping = map_to_ctcae("dizziness", 2)
        assert mapping.ctcae_term == "Moderate"
        assert mapping.ctcae_grade == 2

    def test_missing_grade_falls_back_to_general(self):
        assert map_to_ctcae("vomiting", 0).ctcae_term == "Absent"

    def test_numbness_uses_neuropathy(self):
        mapping = map_to_ctcae("numbness_tingling", 2)
        assert mapping.symptom_term == "numbness_tingling"
        assert mapping.ctcae_term == "Peripheral sensory neuropathy - Grade 2"
        assert has_specific_mapping("numbness_tingling")

    def test_multiple(self):
        mappings = map_multiple_to_ctcae([("fatigue", 4), ("rash", 1)])
        assert [m.ctcae_grade for m in mappings] == [3, 1]


class TestHelpers:
    def test_specific_mapping_list(self):
        assert set(get_symptoms_with_specific_mappings()) == {
            "nausea", "vomiting", "diarrhea", "fatigue", "neuropathy", "hand_foot_syndrome",
        }
        assert not has_specific_mapping("rash")

    def test_clinical_action(self):
        assert get_clinical_action(4).startswith("Emergency intervention required")
        assert get_clinical_action(9) == "Consult clinical guidelines for appropriate action."
