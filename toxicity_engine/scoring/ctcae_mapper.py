"""
PRO-CTCAE composite grade -> CTCAE v5.0 equivalent.

Default mapping is one-to-one, with PRO-CTCAE grade 4 meaning severe to
life-threatening. Some symptoms have their own mappings; for nausea, fatigue
and hand-foot syndrome a PRO-CTCAE grade 4 corresponds to CTCAE grade 3.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class CTCAEMapping:
    symptom_term: str
    proctcae_grade: int
    ctcae_term: str
    ctcae_grade: int
    clinical_description: str


# (term, CTCAE grade, description)
GENERAL_CTCAE_MAPPING: Dict[int, Tuple[str, int, str]] = {
    0: ("Absent", 0, "No adverse event present"),
    1: (
        "Mild", 1,
        "Mild adverse event; asymptomatic or mild symptoms; clinical or diagnostic "
        "observations only; intervention not indicated",
    ),
    2: (
        "Moderate", 2,
        "Moderate adverse event; minimal, local or noninvasive intervention indicated; "
        "limiting age-appropriate instrumental ADL",
    ),
    3: (
        "Severe", 3,
        "Severe adverse event; medically significant but not immediately "
        "life-threatening; hospitalization or prolongation of hospitalization "
        "indicated; disabling; limiting self-care ADL",
    ),
    4: ("Life-threatening", 4, "Life-threatening consequences or urgent intervention indicated"),
}

_LIFE_THREATENING = "Life-threatening consequences; urgent intervention indicated"

SYMPTOM_SPECIFIC_MAPPINGS: Dict[str, Dict[int, Tuple[str, int, str]]] = {
    "nausea": {
        0: ("Nausea - None", 0, "No nausea"),
        1: ("Nausea - Grade 1", 1, "Loss of appetite without alteration in eating habits"),
        2: (
            "Nausea - Grade 2", 2,
            "Oral intake decreased without significant weight loss, dehydration or malnutrition",
        ),
        3: (
            "Nausea - Grade 3", 3,
            "Inadequate oral caloric or fluid intake; tube feeding, TPN, or hospitalization indicated",
        ),
        4: (
            "Nausea - Grade 3", 3,
            "Severe nausea requiring hospitalization (PRO-CTCAE Grade 4 typically "
            "maps to CTCAE Grade 3 for nausea)",
        ),
    },
    "vomiting": {
        1: ("Vomiting - Grade 1", 1, "1-2 episodes in 24 hours"),
        2: ("Vomiting - Grade 2", 2, "3-5 episodes in 24 hours; medical intervention indicated"),
        3: (
            "Vomiting - Grade 3", 3,
            "≥6 episodes in 24 hours; tube feeding, TPN or hospitalization indicated",
        ),
        4: ("Vomiting - Grade 4", 4, _LIFE_THREATENING),
    },
    "diarrhea": {
        1: (
            "Diarrhea - Grade 1", 1,
            "Increase of <4 stools per day over baseline; mild increase in ostomy output",
        ),
        2: (
            "Diarrhea - Grade 2", 2,
            "Increase of 4-6 stools per day over baseline; moderate increase in ostomy output",
        ),
        3: (
            "Diarrhea - Grade 3", 3,
            "Increase of ≥7 stools per day over baseline; hospitalization indicated; "
            "severe increase in ostomy output; limiting self-care ADL",
        ),
        4: ("Diarrhea - Grade 4", 4, _LIFE_THREATENING),
    },
    "fatigue": {
        1: ("Fatigue - Grade 1", 1, "Fatigue relieved by rest"),
        2: ("Fatigue - Grade 2", 2, "Fatigue not relieved by rest; limiting instrumental ADL"),
        3: ("Fatigue - Grade 3", 3, "Fatigue not relieved by rest; limiting self-care ADL"),
        4: (
            "Fatigue - Grade 3", 3,
            "Severe fatigue (PRO-CTCAE Grade 4 typically maps to CTCAE Grade 3 for fatigue)",
        ),
    },
    "neuropathy": {
        1: (
            "Peripheral sensory neuropathy - Grade 1", 1,
            "Asymptomatic; loss of deep tendon reflexes or paresthesia",
        ),
        2: ("Peripheral sensory neuropathy - Grade 2", 2, "Moderate symptoms; limiting instrumental ADL"),
        3: ("Peripheral sensory neuropathy - Grade 3", 3, "Severe symptoms; limiting self-care ADL"),
        4: ("Peripheral sensory neuropathy - Grade 4", 4, _LIFE_THREATENING),
    },
    "hand_foot_syndrome": {
        1: (
            "Palmar-plantar erythrodysesthesia - Grade 1", 1,
            "Minimal skin changes or dermatitis without pain",
        ),
        2: (
            "Palmar-plantar erythrodysesthesia - Grade 2", 2,
            "Skin changes with pain; limiting instrumental ADL",
        ),
        3: (
            "Palmar-plantar erythrodysesthesia - Grade 3", 3,
            "Severe skin changes with pain; limiting self-care ADL",
        ),
        4: (
            "Palmar-plantar erythrodysesthesia - Grade 3", 3,
            "Very severe symptoms (PRO-CTCAE Grade 4 typically maps to CTCAE Grade 3 for HFS)",
        ),
    },
}

# Catalog symptom terms graded under a differently named CTCAE mapping
SYMPTOM_ALIASES = {
    "numbness_tingling": "neuropathy",
}

CLINICAL_ACTIONS = {
    0: "No action required. Continue routine monitoring.",
    1: "Routine monitoring. Consider supportive care if symptoms progress.",
    2: "Monitor closely. Consider prophylactic management or dose modification if persistent.",
    3: "Urgent intervention required. Consider treatment delay, dose reduction, or hospitalization.",
    4: "Emergency intervention required. Discontinue treatment and provide immediate medical care.",
}


def _mapping_key(symptom_term: str) -> str:
    return SYMPTOM_ALIASES.get(symptom_term, symptom_term)


def map_to_ctcae(symptom_term: str, proctcae_grade: int) -> CTCAEMapping:
    specific = SYMPTOM_SPECIFIC_MAPPINGS.get(_mapping_key(symptom_term), {})
    term, ctcae_grade, description = specific.get(
        proctcae_grade, GENERAL_CTCAE_MAPPING[proctcae_grade]
    )
    return CTCAEMapping(
        symptom_term=symptom_term,
        proctcae_grade=proctcae_grade,
        ctcae_term=term,
        ctcae_grade=ctcae_grade,
        clinical_description=description,
    )


def map_multiple_to_ctcae(symptoms: Iterable[Tuple[str, int]]) -> List[CTCAEMapping]:
    return [map_to_ctcae(term, grade) for term, grade in symptoms]


def has_specific_mapping(symptom_term: str) -> bool:
    return _mapping_key(symptom_term) in SYMPTOM_SPECIFIC_MAPPINGS


def get_symptoms_with_specific_mappings() -> List[str]:
    return list(SYMPTOM_SPECIFIC_MAPPINGS)


def get_clinical_action(ctcae_grade: int) -> str:
    return CLINICAL_ACTIONS.get(ctcae_grade, "Consult clinical guidelines for appropriate action.")
