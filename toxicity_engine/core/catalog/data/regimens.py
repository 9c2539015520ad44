"""
Chemotherapy regimen definitions.
Cycle lengths and nadir windows follow NCCN Breast Cancer guideline regimens;
toxicity profiles list symptom terms by expected incidence.
"""

from ...models import (
    CompositionStep,
    CyclePhase,
    DrugComponent,
    DrugModuleComposition,
    Regimen,
    ToxicityProfile,
)

_MYELO = {"myelosuppressive": True}

REGIMENS = [
    Regimen(
        regimen_code="AC-T",
        regimen_name="Doxorubicin + Cyclophosphamide followed by Paclitaxel",
        cycle_length_days=21,
        nadir_window_start=7,
        nadir_window_end=12,
        total_cycles=8,
        drug_components=(
            DrugComponent("Doxorubicin", "60 mg/m2", "IV"),
            DrugComponent("Cyclophosphamide", "600 mg/m2", "IV"),
            DrugComponent("Paclitaxel", "175 mg/m2", "IV"),
        ),
        drug_module_composition=DrugModuleComposition(
            steps=(
                CompositionStep("AC", (1, 2, 3, 4), ("Doxorubicin", "Cyclophosphamide")),
                CompositionStep("T", (5, 6, 7, 8), ("Paclitaxel",)),
            ),
            safety_profile={**_MYELO, "cardiotoxic": True},
        ),
        toxicity_profile=ToxicityProfile(
            high_risk=(
                "nausea", "vomiting", "fatigue", "hair_loss", "mouth_sores",
                "decreased_appetite", "diarrhea", "fever", "chills", "bruising",
                "bleeding", "numbness_tingling", "aching_joints",
                "aching_muscles", "shortness_of_breath",
            ),
            moderate=("constipation", "taste_changes", "heart_palpitations"),
            low=("rash", "swelling"),
            phase_priorities={
                CyclePhase.PRE_SESSION: ("fatigue", "numbness_tingling", "shortness_of_breath"),
                CyclePhase.POST_SESSION: ("nausea", "vomiting", "fatigue", "decreased_appetite"),
                CyclePhase.RECOVERY: (
                    "nausea", "fatigue", "mouth_sores", "diarrhea",
                    "aching_joints", "aching_muscles",
                ),
                CyclePhase.NADIR: ("fever", "chills", "bruising", "bleeding", "fatigue", "mouth_sores"),
                CyclePhase.INTER_CYCLE: ("fatigue", "numbness_tingling", "hair_loss"),
            },
        ),
    ),
    Regimen(
        regimen_code="TC",
        regimen_name="Docetaxel + Cyclophosphamide",
        cycle_length_days=21,
        nadir_window_start=7,
        nadir_window_end=10,
        total_cycles=4,
        drug_components=(
            DrugComponent("Docetaxel", "75 mg/m2", "IV"),
            DrugComponent("Cyclophosphamide", "600 mg/m2", "IV"),
        ),
        drug_module_composition=DrugModuleComposition(
            steps=(CompositionStep(None, "all", ("Docetaxel", "Cyclophosphamide")),),
            safety_profile=_MYELO,
        ),
        toxicity_profile=ToxicityProfile(
            high_risk=(
                "fatigue", "nausea", "hair_loss", "swelling", "numbness_tingling",
                "fever", "chills", "mouth_sores", "diarrhea",
            ),
            moderate=("vomiting", "skin_changes", "aching_muscles"),
            phase_priorities={
                CyclePhase.PRE_SESSION: ("fatigue", "swelling", "numbness_tingling"),
                CyclePhase.POST_SESSION: ("nausea", "fatigue"),
                CyclePhase.RECOVERY: ("fatigue", "mouth_sores", "diarrhea"),
                CyclePhase.NADIR: ("fever", "chills", "fatigue"),
                CyclePhase.INTER_CYCLE: ("swelling", "numbness_tingling", "hair_loss"),
            },
        ),
    ),
    Regimen(
        regimen_code="T-DM1",
        regimen_name="Trastuzumab emtansine",
        cycle_length_days=21,
        nadir_window_start=7,
        nadir_window_end=14,
        total_cycles=14,
        drug_components=(DrugComponent("Trastuzumab emtansine", "3.6 mg/kg", "IV"),),
        drug_module_composition=DrugModuleComposition(
            steps=(CompositionStep(None, "all", ("Trastuzumab emtansine",)),),
            safety_profile={"cardiotoxic": True, "hepatotoxic": True},
        ),
        toxicity_profile=ToxicityProfile(
            high_risk=("fatigue", "nausea", "pain", "aching_muscles", "bleeding", "bruising"),
            moderate=("shortness_of_breath", "swelling"),
            phase_priorities={
                CyclePhase.PRE_SESSION: ("fatigue", "shortness_of_breath"),
                CyclePhase.POST_SESSION: ("nausea", "fatigue", "pain"),
                CyclePhase.RECOVERY: ("fatigue", "aching_muscles", "pain"),
                CyclePhase.NADIR: ("bleeding", "bruising", "fatigue"),
                CyclePhase.INTER_CYCLE: ("fatigue", "pain"),
            },
        ),
    ),
    Regimen(
        regimen_code="CAPECITABINE",
        regimen_name="Capecitabine monotherapy",
        cycle_length_days=21,
        nadir_window_start=10,
        nadir_window_end=14,
        total_cycles=8,
        drug_components=(DrugComponent("Capecitabine", "1250 mg/m2 BID", "PO"),),
        drug_module_composition=DrugModuleComposition(
            steps=(CompositionStep(None, "all", ("Capecitabine",)),),
            safety_profile=_MYELO,
        ),
        # No phase priorities: phase filtering uses the universal category table
        toxicity_profile=ToxicityProfile(
            high_risk=(
                "hand_foot_syndrome", "diarrhea", "nausea", "fatigue",
                "mouth_sores", "decreased_appetite", "fever",
            ),
            moderate=("vomiting", "pain"),
        ),
    ),
    Regimen(
        regimen_code="PEMBROLIZUMAB",
        regimen_name="Pembrolizumab",
        cycle_length_days=21,
        nadir_window_start=None,
        nadir_window_end=None,
        total_cycles=17,
        drug_components=(DrugComponent("Pembrolizumab", "200 mg", "IV"),),
        toxicity_profile=ToxicityProfile(
            high_risk=("fatigue", "rash", "diarrhea", "cough", "aching_joints", "shortness_of_breath"),
            moderate=("decreased_appetite", "nausea"),
            phase_priorities={
                CyclePhase.PRE_SESSION: ("fatigue", "rash", "cough", "shortness_of_breath"),
                CyclePhase.POST_SESSION: ("fatigue", "diarrhea"),
                CyclePhase.RECOVERY: ("fatigue", "diarrhea", "rash"),
                CyclePhase.INTER_CYCLE: ("fatigue", "rash", "diarrhea", "cough", "aching_joints"),
            },
        ),
    ),
]
