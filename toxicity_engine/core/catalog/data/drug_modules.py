"""
Drug modules: per-drug symptom contributions and safety-monitoring proxies.
Symptom profiles follow the prescribing information adverse-reaction tables;
safety proxies flag early-warning symptoms for serious underlying toxicity.
"""

from ...models import CyclePhase, DrugModule, SafetyProxyItem

_POST = frozenset({CyclePhase.POST_SESSION, CyclePhase.RECOVERY})
_LATE = frozenset({CyclePhase.RECOVERY, CyclePhase.NADIR, CyclePhase.INTER_CYCLE})

_MYELOSUPPRESSION = SafetyProxyItem(
    type="myelosuppression",
    symptoms=("fever", "chills", "sore_throat", "bruising", "bleeding"),
    rationale=(
        "Neutropenia and thrombocytopenia are silent; fever, chills and "
        "unusual bleeding are the earliest patient-reportable signs."
    ),
)

DRUG_MODULES = [
    DrugModule(
        drug_name="Doxorubicin",
        drug_class="anthracycline",
        alternative_names=("Adriamycin",),
        symptom_terms=(
            "nausea", "vomiting", "fatigue", "hair_loss", "mouth_sores",
            "decreased_appetite",
        ),
        safety_proxy_items=(
            _MYELOSUPPRESSION,
            SafetyProxyItem(
                type="cardiotoxicity",
                symptoms=("shortness_of_breath", "heart_palpitations", "swelling"),
                rationale=(
                    "Cumulative anthracycline dose causes cardiomyopathy; "
                    "dyspnea, palpitations and edema precede overt heart failure."
                ),
            ),
        ),
        phase_filtering_rules={
            "nausea": _POST,
            "vomiting": _POST,
        },
        is_myelosuppressive=True,
        clinical_notes="Lifetime cumulative dose limit 450-550 mg/m2.",
    ),
    DrugModule(
        drug_name="Cyclophosphamide",
        drug_class="alkylating_agent",
        alternative_names=("Cytoxan",),
        symptom_terms=("nausea", "vomiting", "fatigue", "hair_loss", "decreased_appetite"),
        safety_proxy_items=(_MYELOSUPPRESSION,),
        phase_filtering_rules={
            "nausea": _POST,
            "vomiting": _POST,
        },
        is_myelosuppressive=True,
    ),
    DrugModule(
        drug_name="Paclitaxel",
        drug_class="taxane",
        alternative_names=("Taxol",),
        symptom_terms=(
            "numbness_tingling", "aching_joints", "aching_muscles", "fatigue",
            "hair_loss", "diarrhea",
        ),
        safety_proxy_items=(_MYELOSUPPRESSION,),
        phase_filtering_rules={
            "aching_joints": frozenset({CyclePhase.RECOVERY, CyclePhase.NADIR}),
            "aching_muscles": frozenset({CyclePhase.RECOVERY, CyclePhase.NADIR}),
        },
        is_myelosuppressive=True,
        clinical_notes="Peripheral neuropathy is cumulative and dose-limiting.",
    ),
    DrugModule(
        drug_name="Docetaxel",
        drug_class="taxane",
        alternative_names=("Taxotere",),
        symptom_terms=(
            "numbness_tingling", "fatigue", "hair_loss", "swelling",
            "mouth_sores", "diarrhea", "skin_changes",
        ),
        safety_proxy_items=(_MYELOSUPPRESSION,),
        phase_filtering_rules={
            "swelling": _LATE,
        },
        is_myelosuppressive=True,
        clinical_notes="Fluid retention is cumulative; dexamethasone premedication.",
    ),
    DrugModule(
        drug_name="Trastuzumab emtansine",
        drug_class="antibody_drug_conjugate",
        alternative_names=("T-DM1", "Kadcyla"),
        symptom_terms=("fatigue", "nausea", "pain", "aching_muscles", "bleeding"),
        safety_proxy_items=(
            SafetyProxyItem(
                type="thrombocytopenia",
                symptoms=("bruising", "bleeding"),
                rationale="Platelet nadir around day 8; bleeding risk.",
            ),
            SafetyProxyItem(
                type="cardiotoxicity",
                symptoms=("shortness_of_breath", "swelling"),
                rationale="HER2-directed therapy can reduce LVEF.",
            ),
        ),
        phase_filtering_rules={
            "nausea": _POST,
        },
        is_myelosuppressive=False,
    ),
    DrugModule(
        drug_name="Capecitabine",
        drug_class="antimetabolite",
        alternative_names=("Xeloda",),
        symptom_terms=(
            "hand_foot_syndrome", "diarrhea", "nausea", "fatigue",
            "mouth_sores", "decreased_appetite",
        ),
        safety_proxy_items=(_MYELOSUPPRESSION,),
        is_myelosuppressive=True,
        clinical_notes="Oral daily dosing days 1-14; hand-foot syndrome is dose-limiting.",
    ),
    DrugModule(
        drug_name="Pembrolizumab",
        drug_class="immune_checkpoint_inhibitor",
        alternative_names=("Keytruda",),
        symptom_terms=("fatigue", "rash", "diarrhea", "cough", "aching_joints"),
        safety_proxy_items=(
            SafetyProxyItem(
                type="immune_related_pneumonitis",
                symptoms=("shortness_of_breath", "cough"),
                rationale="Immune-related pneumonitis can progress rapidly.",
            ),
            SafetyProxyItem(
                type="immune_related_colitis",
                symptoms=("diarrhea", "pain"),
                rationale="Colitis presents as diarrhea with abdominal pain.",
            ),
        ),
        is_myelosuppressive=False,
    ),
]
