"""
PRO-CTCAE symptom item library.
Patient-reported outcome version of the Common Terminology Criteria for Adverse Events.
Source: https://healthcaredelivery.cancer.gov/pro-ctcae/
"""

from ...models import Attribute, ResponseOption, SymptomItem

FREQUENCY_OPTIONS = (
    ResponseOption(0, "Never"),
    ResponseOption(1, "Rarely"),
    ResponseOption(2, "Occasionally"),
    ResponseOption(3, "Frequently"),
    ResponseOption(4, "Almost constantly"),
)

SEVERITY_OPTIONS = (
    ResponseOption(0, "None"),
    ResponseOption(1, "Mild"),
    ResponseOption(2, "Moderate"),
    ResponseOption(3, "Severe"),
    ResponseOption(4, "Very severe"),
)

INTERFERENCE_OPTIONS = (
    ResponseOption(0, "Not at all"),
    ResponseOption(1, "A little bit"),
    ResponseOption(2, "Somewhat"),
    ResponseOption(3, "Quite a bit"),
    ResponseOption(4, "Very much"),
)

PRESENT_ABSENT_OPTIONS = (
    ResponseOption(0, "No"),
    ResponseOption(1, "Yes"),
)

AMOUNT_OPTIONS = (
    ResponseOption(0, "Not at all"),
    ResponseOption(1, "A little bit"),
    ResponseOption(2, "Somewhat"),
    ResponseOption(3, "Quite a bit"),
    ResponseOption(4, "Very much"),
)

_SCALES = {
    Attribute.FREQUENCY: ("FREQ", FREQUENCY_OPTIONS),
    Attribute.SEVERITY: ("SEV", SEVERITY_OPTIONS),
    Attribute.INTERFERENCE: ("INTERF", INTERFERENCE_OPTIONS),
    Attribute.PRESENT_ABSENT: ("PRESENT", PRESENT_ABSENT_OPTIONS),
    Attribute.AMOUNT: ("AMOUNT", AMOUNT_OPTIONS),
}


def _item(term: str, category: str, attribute: Attribute, text: str) -> SymptomItem:
    suffix, options = _SCALES[attribute]
    code = f"{term.upper()}_{suffix}"
    return SymptomItem(
        item_id=f"proctcae-{term.replace('_', '-')}-{suffix.lower()}",
        item_code=code,
        symptom_term=term,
        symptom_category=category,
        attribute=attribute,
        question_text=text,
        response_options=options,
    )


F, S, I, P, A = (
    Attribute.FREQUENCY,
    Attribute.SEVERITY,
    Attribute.INTERFERENCE,
    Attribute.PRESENT_ABSENT,
    Attribute.AMOUNT,
)

_LAST_7_DAYS = "In the last 7 days"

PROCTCAE_ITEMS = [
    # --- Gastrointestinal ---
    _item("nausea", "gastrointestinal", F, f"{_LAST_7_DAYS}, how OFTEN did you have NAUSEA?"),
    _item("nausea", "gastrointestinal", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your NAUSEA at its WORST?"),
    _item("vomiting", "gastrointestinal", F, f"{_LAST_7_DAYS}, how OFTEN did you have VOMITING?"),
    _item("vomiting", "gastrointestinal", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your VOMITING at its WORST?"),
    _item("diarrhea", "gastrointestinal", F, f"{_LAST_7_DAYS}, how OFTEN did you have LOOSE OR WATERY STOOLS (DIARRHEA)?"),
    _item("constipation", "gastrointestinal", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your CONSTIPATION at its WORST?"),

    # --- Constitutional ---
    _item("fatigue", "constitutional", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your FATIGUE, TIREDNESS, OR LACK OF ENERGY at its WORST?"),
    _item("fatigue", "constitutional", I, f"{_LAST_7_DAYS}, how much did FATIGUE, TIREDNESS, OR LACK OF ENERGY INTERFERE with your usual or daily activities?"),
    _item("decreased_appetite", "constitutional", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your DECREASED APPETITE at its WORST?"),
    _item("decreased_appetite", "constitutional", I, f"{_LAST_7_DAYS}, how much did DECREASED APPETITE INTERFERE with your usual or daily activities?"),

    # --- Oral ---
    _item("mouth_sores", "oral", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your MOUTH OR THROAT SORES at their WORST?"),
    _item("mouth_sores", "oral", I, f"{_LAST_7_DAYS}, how much did MOUTH OR THROAT SORES INTERFERE with your ability to eat?"),
    _item("taste_changes", "oral", S, f"{_LAST_7_DAYS}, what was the SEVERITY of PROBLEMS WITH TASTING FOOD OR DRINK at their WORST?"),

    # --- Dermatological ---
    _item("hair_loss", "dermatological", A, f"{_LAST_7_DAYS}, did you have any HAIR LOSS?"),
    _item("hand_foot_syndrome", "dermatological", S, f"{_LAST_7_DAYS}, what was the SEVERITY of HAND-FOOT SYNDROME (a rash of the hands or feet that can cause cracking, peeling, redness or pain) at its WORST?"),
    _item("rash", "dermatological", P, f"{_LAST_7_DAYS}, did you have any RASH?"),
    _item("skin_changes", "dermatological", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your DRY SKIN at its WORST?"),

    # --- Neurological ---
    _item("numbness_tingling", "neurological", S, f"{_LAST_7_DAYS}, what was the SEVERITY of NUMBNESS OR TINGLING IN YOUR HANDS OR FEET at its WORST?"),
    _item("numbness_tingling", "neurological", I, f"{_LAST_7_DAYS}, how much did NUMBNESS OR TINGLING IN YOUR HANDS OR FEET INTERFERE with your usual or daily activities?"),
    _item("dizziness", "neurological", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your DIZZINESS at its WORST?"),
    _item("dizziness", "neurological", I, f"{_LAST_7_DAYS}, how much did DIZZINESS INTERFERE with your usual or daily activities?"),

    # --- Pain ---
    _item("pain", "pain", F, f"{_LAST_7_DAYS}, how OFTEN did you have PAIN?"),
    _item("pain", "pain", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your PAIN at its WORST?"),
    _item("pain", "pain", I, f"{_LAST_7_DAYS}, how much did PAIN INTERFERE with your usual or daily activities?"),

    # --- Musculoskeletal ---
    _item("aching_joints", "musculoskeletal", F, f"{_LAST_7_DAYS}, how OFTEN did you have ACHING JOINTS (SUCH AS ELBOWS, KNEES, SHOULDERS)?"),
    _item("aching_joints", "musculoskeletal", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your ACHING JOINTS at their WORST?"),
    _item("aching_joints", "musculoskeletal", I, f"{_LAST_7_DAYS}, how much did ACHING JOINTS INTERFERE with your usual or daily activities?"),
    _item("aching_muscles", "musculoskeletal", F, f"{_LAST_7_DAYS}, how OFTEN did you have ACHING MUSCLES?"),
    _item("aching_muscles", "musculoskeletal", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your ACHING MUSCLES at their WORST?"),
    _item("aching_muscles", "musculoskeletal", I, f"{_LAST_7_DAYS}, how much did ACHING MUSCLES INTERFERE with your usual or daily activities?"),

    # --- Infection signs ---
    _item("fever", "infection_signs", F, f"{_LAST_7_DAYS}, how OFTEN did you have a FEVER (temperature of 100.4F / 38C or higher)?"),
    _item("fever", "infection_signs", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your FEVER at its WORST?"),
    _item("chills", "infection_signs", F, f"{_LAST_7_DAYS}, how OFTEN did you have SHAKING CHILLS?"),
    _item("chills", "infection_signs", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your SHAKING CHILLS at their WORST?"),
    _item("sore_throat", "infection_signs", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your SORE THROAT at its WORST?"),

    # --- Hematological ---
    _item("bruising", "hematological", P, f"{_LAST_7_DAYS}, did you BRUISE EASILY (BLACK AND BLUE MARKS)?"),
    _item("bleeding", "hematological", F, f"{_LAST_7_DAYS}, how OFTEN did you have NOSEBLEEDS OR BLEEDING GUMS?"),
    _item("bleeding", "hematological", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your BLEEDING at its WORST?"),

    # --- Pulmonary ---
    _item("shortness_of_breath", "pulmonary", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your SHORTNESS OF BREATH at its WORST?"),
    _item("shortness_of_breath", "pulmonary", I, f"{_LAST_7_DAYS}, how much did your SHORTNESS OF BREATH INTERFERE with your usual or daily activities?"),
    _item("cough", "pulmonary", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your COUGH at its WORST?"),
    _item("cough", "pulmonary", I, f"{_LAST_7_DAYS}, how much did COUGH INTERFERE with your usual or daily activities?"),

    # --- Cardiac ---
    _item("chest_pain", "cardiac", F, f"{_LAST_7_DAYS}, how OFTEN did you have CHEST PAIN?"),
    _item("chest_pain", "cardiac", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your CHEST PAIN at its WORST?"),
    _item("chest_pain", "cardiac", I, f"{_LAST_7_DAYS}, how much did CHEST PAIN INTERFERE with your usual or daily activities?"),
    _item("heart_palpitations", "cardiac", F, f"{_LAST_7_DAYS}, how OFTEN did you feel a POUNDING OR RACING HEARTBEAT (PALPITATIONS)?"),
    _item("heart_palpitations", "cardiac", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your POUNDING OR RACING HEARTBEAT at its WORST?"),
    _item("swelling", "cardiac", F, f"{_LAST_7_DAYS}, how OFTEN did you have SWELLING IN YOUR ARMS OR LEGS?"),
    _item("swelling", "cardiac", S, f"{_LAST_7_DAYS}, what was the SEVERITY of your SWELLING IN YOUR ARMS OR LEGS at its WORST?"),
    _item("swelling", "cardiac", I, f"{_LAST_7_DAYS}, how much did SWELLING IN YOUR ARMS OR LEGS INTERFERE with your usual or daily activities?"),
]
