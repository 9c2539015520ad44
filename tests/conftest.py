"""Test configuration and fixtures"""

from datetime import datetime, timedelta

import pytest

from toxicity_engine.core.catalog import ReferenceCatalog
from toxicity_engine.core.models import (
    Attribute,
    PatientTreatment,
    SymptomItem,
    TreatmentCycle,
)
from toxicity_engine.profiler import build_treatment_context

CYCLE_START = datetime(2025, 1, 6, 9, 0)


@pytest.fixture(scope="session")
def catalog():
    """Catalog loaded from the bundled reference data"""
    c = ReferenceCatalog()
    c.initialize()
    return c


@pytest.fixture
def ac_t(catalog):
    return catalog.get_regimen("AC-T")


@pytest.fixture
def make_context(catalog):
    """
    Build a TreatmentContext for a regimen on a given treatment day.

    The treatment started one full cycle before the current cycle's infusion.
    """
    def _make(regimen_code="AC-T", treatment_day=9, cycle_number=1, regimen=None):
        if regimen is None:
            regimen = catalog.get_regimen(regimen_code)
        infusion = CYCLE_START
        treatment = PatientTreatment(
            treatment_id="tx-test",
            patient_id="patient-test",
            regimen_code=regimen.regimen_code,
            start_date=infusion - timedelta(days=regimen.cycle_length_days * (cycle_number - 1)),
            current_cycle=cycle_number,
        )
        cycle = TreatmentCycle(
            cycle_id=f"cycle-{cycle_number}",
            treatment_id=treatment.treatment_id,
            cycle_number=cycle_number,
            infusion_date=infusion,
            planned_next_infusion=infusion + timedelta(days=regimen.cycle_length_days),
        )
        current = infusion + timedelta(days=treatment_day - 1)
        return build_treatment_context(treatment, regimen, cycle, current)

    return _make


@pytest.fixture
def make_item():
    """Minimal catalog item for a symptom/attribute pair"""
    def _make(term, attribute, category="test"):
        suffix = {
            Attribute.FREQUENCY: "FREQ",
            Attribute.SEVERITY: "SEV",
            Attribute.INTERFERENCE: "INTERF",
            Attribute.PRESENT_ABSENT: "PRESENT",
            Attribute.AMOUNT: "AMOUNT",
        }[attribute]
        return SymptomItem(
            item_id=f"{term}-{suffix.lower()}",
            item_code=f"{term.upper()}_{suffix}",
            symptom_term=term,
            symptom_category=category,
            attribute=attribute,
            question_text=f"{term} {attribute.value}?",
        )

    return _make
