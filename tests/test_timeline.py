"""Tests for the treatment timeline profiler."""

from dataclasses import replace
from datetime import date, datetime

import pytest

from toxicity_engine.core.errors import NotFoundError
from toxicity_engine.core.models import CyclePhase, PatientTreatment, TreatmentCycle
from toxicity_engine.profiler import (
    build_treatment_context,
    calculate_days_until_next_infusion,
    calculate_timeline,
    calculate_treatment_day,
    determine_cycle_phase,
    is_in_nadir_window,
)


def _expected_phase(day, cycle_length=21, nadir=(7, 12)):
    if cycle_length - 1 <= day <= cycle_length + 1:
        return CyclePhase.PRE_SESSION
    if 1 <= day <= 3:
        return CyclePhase.POST_SESSION
    if 4 <= day <= 6:
        return CyclePhase.RECOVERY
    if nadir[0] <= day <= nadir[1]:
        return CyclePhase.NADIR
    return CyclePhase.INTER_CYCLE


# ------------------------------------------------------------------
# Treatment day
# ------------------------------------------------------------------

class TestTreatmentDay:
    def test_infusion_day_is_day_one(self):
        assert calculate_treatment_day(date(2025, 1, 1), date(2025, 1, 1)) == 1

    def test_counts_whole_days(self):
        assert calculate_treatment_day(date(2025, 1, 1), date(2025, 1, 9)) == 9

    def test_partial_day_rounds_down(self):
        infusion = datetime(2025, 1, 1, 10, 0)
        assert calculate_treatment_day(infusion, datetime(2025, 1, 2, 9, 0)) == 1
        assert calculate_treatment_day(infusion, datetime(2025, 1, 2, 10, 0)) == 2


# ------------------------------------------------------------------
# Phase determination
# ------------------------------------------------------------------

class TestCyclePhase:
    @pytest.mark.parametrize("day,phase", [
        (1, CyclePhase.POST_SESSION),
        (2, CyclePhase.POST_SESSION),
        (5, CyclePhase.RECOVERY),
        (9, CyclePhase.NADIR),
        (12, CyclePhase.NADIR),
        (15, CyclePhase.INTER_CYCLE),
        (20, CyclePhase.PRE_SESSION),
        (22, CyclePhase.PRE_SESSION),
        (23, CyclePhase.INTER_CYCLE),
    ])
    def test_documented_days(self, ac_t, day, phase):
        assert determine_cycle_phase(day, ac_t) == phase

    def test_phase_precedence_over_range(self, ac_t):
        for day in range(1, 41):
            phase = determine_cycle_phase(day, ac_t)
            assert phase in CyclePhase
            assert phase == _expected_phase(day)
            # same inputs, same answer
            assert determine_cycle_phase(day, ac_t) == phase
            assert is_in_nadir_window(day, ac_t) == (7 <= day <= 12)

    def test_no_nadir_window_never_nadir(self, catalog):
        pembro = catalog.get_regimen("PEMBROLIZUMAB")
        for day in range(1, 30):
            assert not is_in_nadir_window(day, pembro)
            assert determine_cycle_phase(day, pembro) != CyclePhase.NADIR

    def test_nadir_flag_independent_of_phase(self, ac_t):
        # nadir window overlapping the pre-session window
        short = replace(ac_t, cycle_length_days=10)
        assert determine_cycle_phase(9, short) == CyclePhase.PRE_SESSION
        assert is_in_nadir_window(9, short) is True


# ------------------------------------------------------------------
# Next infusion
# ------------------------------------------------------------------

class TestDaysUntilNextInfusion:
    def test_rounds_up(self):
        assert calculate_days_until_next_infusion(
            datetime(2025, 1, 1, 12, 0), datetime(2025, 1, 3)
        ) == 2

    def test_negative_when_overdue(self):
        assert calculate_days_until_next_infusion(date(2025, 1, 5), date(2025, 1, 3)) == -2

    def test_timeline_without_planned_infusion(self, ac_t):
        cycle = TreatmentCycle("c1", "tx", 1, date(2025, 1, 1))
        timeline = calculate_timeline(ac_t, cycle, date(2025, 1, 9))
        assert timeline.treatment_day == 9
        assert timeline.days_until_next_infusion == 12
        assert timeline.days_since_last_infusion == 8
        assert timeline.phase == CyclePhase.NADIR


# ------------------------------------------------------------------
# Context building
# ------------------------------------------------------------------

class TestBuildTreatmentContext:
    @pytest.fixture
    def records(self):
        treatment = PatientTreatment("tx-1", "p-1", "AC-T", date(2024, 12, 11), 2)
        cycle = TreatmentCycle("c2", "tx-1", 2, date(2025, 1, 1), date(2025, 1, 22))
        return treatment, cycle

    def test_ac_t_day_nine(self, ac_t, records):
        treatment, cycle = records
        context = build_treatment_context(treatment, ac_t, cycle, date(2025, 1, 9))
        assert context.treatment_day == 9
        assert context.phase == CyclePhase.NADIR
        assert context.in_nadir_window is True
        assert context.current_cycle == 2
        assert context.absolute_treatment_day == 30
        assert context.days_until_next_infusion == 13
        assert context.patient_id == "p-1"

    def test_missing_treatment(self, ac_t, records):
        _, cycle = records
        with pytest.raises(NotFoundError) as exc_info:
            build_treatment_context(None, ac_t, cycle, date(2025, 1, 9))
        assert exc_info.value.resource == "Active treatment"

    def test_missing_regimen(self, records):
        treatment, cycle = records
        with pytest.raises(NotFoundError) as exc_info:
            build_treatment_context(treatment, None, cycle, date(2025, 1, 9))
        assert exc_info.value.identifier == "AC-T"

    def test_missing_cycle(self, ac_t, records):
        treatment, _ = records
        with pytest.raises(NotFoundError) as exc_info:
            build_treatment_context(treatment, ac_t, None, date(2025, 1, 9))
        assert exc_info.value.resource == "Current cycle"
