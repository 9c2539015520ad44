"""Tests for the nadir analyzer."""

from datetime import date

import pytest

from toxicity_engine.profiler import (
    InfectionRisk,
    NadirSeverity,
    analyze_nadir_status,
    calculate_nadir_dates,
    generate_nadir_guidance,
    get_infection_risk_level,
    get_nadir_priority_symptoms,
    should_show_nadir_warnings,
)


class TestNadirStatus:
    @pytest.mark.parametrize("day,severity", [
        (7, NadirSeverity.EARLY),
        (8, NadirSeverity.EARLY),
        (9, NadirSeverity.PEAK),
        (10, NadirSeverity.PEAK),
        (11, NadirSeverity.LATE),
        (12, NadirSeverity.LATE),
    ])
    def test_window_thirds(self, ac_t, day, severity):
        analysis = analyze_nadir_status(day, ac_t)
        assert analysis.is_in_nadir_window
        assert analysis.nadir_severity == severity

    def test_position_fields(self, ac_t):
        analysis = analyze_nadir_status(9, ac_t)
        assert analysis.nadir_day == 9
        assert analysis.days_into_nadir == 2
        assert analysis.days_until_nadir_end == 3

    def test_outside_window(self, ac_t):
        analysis = analyze_nadir_status(15, ac_t)
        assert not analysis.is_in_nadir_window
        assert analysis.nadir_severity == NadirSeverity.NONE
        assert analysis.nadir_day is None


class TestNadirGuidance:
    def test_peak_is_very_high_risk(self, ac_t):
        analysis = analyze_nadir_status(9, ac_t)
        assert get_infection_risk_level(analysis) == InfectionRisk.VERY_HIGH
        assert generate_nadir_guidance(analysis).startswith("PEAK NADIR PERIOD")

    def test_late_is_high_risk(self, ac_t):
        assert get_infection_risk_level(analyze_nadir_status(12, ac_t)) == InfectionRisk.HIGH

    def test_no_guidance_outside_window(self, ac_t):
        analysis = analyze_nadir_status(2, ac_t)
        assert get_infection_risk_level(analysis) == InfectionRisk.LOW
        assert generate_nadir_guidance(analysis) == ""

    def test_warnings_early_and_peak_only(self, ac_t):
        assert should_show_nadir_warnings(analyze_nadir_status(7, ac_t))
        assert should_show_nadir_warnings(analyze_nadir_status(9, ac_t))
        assert not should_show_nadir_warnings(analyze_nadir_status(11, ac_t))
        assert not should_show_nadir_warnings(analyze_nadir_status(15, ac_t))

    def test_priority_symptoms(self, ac_t):
        symptoms = get_nadir_priority_symptoms(analyze_nadir_status(9, ac_t))
        assert "fever" in symptoms
        assert "chills" in symptoms
        assert get_nadir_priority_symptoms(analyze_nadir_status(15, ac_t)) == []


class TestNadirDates:
    def test_dates_for_cycle(self, ac_t):
        assert calculate_nadir_dates(date(2025, 1, 1), ac_t) == (
            date(2025, 1, 7),
            date(2025, 1, 12),
        )

    def test_no_window(self, catalog):
        assert calculate_nadir_dates(date(2025, 1, 1), catalog.get_regimen("PEMBROLIZUMAB")) is None
