"""Tests for the heuristic thermodynamic calculator."""

import pytest

from rnaiforge.core.thermodynamics import (
    PROFILE_SALTS,
    PROFILE_TEMPERATURES,
    ThermodynamicCalculator,
    calculate_seed_stability,
    free_energy_profile,
    melting_temperature,
)
from rnaiforge.models.thermodynamics import AnalysisConditions


@pytest.mark.unit
class TestClosedForms:
    """Closed-form helpers."""

    def test_melting_temperature(self):
        """Tm = 64.9 + 41*GC - 675/len."""
        assert melting_temperature("") == 0.0
        assert melting_temperature("GC" * 10 + "G") == pytest.approx(64.9 + 41 - 675 / 21)
        assert melting_temperature("AU" * 10 + "A") == pytest.approx(64.9 - 675 / 21)

    def test_seed_stability(self):
        assert calculate_seed_stability("AGGGGGGGA") == pytest.approx(5.0)
        assert calculate_seed_stability("AAAAAAAAA") == pytest.approx(1.0)
        assert calculate_seed_stability("GCGC") == 0.0

    def test_free_energy_profile_shape(self):
        guide = "AACACGUCGGAUAACGGACUA"
        profile = free_energy_profile(guide)
        assert len(profile) == len(guide)
        assert all(-5.0 <= value <= -2.0 for value in profile)
        assert free_energy_profile(guide) == profile


@pytest.mark.unit
class TestThermodynamicProperties:
    """Guide/passenger property summaries."""

    def test_symmetric_duplex(self):
        props = ThermodynamicCalculator().calculate_properties("GGGGCCCCGGGGCCCCGGGGC", "CCCCGGGGCCCCGGGGCCCCG")
        assert props.guide_stability == pytest.approx(7.0)
        assert props.passenger_stability == pytest.approx(7.0)
        assert props.asymmetry_score == 0.0
        assert props.internal_stability == pytest.approx(7.0)

    def test_missing_passenger_uses_neutral_gc(self):
        """Antagomirs have no passenger; a 50% GC stand-in is used."""
        props = ThermodynamicCalculator().calculate_properties("A" * 21, None)
        assert props.passenger_stability == pytest.approx(4.5)
        assert props.guide_stability == pytest.approx(2.0)
        assert props.asymmetry_score == pytest.approx(2.5 / 4.5)

    def test_asymmetry_is_non_negative_and_bounded(self):
        props = ThermodynamicCalculator().calculate_properties("GCGCGCGCGCGCGCGCGCGCG", "AUAUAUAUAUAUAUAUAUAUA")
        assert 0.0 <= props.asymmetry_score < 1.0


@pytest.mark.unit
class TestDuplexAnalysis:
    """Full duplex analysis with profiles."""

    def test_profiles_cover_fixed_grids(self):
        guide = "AACACGUCGGAUAACGGACUA"
        analysis = ThermodynamicCalculator().analyze_duplex(guide, "UUGUGCAGCCUAUUGCCUGAU", design_id=3)
        assert analysis.design_id == 3
        assert analysis.temperature_profile.temperatures == PROFILE_TEMPERATURES
        assert len(analysis.temperature_profile.duplex_stability) == len(PROFILE_TEMPERATURES)
        assert analysis.salt_dependency.salt_concentrations == PROFILE_SALTS
        assert len(set(analysis.salt_dependency.stability_changes)) == 1

    def test_loading_probabilities_sum_to_one(self):
        analysis = ThermodynamicCalculator().analyze_duplex("GCGCGCGCGCGCGCGCGCGCG", "AUAUAUAUAUAUAUAUAUAUA")
        loading = analysis.stability_analysis.risc_loading_prediction
        assert loading.guide_loading_probability + loading.passenger_loading_probability == pytest.approx(1.0)

    def test_single_strand_reuses_guide_metrics(self):
        analysis = ThermodynamicCalculator().analyze_duplex("AACACGUCGGAUAACGGACUAGU", None)
        stability = analysis.stability_analysis
        assert stability.passenger_strand_stability == stability.guide_strand_stability
        assert stability.risc_loading_prediction.guide_loading_probability == 1.0

    def test_conditions_change_free_energy(self):
        calculator = ThermodynamicCalculator()
        cold = calculator.analyze_duplex("AACACGUCGGAUAACGGACUA", None, AnalysisConditions(temperature=4.0))
        warm = calculator.analyze_duplex("AACACGUCGGAUAACGGACUA", None, AnalysisConditions(temperature=37.0))
        cold_dg = cold.stability_analysis.guide_strand_stability.gibbs_free_energy
        warm_dg = warm.stability_analysis.guide_strand_stability.gibbs_free_energy
        assert cold_dg != warm_dg
