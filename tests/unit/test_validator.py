"""Tests for guide validation and design assessment."""

import pytest

from rnaiforge.core.validator import DesignValidator, assess_design, build_specificity_analysis
from rnaiforge.errors import InvalidArgumentError
from rnaiforge.models.rnai import ConstructType, ValidationMethod, ValidationStatus


@pytest.mark.unit
class TestDesignValidator:
    """Validation of user supplied guides."""

    def test_poly_a_guide_does_not_crash(self, rng, sample_target):
        """A homopolymer guide is scored, not rejected."""
        result = DesignValidator(rng).validate("A" * 21, sample_target.sequence, ConstructType.SIRNA)
        assert result.is_valid
        assert 0.0 <= result.specificity_analysis.specificity_score <= 1.0
        assert result.specificity_analysis.design_id == 0

    def test_verbatim_guide(self, rng, sample_target):
        guide = sample_target.sequence[10:31]
        result = DesignValidator(rng).validate(guide, sample_target.sequence)
        assert result.is_valid
        assert result.issues == []
        assert result.specificity_analysis.specificity_score == 1.0
        assert result.specificity_analysis.seed_region_score == pytest.approx(0.6 + 0.4 * 6 / 7)

    def test_invalid_guide_alphabet_reported(self, rng, sample_target):
        result = DesignValidator(rng).validate("GCAUXGCAUGCAUGCAUGCAU", sample_target.sequence)
        assert not result.is_valid
        assert any("Invalid guide sequence" in issue for issue in result.issues)

    def test_invalid_target_alphabet_reported(self, rng):
        result = DesignValidator(rng).validate("GCAUGCAUGCAUGCAUGCAUG", "GCAUGCAUGCAUNNNNGCAUGCAUGCAU")
        assert any("Invalid target sequence" in issue for issue in result.issues)

    @pytest.mark.parametrize(
        "construct_type,length,typical",
        [
            (ConstructType.SIRNA, 21, True),
            (ConstructType.SIRNA, 20, False),
            (ConstructType.SHRNA, 19, True),
            (ConstructType.SHRNA, 23, False),
            (ConstructType.MIRNA_MIMIC, 22, True),
            (ConstructType.ANTAGOMIR, 18, True),
            (ConstructType.ANTAGOMIR, 21, False),
        ],
    )
    def test_length_issue(self, rng, sample_target, construct_type, length, typical):
        guide = (sample_target.sequence * 2)[:length]
        result = DesignValidator(rng).validate(guide, sample_target.sequence, construct_type)
        message = f"Guide sequence length {length} not typical for {construct_type.value}"
        assert (message in result.issues) is not typical

    def test_empty_guide_is_reported_not_raised(self, rng, sample_target):
        result = DesignValidator(rng).validate("", sample_target.sequence)
        assert not result.is_valid
        assert len(result.issues) == 2
        assert result.specificity_analysis.specificity_score == 0.0

    def test_oversize_guide_is_reported_not_raised(self, rng):
        """A guide beyond the construct length limit is still scored."""
        guide = "GCAUGCAUCG" * 11
        result = DesignValidator(rng).validate(guide, "GCAUGCAUCG" * 20)
        assert not result.is_valid
        assert "Guide sequence length 110 exceeds the maximum of 100" in result.issues
        assert result.specificity_analysis.specificity_score == 1.0

    def test_low_specificity_recommendation(self, rng):
        result = DesignValidator(rng).validate("GCGCGCGCGCGCGCGCGCGCG", "A" * 40)
        assert result.specificity_analysis.specificity_score == 0.0
        assert any("Consider redesigning" in r for r in result.recommendations)

    def test_confidence_interval_brackets_efficacy(self, rng, sample_target):
        analysis = DesignValidator(rng).validate("A" * 21, sample_target.sequence).specificity_analysis
        ci = analysis.confidence_interval
        assert ci.lower <= analysis.overall_efficacy_prediction <= ci.upper
        assert ci.lower == pytest.approx(max(0.0, analysis.overall_efficacy_prediction - 0.15))

    def test_unknown_construct_type(self, rng, sample_target):
        with pytest.raises(InvalidArgumentError):
            DesignValidator(rng).validate("A" * 21, sample_target.sequence, "ribozyme")


@pytest.mark.unit
class TestSpecificityAnalysis:
    """Recomputed analyses of scored designs."""

    def test_analysis_for_scored_design(self, scored_design, sample_target):
        analysis = build_specificity_analysis(scored_design, sample_target.sequence, design_id=7)
        assert analysis.design_id == 7
        assert analysis.specificity_score == scored_design.specificity_score
        assert analysis.thermodynamic_score == scored_design.thermodynamic_properties.asymmetry_score
        assert analysis.overall_efficacy_prediction == scored_design.efficacy_prediction


@pytest.mark.unit
class TestAssessDesign:
    """Pass/warning/fail thresholds per validation method."""

    @pytest.mark.parametrize(
        "specificity,status",
        [(0.75, ValidationStatus.PASSED), (0.6, ValidationStatus.WARNING), (0.3, ValidationStatus.FAILED)],
    )
    def test_specificity_thresholds(self, make_design, specificity, status):
        assessment = assess_design(make_design(4, specificity=specificity), ValidationMethod.SPECIFICITY)
        assert assessment.validation_status is status
        assert assessment.validation_score == specificity
        assert assessment.design_id == 4

    @pytest.mark.parametrize(
        "efficacy,status",
        [(0.65, ValidationStatus.PASSED), (0.5, ValidationStatus.WARNING), (0.2, ValidationStatus.FAILED)],
    )
    def test_efficacy_thresholds(self, make_design, efficacy, status):
        assessment = assess_design(make_design(efficacy=efficacy), "efficacy_validation")
        assert assessment.validation_status is status

    def test_thermodynamic_uses_asymmetry(self, make_design):
        assessment = assess_design(make_design(asymmetry=0.6), ValidationMethod.THERMODYNAMIC)
        assert assessment.validation_score == 0.6
        assert assessment.validation_status is ValidationStatus.WARNING
        assert "thermodynamic_analysis" in assessment.validation_details

    def test_unscored_design_gets_id_zero(self, scored_design):
        assert assess_design(scored_design, ValidationMethod.SPECIFICITY).design_id == 0

    def test_unknown_method(self, make_design):
        with pytest.raises(InvalidArgumentError):
            assess_design(make_design(), "wet_lab_validation")
