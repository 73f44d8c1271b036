"""Tests for target validation and accessibility analysis."""

import pytest

from rnaiforge.core.target_analysis import (
    MAX_RECOMMENDED_SITES,
    TargetAnalyzer,
    complexity_score,
    find_repeats,
    region_score,
)
from rnaiforge.errors import InvalidArgumentError
from rnaiforge.models.rnai import TargetType


@pytest.mark.unit
class TestSequenceMetrics:
    """Complexity, repeats and region scoring."""

    def test_complexity(self):
        assert complexity_score("A") == 0.0
        assert complexity_score("AAAAAA") == 0.0
        assert complexity_score("ACGU") == pytest.approx(1 - 1 / 3)

    def test_tandem_repeat_found(self):
        repeats = find_repeats("ATCGATCG")
        assert repeats[0].start == 0
        assert repeats[0].end == 4
        assert repeats[0].repeat_family == "simple_repeat"

    def test_shortest_recurring_pattern_reported(self):
        """An 8-nt tandem repeat is caught by its 5-nt prefix first."""
        repeats = find_repeats("GACUCAGUGACUCAGU")
        assert (repeats[0].start, repeats[0].end) == (0, 5)
        assert repeats[0].repeat_family == "simple_repeat"

    def test_short_sequence_has_no_repeats(self):
        assert find_repeats("ACGU") == []

    def test_region_score(self):
        sequence = "GACUCAGUACGU"
        assert region_score(sequence, 0, 11) == 1.0
        assert region_score(sequence, -1, 5) == 0.0
        assert region_score(sequence, 0, 12) == 0.0
        assert region_score("GCAUGCAUGCAU", 0, 11) == 0.5


@pytest.mark.unit
class TestSecondaryStructure:
    """Greedy hairpin pairing."""

    def test_simple_hairpin(self, rng):
        structure = TargetAnalyzer(rng).predict_secondary_structure("GGGAAAUCCC")
        assert structure.dot_bracket_notation == "(((....)))"
        assert structure.centroid_structure == structure.dot_bracket_notation
        assert structure.minimum_free_energy < 0
        assert 0.3 <= structure.ensemble_diversity <= 0.8

    def test_unpaired_sequence(self, rng):
        structure = TargetAnalyzer(rng).predict_secondary_structure("AAAAAAAA")
        assert structure.dot_bracket_notation == "........"
        assert structure.minimum_free_energy == 0.0

    def test_accessible_regions(self, rng):
        analyzer = TargetAnalyzer(rng)
        structure = analyzer.predict_secondary_structure("GGGAAAUCCC")
        accessibility = analyzer.analyze_accessibility("GGGAAAUCCC", structure)

        assert len(accessibility.accessible_regions) == 1
        region = accessibility.accessible_regions[0]
        assert (region.start, region.end, region.local_structure) == (3, 6, "....")
        assert accessibility.average_accessibility == pytest.approx((4 + 6 * 0.2) / 10)


@pytest.mark.unit
class TestTargetValidation:
    """Problems are collected, not raised."""

    def test_sample_target_as_custom(self, rng, sample_target):
        result = TargetAnalyzer(rng).validate(sample_target.sequence, TargetType.CUSTOM)
        assert result.is_valid
        assert result.sequence_analysis.length == 120
        assert len(result.accessibility_analysis.recommended_target_sites) <= MAX_RECOMMENDED_SITES

    def test_mrna_minimum_length(self, rng, sample_target):
        result = TargetAnalyzer(rng).validate(sample_target.sequence, "mRNA")
        assert not result.is_valid
        assert "Sequence too short for mRNA (minimum 200 nucleotides)" in result.validation_errors

    def test_homopolymer(self, rng):
        result = TargetAnalyzer(rng).validate("A" * 250)
        errors = " ".join(result.validation_errors)
        assert "Extreme GC content" in errors
        assert "low complexity" in errors

    def test_invalid_alphabet(self, rng):
        result = TargetAnalyzer(rng).validate("ACGTN" * 50)
        assert any("invalid nucleotides" in e for e in result.validation_errors)

    def test_empty(self, rng):
        result = TargetAnalyzer(rng).validate("", TargetType.MIRNA)
        assert "Sequence cannot be empty" in result.validation_errors
        assert result.sequence_analysis.length == 0

    def test_unknown_target_type(self, rng):
        with pytest.raises(InvalidArgumentError):
            TargetAnalyzer(rng).validate("ACGU" * 10, "circRNA")
