"""Tests for design benchmarking."""

import pytest

from rnaiforge.core.benchmark import (
    SIMULATED_CYTOTOXICITY_SCORE,
    SIMULATED_IMMUNE_POTENTIAL,
    BenchmarkEngine,
    individual_scores,
)
from rnaiforge.errors import InvalidArgumentError
from rnaiforge.models.benchmark import BenchmarkAxis


@pytest.fixture
def three_designs(make_design):
    return [
        make_design(1, specificity=0.9),
        make_design(2, specificity=0.5),
        make_design(3, specificity=0.7),
    ]


@pytest.mark.unit
class TestIndividualScores:
    """Per-axis component scores."""

    def test_efficiency(self, make_design):
        scores = individual_scores(make_design(efficacy=0.6, asymmetry=0.2), BenchmarkAxis.EFFICIENCY)
        assert scores == {"predicted_efficiency": 0.6, "thermodynamic_score": 0.2}

    def test_specificity(self, make_design):
        scores = individual_scores(make_design(specificity=0.8, off_targets=10), BenchmarkAxis.SPECIFICITY)
        assert scores["specificity_score"] == 0.8
        assert scores["off_target_burden"] == pytest.approx(0.9)

    def test_safety(self, make_design):
        scores = individual_scores(make_design(specificity=0.8), BenchmarkAxis.SAFETY)
        assert scores["immune_potential"] == SIMULATED_IMMUNE_POTENTIAL
        assert scores["cytotoxicity_score"] == SIMULATED_CYTOTOXICITY_SCORE


@pytest.mark.unit
class TestBenchmarkEngine:
    """Ranking and aggregate metrics."""

    def test_specificity_ranking(self, rng, three_designs):
        """Three designs rank by specificity: 0.9, then 0.7, then 0.5."""
        result = BenchmarkEngine(rng).benchmark(three_designs, BenchmarkAxis.SPECIFICITY)

        assert [r.design_id for r in result.design_rankings] == [1, 3, 2]
        assert [r.rank for r in result.design_rankings] == [1, 2, 3]
        assert result.benchmark_type is BenchmarkAxis.SPECIFICITY

    def test_ranks_are_a_permutation(self, rng, three_designs):
        for axis in BenchmarkAxis:
            result = BenchmarkEngine(rng).benchmark(three_designs, axis)
            assert sorted(r.rank for r in result.design_rankings) == [1, 2, 3]
            scores = [r.overall_score for r in result.design_rankings]
            assert scores == sorted(scores, reverse=True)

    def test_metrics(self, rng, three_designs):
        result = BenchmarkEngine(rng).benchmark(three_designs, "specificity")
        metrics = result.benchmark_metrics
        scores = [(0.9 + 0.98) / 2, (0.7 + 0.98) / 2, (0.5 + 0.98) / 2]
        mean = sum(scores) / 3

        assert metrics.total_designs_tested == 3
        assert metrics.top_performer_score == pytest.approx(scores[0])
        assert metrics.average_score == pytest.approx(mean)
        assert metrics.score_variance == pytest.approx(sum((s - mean) ** 2 for s in scores) / 3)
        assert metrics.success_rate_threshold == 0.7

    def test_ties_keep_input_order(self, rng, make_design):
        designs = [make_design(5, specificity=0.8), make_design(4, specificity=0.8)]
        result = BenchmarkEngine(rng).benchmark(designs, BenchmarkAxis.SAFETY)
        assert [r.design_id for r in result.design_rankings] == [5, 4]

    def test_comparisons_not_computed(self, rng, three_designs):
        comparison = BenchmarkEngine(rng).benchmark(three_designs, BenchmarkAxis.EFFICIENCY).statistical_comparison
        assert comparison.pairwise_comparisons == []
        assert comparison.effect_sizes == {}
        assert 0.0 <= comparison.anova_p_value <= 0.05

    def test_test_id_prefix(self, rng, three_designs):
        assert BenchmarkEngine(rng).benchmark(three_designs, "safety").test_id.startswith("bench_")

    def test_empty_design_list(self, rng):
        with pytest.raises(InvalidArgumentError):
            BenchmarkEngine(rng).benchmark([], BenchmarkAxis.EFFICIENCY)

    def test_unknown_axis(self, rng, three_designs):
        with pytest.raises(InvalidArgumentError):
            BenchmarkEngine(rng).benchmark(three_designs, "cost")
