"""Pydantic models for design benchmarking."""

from enum import Enum

from pydantic import BaseModel, Field


class BenchmarkAxis(str, Enum):
    """Axis a set of designs is ranked along."""

    EFFICIENCY = "efficiency"
    SPECIFICITY = "specificity"
    SAFETY = "safety"


class DesignRanking(BaseModel):
    design_id: int
    rank: int = Field(ge=1, description="1-based rank, best first")
    overall_score: float
    individual_scores: dict[str, float] = Field(default_factory=dict)


class BenchmarkMetrics(BaseModel):
    total_designs_tested: int = Field(ge=0)
    average_score: float = 0.0
    score_variance: float = Field(default=0.0, ge=0)
    top_performer_score: float = 0.0
    success_rate_threshold: float = Field(default=0.7, description="Reported only, never used as a filter")


class PairwiseComparison(BaseModel):
    design_a: int
    design_b: int
    p_value: float
    significant: bool


class ComparisonResults(BaseModel):
    """Comparative statistics. Pairwise tests are not computed and stay empty."""

    anova_p_value: float = Field(ge=0, le=1)
    pairwise_comparisons: list[PairwiseComparison] = Field(default_factory=list)
    effect_sizes: dict[str, float] = Field(default_factory=dict)


class BenchmarkResult(BaseModel):
    test_id: str
    benchmark_type: BenchmarkAxis
    design_rankings: list[DesignRanking] = Field(default_factory=list)
    benchmark_metrics: BenchmarkMetrics
    statistical_comparison: ComparisonResults
