"""Pydantic models for RNAi design data structures."""

from .benchmark import (
    BenchmarkAxis,
    BenchmarkMetrics,
    BenchmarkResult,
    ComparisonResults,
    DesignRanking,
    PairwiseComparison,
)
from .experiment import (
    EfficiencyMetrics,
    EfficiencyPrediction,
    ExperimentalParameters,
    ExperimentRecord,
    ExperimentType,
    OffTargetEffect,
    RelevanceTier,
    SafetyProfile,
    SimulationOutcome,
    StatisticalAnalysis,
    TreatmentConditions,
)
from .rnai import (
    Candidate,
    ConstructType,
    Design,
    DesignAssessment,
    DesignParameters,
    DesignResult,
    GCContentRange,
    OffTargetSummary,
    RiskClassification,
    ScoredDesign,
    SelectionResult,
    SelectionSummary,
    SpecificityAnalysis,
    Target,
    TargetRegion,
    TargetType,
    ThermodynamicProperties,
    ValidationMethod,
    ValidationResult,
    ValidationStatus,
)

__all__ = [
    # Design models
    "Candidate",
    "ConstructType",
    "Design",
    "DesignAssessment",
    "DesignParameters",
    "DesignResult",
    "GCContentRange",
    "OffTargetSummary",
    "RiskClassification",
    "ScoredDesign",
    "SelectionResult",
    "SelectionSummary",
    "SpecificityAnalysis",
    "Target",
    "TargetRegion",
    "TargetType",
    "ThermodynamicProperties",
    "ValidationMethod",
    "ValidationResult",
    "ValidationStatus",
    # Experiment models
    "EfficiencyMetrics",
    "EfficiencyPrediction",
    "ExperimentalParameters",
    "ExperimentRecord",
    "ExperimentType",
    "OffTargetEffect",
    "RelevanceTier",
    "SafetyProfile",
    "SimulationOutcome",
    "StatisticalAnalysis",
    "TreatmentConditions",
    # Benchmark models
    "BenchmarkAxis",
    "BenchmarkMetrics",
    "BenchmarkResult",
    "ComparisonResults",
    "DesignRanking",
    "PairwiseComparison",
]
