"""Pydantic models for simulated off-target screening."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OffTargetRisk(str, Enum):
    """Risk tier derived from the number of high-confidence off-targets."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class OffTargetSearchParameters(BaseModel):
    max_mismatches: int = Field(default=3, ge=0, description="Maximum mismatches introduced per simulated site")
    seed_mismatch_tolerance: int = Field(default=1, ge=0)
    minimum_binding_score: float = Field(default=0.6, ge=0, le=1, description="Similarity cutoff for reporting")
    include_utr_regions: bool = True
    include_intergenic_regions: bool = False
    filter_by_expression: bool = True
    expression_threshold: Optional[float] = 1.0


class OffTargetPrediction(BaseModel):
    off_target_sequence: str
    off_target_gene: str
    off_target_transcript: str
    similarity_score: float = Field(ge=0, le=1)
    mismatch_count: int = Field(ge=0)
    mismatch_positions: list[int] = Field(default_factory=list, description="0-based guide positions")
    seed_region_matches: int = Field(ge=0, le=7)
    binding_energy: float
    risk_score: float = Field(ge=0, le=1)


class OffTargetAnalysisSummary(BaseModel):
    total_sites_analyzed: int = Field(ge=0)
    potential_off_targets: int = Field(ge=0)
    high_confidence_off_targets: int = Field(ge=0)
    seed_matched_targets: int = Field(ge=0)
    risk_classification: OffTargetRisk


class TissueRisk(BaseModel):
    tissue_name: str
    expressed_off_targets: int = Field(ge=0)
    weighted_risk_score: float = Field(ge=0)


class GenomeWideStats(BaseModel):
    total_sequences_searched: int = Field(ge=0)
    average_similarity_score: float = Field(ge=0, le=1)
    seed_region_conservation: float = Field(ge=0, le=1)
    expression_weighted_risk: float = Field(ge=0)
    tissue_specific_risks: list[TissueRisk] = Field(default_factory=list)


class OffTargetAnalysisResult(BaseModel):
    design_id: int = Field(ge=0)
    genome_database: str = "human"
    analysis_summary: OffTargetAnalysisSummary
    off_target_predictions: list[OffTargetPrediction] = Field(default_factory=list)
    genome_wide_statistics: GenomeWideStats
    recommendations: list[str] = Field(default_factory=list)
