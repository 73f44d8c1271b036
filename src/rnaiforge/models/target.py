"""Pydantic models for target sequence validation and accessibility analysis."""

from typing import Optional

from pydantic import BaseModel, Field


class RepeatRegion(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    repeat_type: str = "tandem_repeat"
    repeat_family: Optional[str] = None


class SecondaryStructure(BaseModel):
    dot_bracket_notation: str
    minimum_free_energy: float
    ensemble_diversity: float = Field(ge=0, le=1)
    centroid_structure: str


class AccessibleRegion(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    accessibility_score: float = Field(ge=0, le=1)
    local_structure: str


class TargetSite(BaseModel):
    position: int = Field(ge=0, description="Center of the 21-nt window (0-based)")
    accessibility_score: float = Field(ge=0, le=1)
    conservation_score: Optional[float] = None
    functionality_score: float = Field(ge=0, le=1)
    recommended_reason: str


class SequenceAnalysis(BaseModel):
    length: int = Field(ge=0)
    gc_content: float = Field(ge=0, le=1)
    complexity_score: float = Field(ge=0, le=1)
    repeat_regions: list[RepeatRegion] = Field(default_factory=list)
    secondary_structure_prediction: SecondaryStructure


class AccessibilityAnalysis(BaseModel):
    accessible_regions: list[AccessibleRegion] = Field(default_factory=list)
    average_accessibility: float = Field(ge=0, le=1)
    recommended_target_sites: list[TargetSite] = Field(default_factory=list)


class TargetValidationResult(BaseModel):
    is_valid: bool
    validation_errors: list[str] = Field(default_factory=list)
    sequence_analysis: SequenceAnalysis
    accessibility_analysis: AccessibilityAnalysis
