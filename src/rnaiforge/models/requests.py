"""Request and response shapes for the service layer."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from rnaiforge.models.benchmark import BenchmarkAxis
from rnaiforge.models.experiment import ExperimentalParameters, ExperimentType
from rnaiforge.models.rnai import ConstructType, Design, SpecificityAnalysis


class DesignRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_id: int = Field(ge=1)
    construct_type: ConstructType
    design_parameters: dict[str, Any] = Field(
        default_factory=dict, description="Partial parameters merged onto construct defaults"
    )
    max_designs: int = Field(default=10, ge=1, le=1000)


class DesignSummary(BaseModel):
    total_evaluated: int = Field(ge=0)
    passing_filters: int = Field(ge=0)
    average_specificity: float = Field(ge=0, le=1)
    recommended_id: Optional[int] = Field(default=None, description="Store id of the best saved design")


class DesignResponse(BaseModel):
    designs: list[Design] = Field(default_factory=list)
    summary: DesignSummary


class ValidationRequest(BaseModel):
    guide_sequence: str
    target_sequence: str
    construct_type: ConstructType


class DesignDetail(BaseModel):
    design: Design
    analysis: SpecificityAnalysis


class PredictionRequest(BaseModel):
    design_id: int = Field(ge=1)
    cell_line: Optional[str] = None
    include_delivery_factors: bool = Field(default=True, description="Include delivery optimization advice")


class ExperimentRequest(BaseModel):
    design_id: int = Field(ge=1)
    experiment_name: str
    experiment_type: ExperimentType
    experimental_parameters: ExperimentalParameters = Field(default_factory=ExperimentalParameters)


class BenchmarkRequest(BaseModel):
    design_ids: list[int] = Field(min_length=1)
    benchmark_type: BenchmarkAxis
