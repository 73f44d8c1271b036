"""Pydantic models for simulated knockdown experiments and efficiency prediction."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExperimentType(str, Enum):
    """How an experiment is produced."""

    IN_SILICO = "in_silico"
    CELL_CULTURE = "cell_culture"
    IN_VIVO = "in_vivo"
    LITERATURE_DERIVED = "literature_derived"


class RelevanceTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TreatmentConditions(BaseModel):
    concentration: float = Field(default=25.0, ge=0, description="Dose in abstract concentration units (nM)")
    treatment_duration: float = Field(default=48.0, ge=0, description="Hours")
    transfection_method: str = Field(default="lipofection")
    serum_conditions: str = Field(default="serum-free")
    temperature: float = Field(default=37.0, description="Celsius")
    co2_percentage: float = Field(default=5.0, ge=0, le=100)


class InVivoConditions(BaseModel):
    animal_model: str
    delivery_route: str
    dose: float = Field(ge=0, description="mg/kg")
    treatment_schedule: str = "single"
    observation_period: float = Field(default=7.0, ge=0, description="Days")


class MeasurementParameters(BaseModel):
    target_gene_expression: bool = True
    off_target_analysis: bool = True
    cell_viability: bool = True
    protein_levels: bool = True
    phenotypic_analysis: bool = False
    time_points: list[float] = Field(default_factory=lambda: [24.0, 48.0, 72.0], description="Hours")


class ExperimentalParameters(BaseModel):
    """Conditions an experiment is run (or simulated) under."""

    cell_line: Optional[str] = None
    treatment_conditions: Optional[TreatmentConditions] = None
    in_vivo_conditions: Optional[InVivoConditions] = None
    measurement_parameters: MeasurementParameters = Field(default_factory=MeasurementParameters)


class DoseResponsePoint(BaseModel):
    concentration: float
    knockdown_percentage: float = Field(ge=0, le=100)
    viability_percentage: float = Field(ge=0)


class TimePoint(BaseModel):
    time_hours: float
    gene_expression_level: float = Field(ge=0, description="Relative to control")
    protein_level: float = Field(ge=0, description="Relative to control")
    cell_viability: float = Field(ge=0, description="Percentage")


class OffTargetEffect(BaseModel):
    gene_name: str
    expression_change: float = Field(description="Fold change")
    statistical_significance: float = Field(ge=0, le=1, description="p-value")
    biological_relevance: RelevanceTier


class ImmuneResponse(BaseModel):
    interferon_activation: float = 0.0
    inflammatory_markers: float = 0.0
    immune_score: float = 0.0


class EfficiencyMetrics(BaseModel):
    target_knockdown_percentage: float = Field(ge=0, le=100)
    knockdown_duration: float = Field(ge=0, description="Hours")
    dose_response_curve: list[DoseResponsePoint] = Field(default_factory=list)
    time_course_data: list[TimePoint] = Field(default_factory=list)
    efficacy_score: float = Field(ge=0, le=1)


class SafetyProfile(BaseModel):
    cell_viability_impact: float = Field(ge=0, description="Percentage")
    off_target_effects: list[OffTargetEffect] = Field(default_factory=list)
    cytotoxicity_score: float = Field(ge=0, le=1)
    immune_activation: ImmuneResponse = Field(default_factory=ImmuneResponse)
    overall_safety_score: float = Field(ge=0, le=1)


class PercentInterval(BaseModel):
    lower: float = Field(ge=0, le=100)
    upper: float = Field(ge=0, le=100)


class StatisticalAnalysis(BaseModel):
    """Synthesized statistics; placeholders rather than real wet-lab statistics."""

    sample_size: int = Field(ge=1)
    statistical_power: float = Field(ge=0, le=1)
    confidence_interval: PercentInterval
    p_value: float = Field(ge=0, le=1)
    effect_size: float = Field(ge=0)
    variance_explained: float = Field(ge=0, le=1)


class SimulationOutcome(BaseModel):
    efficiency_metrics: EfficiencyMetrics
    safety_profile: SafetyProfile
    statistics: StatisticalAnalysis
    recommendations: list[str] = Field(default_factory=list)


class ExperimentRecord(BaseModel):
    """Persisted experiment run."""

    model_config = ConfigDict(frozen=True)

    experiment_id: int = Field(ge=1)
    design_id: int = Field(ge=1)
    experiment_name: str
    experiment_type: ExperimentType
    cell_line: Optional[str] = None
    parameters: ExperimentalParameters = Field(default_factory=ExperimentalParameters)
    knockdown_efficiency: float = Field(ge=0, le=100)
    viability_impact: float = Field(ge=0)
    outcome: SimulationOutcome
    performed_at: datetime = Field(default_factory=datetime.now)


class FactorType(str, Enum):
    THERMODYNAMIC = "thermodynamic"
    SEQUENCE = "sequence"
    TARGET = "target"
    DELIVERY = "delivery"


class PredictionFactor(BaseModel):
    factor_name: str
    contribution_score: float
    factor_type: FactorType
    description: str


class DeliveryOptimization(BaseModel):
    optimal_concentration: float = Field(description="nM")
    optimal_delivery_method: str
    formulation_recommendations: list[str] = Field(default_factory=list)
    timing_recommendations: list[str] = Field(default_factory=list)


class CellCultureConditions(BaseModel):
    cell_line: str
    media_conditions: str
    transfection_protocol: str
    controls_needed: list[str] = Field(default_factory=list)


class MeasurementStrategy(BaseModel):
    primary_readouts: list[str] = Field(default_factory=list)
    time_points: list[float] = Field(default_factory=list)
    statistical_considerations: list[str] = Field(default_factory=list)


class RecommendedConditions(BaseModel):
    cell_culture: CellCultureConditions
    measurement_strategy: MeasurementStrategy


class EfficiencyPrediction(BaseModel):
    """Feature-based efficiency prediction for a stored design."""

    design_id: int = Field(ge=0)
    predicted_efficiency: float = Field(ge=0, le=1)
    confidence_score: float = Field(ge=0, le=1)
    prediction_factors: list[PredictionFactor] = Field(default_factory=list)
    delivery_optimization: Optional[DeliveryOptimization] = Field(default=None, description="Omitted on request")
    recommended_conditions: RecommendedConditions
