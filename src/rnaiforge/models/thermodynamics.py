"""Pydantic models for detailed duplex thermodynamic analysis."""

from pydantic import BaseModel, Field


class AnalysisConditions(BaseModel):
    temperature: float = Field(default=37.0, description="Celsius")
    salt_concentration: float = Field(default=150.0, ge=0, description="mM")
    mg_concentration: float = Field(default=2.0, ge=0, description="mM")


class StabilityMetrics(BaseModel):
    melting_temperature: float
    gibbs_free_energy: float
    enthalpy: float = Field(description="kcal/mol")
    entropy: float = Field(description="eu")
    stability_score: float = Field(ge=0, le=1)


class DuplexStability(BaseModel):
    duplex_melting_temp: float
    duplex_free_energy: float
    asymmetry_parameter: float = Field(ge=0)
    end_stability_5prime: float
    end_stability_3prime: float


class RiscLoadingPrediction(BaseModel):
    guide_loading_probability: float = Field(ge=0, le=1)
    passenger_loading_probability: float = Field(ge=0, le=1)
    thermodynamic_asymmetry: float = Field(ge=0)
    predicted_loading_efficiency: float = Field(ge=0, le=1)
    confidence_score: float = Field(ge=0, le=1)


class StabilityAnalysis(BaseModel):
    guide_strand_stability: StabilityMetrics
    passenger_strand_stability: StabilityMetrics
    duplex_stability: DuplexStability
    risc_loading_prediction: RiscLoadingPrediction


class TemperatureProfile(BaseModel):
    temperatures: list[float]
    guide_stability: list[float]
    passenger_stability: list[float]
    duplex_stability: list[float]
    optimal_temperature: float = 37.0


class SaltDependency(BaseModel):
    salt_concentrations: list[float]
    stability_changes: list[float]
    optimal_salt_concentration: float = 150.0


class ThermodynamicAnalysis(BaseModel):
    design_id: int = Field(default=0, ge=0)
    stability_analysis: StabilityAnalysis
    temperature_profile: TemperatureProfile
    salt_dependency: SaltDependency
    recommendations: list[str] = Field(default_factory=list)
