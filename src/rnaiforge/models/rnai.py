"""Pydantic models for RNAi design data structures."""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# mypy-friendly typed alias for pydantic's untyped decorator factory
F = TypeVar("F", bound=Callable[..., Any])
FieldValidatorFactory = Callable[..., Callable[[F], F]]
field_validator_typed: FieldValidatorFactory = field_validator

MAX_CONSTRUCT_LENGTH = 100


class ConstructType(str, Enum):
    """Supported silencing construct types."""

    SIRNA = "siRNA"
    SHRNA = "shRNA"
    MIRNA_MIMIC = "miRNA_mimic"
    ANTAGOMIR = "antagomir"


class TargetType(str, Enum):
    """Kinds of reference transcripts that can be targeted."""

    MRNA = "mRNA"
    LNCRNA = "lncRNA"
    MIRNA = "miRNA"
    CUSTOM = "custom"


class TargetRegion(str, Enum):
    """Preferred transcript region for construct placement."""

    UTR5 = "5_utr"
    CDS = "cds"
    UTR3 = "3_utr"
    ANY = "any"


class RiskClassification(str, Enum):
    """Off-target risk tier derived from the specificity score."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_specificity(cls, specificity_score: float) -> "RiskClassification":
        if specificity_score > 0.8:
            return cls.LOW
        if specificity_score > 0.6:
            return cls.MODERATE
        return cls.HIGH


class Target(BaseModel):
    """Reference sequence the engine designs against. Read-only."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    name: str = Field(default="target", description="Human readable target name")
    sequence: str = Field(description="Target nucleotide sequence")
    target_type: TargetType = Field(default=TargetType.MRNA, description="Kind of transcript")
    organism: str = Field(default="unknown", description="Source organism")
    gene_symbol: Optional[str] = Field(default=None, description="Gene symbol, if known")
    transcript_id: Optional[str] = Field(default=None, description="Transcript accession, if known")

    @field_validator_typed("sequence")
    @classmethod
    def normalize_sequence(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def label(self) -> str:
        """Identifier used as the prefix of candidate ids."""
        return str(self.id) if self.id is not None else self.name


class GCContentRange(BaseModel):
    """Allowed GC fraction window for a guide."""

    model_config = ConfigDict(extra="forbid")

    min: float = Field(default=0.3, ge=0, le=1, description="Minimum GC fraction")
    max: float = Field(default=0.7, ge=0, le=1, description="Maximum GC fraction")

    @field_validator_typed("max")
    @classmethod
    def max_not_below_min(cls, v: float, info: ValidationInfo) -> float:
        if "min" in info.data and v < info.data["min"]:
            raise ValueError("gc_content_range.max must be greater than or equal to gc_content_range.min")
        return v


class DesignParameters(BaseModel):
    """Complete parameters for one design run."""

    model_config = ConfigDict(extra="forbid")

    length: int = Field(
        default=21, ge=1, le=MAX_CONSTRUCT_LENGTH, description="Construct (guide) length in nucleotides"
    )
    gc_content_range: GCContentRange = Field(default_factory=GCContentRange)

    avoid_seed_complementarity: bool = Field(default=True, description="Avoid seed complementarity")
    filter_repeats: bool = Field(default=True, description="Reject windows with immediately repeated substrings")
    filter_snps: bool = Field(default=True, description="Avoid known SNP positions")
    minimum_distance_between_designs: int = Field(default=50, ge=0, description="Minimum spacing between designs")
    target_region_preference: TargetRegion = Field(default=TargetRegion.ANY)
    thermodynamic_asymmetry: bool = Field(default=True, description="Prefer thermodynamically asymmetric duplexes")
    algorithm_version: str = Field(default="v2.1", description="Algorithm version tag")


class Candidate(BaseModel):
    """Transient construct produced by the generator."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(description="Run-local candidate identifier")
    construct_type: ConstructType = Field(description="Construct type this candidate was assembled as")
    position: int = Field(default=1, ge=1, description="1-based window start in the target")

    guide_sequence: str = Field(description="Guide strand")
    passenger_sequence: Optional[str] = Field(default=None, description="Passenger strand, absent for antagomirs")
    loop_sequence: Optional[str] = Field(default=None, description="Hairpin loop, shRNA only")
    full_sequence: str = Field(description="Assembled construct")

    @field_validator_typed("guide_sequence", "passenger_sequence", "full_sequence")
    @classmethod
    def uppercase_sequence(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v is not None else v

    @property
    def length(self) -> int:
        return len(self.guide_sequence)

    def to_fasta(self) -> str:
        """Return FASTA format representation."""
        return f">{self.id}\n{self.guide_sequence}\n"


class ThermodynamicProperties(BaseModel):
    """Closed-form heuristic thermodynamic summary of a guide/passenger pair."""

    melting_temperature: float = Field(description="Estimated melting temperature (°C)")
    guide_stability: float = Field(description="Guide stability proxy")
    passenger_stability: float = Field(description="Passenger stability proxy")
    asymmetry_score: float = Field(ge=0, description="Normalized absolute stability difference")
    internal_stability: float = Field(description="Mean of guide and passenger stability")
    seed_stability: float = Field(ge=0, description="Seed region (positions 2-8) stability proxy")
    free_energy_profile: list[float] = Field(default_factory=list, description="Per-position heuristic ΔG values")


class OffTargetSummary(BaseModel):
    """Simulated off-target burden for a single design."""

    total_predicted_targets: int = Field(ge=0, description="Predicted off-target sites")
    high_confidence_targets: int = Field(ge=0, description="High-confidence off-target sites")
    seed_matches: int = Field(ge=0, description="Sites matched through the seed region")
    genome_wide_search_completed: bool = Field(default=False, description="Always false: no alignment is run")
    analysis_timestamp: str = Field(description="ISO-8601 time of the analysis")
    risk_classification: RiskClassification = Field(description="Risk tier from the specificity score")


class ScoredDesign(Candidate):
    """Candidate together with its specificity, efficacy and derived analyses."""

    specificity_score: float = Field(ge=0, le=1, description="Best alignment score against the target")
    efficacy_prediction: float = Field(ge=0, le=1, description="Composite efficacy prediction")
    thermodynamic_properties: ThermodynamicProperties
    off_target_analysis: OffTargetSummary


class Design(ScoredDesign):
    """Persisted, immutable design record."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    design_id: int = Field(ge=1, description="Store-assigned design identifier")
    target_id: Optional[int] = Field(default=None, description="Target the design was generated for")
    design_parameters: DesignParameters = Field(default_factory=DesignParameters)
    created_at: datetime = Field(default_factory=datetime.now)


class SelectionSummary(BaseModel):
    """Aggregate statistics over every scored candidate of a run."""

    total_evaluated: int = Field(ge=0, description="Number of scored candidates")
    passing_filters: int = Field(ge=0, description="Candidates with specificity_score >= 0.7")
    average_specificity: float = Field(ge=0, le=1, description="Mean specificity over all candidates")
    recommended_id: Optional[str] = Field(default=None, description="Top ranked candidate id")


class SelectionResult(BaseModel):
    """Ranked, truncated designs and the summary of the run."""

    designs: list[ScoredDesign]
    summary: SelectionSummary


class ConfidenceInterval(BaseModel):
    lower: float = Field(ge=0, le=1)
    upper: float = Field(ge=0, le=1)


class SpecificityAnalysis(BaseModel):
    """On-demand re-analysis of a guide against its target."""

    design_id: int = Field(default=0, ge=0, description="0 for ad hoc guides that were never persisted")
    specificity_score: float = Field(ge=0, le=1)
    seed_region_score: float = Field(ge=0, le=1)
    thermodynamic_score: float = Field(ge=0)
    position_bias_score: float = Field(ge=0, le=1)
    overall_efficacy_prediction: float = Field(ge=0, le=1)
    confidence_interval: ConfidenceInterval


class ValidationResult(BaseModel):
    """Verdict for a user supplied guide/target pair."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    specificity_analysis: SpecificityAnalysis
    thermodynamic_analysis: ThermodynamicProperties
    recommendations: list[str] = Field(default_factory=list)


class ValidationMethod(str, Enum):
    """Design-level validation tests."""

    SPECIFICITY = "specificity_validation"
    EFFICACY = "efficacy_validation"
    THERMODYNAMIC = "thermodynamic_validation"


class ValidationStatus(str, Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    WARNING = "warning"


class DesignAssessment(BaseModel):
    """Outcome of a single validation test on a stored design."""

    design_id: int = Field(ge=0)
    validation_method: ValidationMethod
    validation_score: float
    validation_status: ValidationStatus
    validation_details: dict[str, str] = Field(default_factory=dict)


class DesignResult(BaseModel):
    """Complete results from one design run."""

    model_config = ConfigDict(extra="forbid")

    target_name: str = Field(description="Target the run designed against")
    construct_type: ConstructType
    parameters: DesignParameters = Field(description="Parameters used for design")

    candidates: list[ScoredDesign] = Field(description="All scored candidates in generation order")
    designs: list[ScoredDesign] = Field(description="Selected designs, best first")
    summary: SelectionSummary

    processing_time: float = Field(ge=0, description="Processing time in seconds")
    tool_versions: dict[str, str] = Field(default_factory=dict, description="Tool versions used")

    def to_dataframe(self, selected_only: bool = False) -> pd.DataFrame:
        """Tabulate designs (or every candidate) and validate the table."""
        from rnaiforge.models.schemas import DesignRecordSchema

        rows = [design_record_row(d) for d in (self.designs if selected_only else self.candidates)]
        if not rows:
            return pd.DataFrame(columns=list(DesignRecordSchema.to_schema().columns))
        return DesignRecordSchema.validate(pd.DataFrame(rows))

    def save_csv(self, filepath: str, selected_only: bool = False) -> None:
        """Save results to CSV file."""
        self.to_dataframe(selected_only=selected_only).to_csv(filepath, index=False)

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics."""
        return {
            "target": self.target_name,
            "construct_type": self.construct_type.value,
            "total_candidates": self.summary.total_evaluated,
            "passing_filters": self.summary.passing_filters,
            "selected_designs": len(self.designs),
            "average_specificity": round(self.summary.average_specificity, 4),
            "recommended_id": self.summary.recommended_id,
            "processing_time": f"{self.processing_time:.2f}s",
            "tool_versions": self.tool_versions,
        }


def design_record_row(design: ScoredDesign) -> dict[str, Any]:
    """Flatten a scored design into one export row."""
    thermo = design.thermodynamic_properties
    off_target = design.off_target_analysis
    return {
        "id": design.id,
        "construct_type": design.construct_type.value,
        "position": design.position,
        "guide_sequence": design.guide_sequence,
        "passenger_sequence": design.passenger_sequence or "",
        "full_sequence": design.full_sequence,
        "specificity_score": design.specificity_score,
        "efficacy_prediction": design.efficacy_prediction,
        "melting_temperature": thermo.melting_temperature,
        "asymmetry_score": thermo.asymmetry_score,
        "seed_stability": thermo.seed_stability,
        "total_predicted_targets": off_target.total_predicted_targets,
        "risk_classification": off_target.risk_classification.value,
    }
