"""Pandera schemas for rnaiforge table outputs.

Use schemas: MySchema.validate(df) - validation errors provide detailed feedback.
"""

import re
from typing import Any, Callable, TypeVar, cast

import pandas as pd
import pandera.pandas as pa
from pandera.pandas import DataFrameModel, Field
from pandera.typing.pandas import Series

# Typed alias for pandera's dataframe_check decorator to satisfy mypy
F = TypeVar("F", bound=Callable[..., Any])
dataframe_check_typed = cast(Callable[[F], F], pa.dataframe_check)

CONSTRUCT_TYPES = ["siRNA", "shRNA", "miRNA_mimic", "antagomir"]
RISK_CLASSES = ["low", "moderate", "high"]


def valid_nucleotide_sequence(sequence: str) -> bool:
    """Validate nucleotide sequence contains only valid bases."""
    return bool(re.match(r"^[ATCGU]*$", sequence.upper())) if isinstance(sequence, str) else False


class SchemaConfig:
    """Common configuration for all schemas."""

    coerce = True
    strict = True
    ordered = False


class DesignRecordSchema(DataFrameModel):
    """Schema for exported design tables (CSV output)."""

    class Config(SchemaConfig):
        """Schema configuration."""

        description = "RNAi design export schema"
        title = "RNAi Design Results"

    id: Series[str] = Field(description="Candidate identifier")
    construct_type: Series[str] = Field(isin=CONSTRUCT_TYPES, description="Construct type")
    position: Series[int] = Field(ge=1, description="1-based window start in the target")

    guide_sequence: Series[str] = Field(description="Guide strand")
    passenger_sequence: Series[str] = Field(description="Passenger strand, empty for antagomirs")
    full_sequence: Series[str] = Field(description="Assembled construct")

    specificity_score: Series[float] = Field(ge=0.0, le=1.0, description="Specificity score")
    efficacy_prediction: Series[float] = Field(ge=0.0, le=1.0, description="Predicted efficacy")
    melting_temperature: Series[float] = Field(description="Heuristic melting temperature (°C)")
    asymmetry_score: Series[float] = Field(ge=0.0, description="Thermodynamic asymmetry")
    seed_stability: Series[float] = Field(ge=0.0, description="Seed region stability proxy")

    total_predicted_targets: Series[int] = Field(ge=0, description="Simulated off-target count")
    risk_classification: Series[str] = Field(isin=RISK_CLASSES, description="Off-target risk tier")

    @dataframe_check_typed
    def check_nucleotide_sequences(cls, df: pd.DataFrame) -> bool:
        """Guide and passenger strands contain only nucleotide letters."""
        guide_valid = df["guide_sequence"].map(valid_nucleotide_sequence).all()
        passenger_valid = df["passenger_sequence"].map(valid_nucleotide_sequence).all()
        return bool(guide_valid and passenger_valid)

    @dataframe_check_typed
    def check_guide_not_longer_than_construct(cls, df: pd.DataFrame) -> bool:
        """The assembled construct always contains the full guide."""
        return bool((df["guide_sequence"].str.len() <= df["full_sequence"].str.len()).all())
