"""Feature-based knockdown efficiency prediction for stored designs."""

from typing import Optional

import numpy as np

from rnaiforge.core.sequence import gc_fraction
from rnaiforge.models.experiment import (
    CellCultureConditions,
    DeliveryOptimization,
    EfficiencyPrediction,
    FactorType,
    MeasurementStrategy,
    PredictionFactor,
    RecommendedConditions,
)
from rnaiforge.models.rnai import Design, ScoredDesign
from rnaiforge.utils.numeric import clamp
from rnaiforge.utils.random_source import resolve_rng

DEFAULT_CELL_LINE = "HEK293T"


def design_features(design: ScoredDesign) -> dict[str, float]:
    return {
        "length": float(len(design.guide_sequence)),
        "gc_content": gc_fraction(design.guide_sequence),
        "specificity_score": design.specificity_score,
        "thermodynamic_asymmetry": design.thermodynamic_properties.asymmetry_score,
        "off_target_count": float(design.off_target_analysis.total_predicted_targets),
    }


def estimate_efficiency(features: dict[str, float]) -> tuple[float, float]:
    """Return ``(efficiency, confidence)`` from the linear heuristic.

    Efficiency starts at 0.7, gains 0.1 inside the 30-70% GC window plus
    weighted specificity and asymmetry terms, loses up to 0.2 for
    off-target sites, and is clamped to [0.1, 0.95].
    """
    efficiency = 0.7
    if 0.3 <= features["gc_content"] <= 0.7:
        efficiency += 0.1
    efficiency += features["specificity_score"] * 0.2
    efficiency += features["thermodynamic_asymmetry"] * 0.1
    efficiency -= min(0.2, features["off_target_count"] * 0.01)

    confidence = 0.6 + features["specificity_score"] * 0.4
    return clamp(efficiency, 0.1, 0.95), clamp(confidence, 0.0, 1.0)


class EfficiencyPredictor:
    """Predicts knockdown efficiency and suggests delivery conditions."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)

    def predict(
        self, design: ScoredDesign, cell_line: Optional[str] = None, include_delivery_factors: bool = True
    ) -> EfficiencyPrediction:
        features = design_features(design)
        efficiency, confidence = estimate_efficiency(features)

        factors = [
            PredictionFactor(
                factor_name="Thermodynamic Asymmetry",
                contribution_score=features["thermodynamic_asymmetry"],
                factor_type=FactorType.THERMODYNAMIC,
                description="Differential stability between guide and passenger strands",
            ),
            PredictionFactor(
                factor_name="Target Accessibility",
                contribution_score=0.7 + float(self.rng.random()) * 0.3,
                factor_type=FactorType.TARGET,
                description="Predicted accessibility of target site for RISC binding",
            ),
            PredictionFactor(
                factor_name="Sequence Composition",
                contribution_score=features["specificity_score"],
                factor_type=FactorType.SEQUENCE,
                description="GC content and nucleotide bias analysis",
            ),
            PredictionFactor(
                factor_name="Off-target Burden",
                contribution_score=1 - features["off_target_count"] / 100,
                factor_type=FactorType.SEQUENCE,
                description="Number of predicted off-target sites",
            ),
        ]

        delivery = None
        if include_delivery_factors:
            delivery = DeliveryOptimization(
                optimal_concentration=25.0,
                optimal_delivery_method="Lipofectamine",
                formulation_recommendations=[
                    "Use serum-free media during transfection",
                    "Add serum 4-6 hours post-transfection",
                    "Consider sequential dosing for sustained effect",
                ],
                timing_recommendations=[
                    "Measure at 48-72 hours for peak effect",
                    "Include earlier time points for kinetic analysis",
                ],
            )

        return EfficiencyPrediction(
            design_id=design.design_id if isinstance(design, Design) else 0,
            predicted_efficiency=efficiency,
            confidence_score=confidence,
            prediction_factors=factors,
            delivery_optimization=delivery,
            recommended_conditions=RecommendedConditions(
                cell_culture=CellCultureConditions(
                    cell_line=cell_line or DEFAULT_CELL_LINE,
                    media_conditions="DMEM + 10% FBS",
                    transfection_protocol="Reverse transfection using Lipofectamine RNAiMAX",
                    controls_needed=["Scrambled siRNA", "Untransfected", "Mock transfection"],
                ),
                measurement_strategy=MeasurementStrategy(
                    primary_readouts=["qRT-PCR", "Western blot"],
                    time_points=[24.0, 48.0, 72.0],
                    statistical_considerations=[
                        "N>=3 biological replicates",
                        "Technical triplicates",
                        "Appropriate statistical tests",
                    ],
                ),
            ),
        )
