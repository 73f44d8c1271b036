"""Noisy knockdown experiment simulation.

Every number produced here is a heuristic placeholder shaped like wet-lab
output, not a biophysical or statistical model. All noise comes from the
injected generator.
"""

import math
from typing import Optional, Union

import numpy as np

from rnaiforge.errors import ensure_member, unsupported
from rnaiforge.models.experiment import (
    DoseResponsePoint,
    EfficiencyMetrics,
    ExperimentalParameters,
    ExperimentType,
    ImmuneResponse,
    OffTargetEffect,
    PercentInterval,
    RelevanceTier,
    SafetyProfile,
    SimulationOutcome,
    StatisticalAnalysis,
    TimePoint,
)
from rnaiforge.models.rnai import ScoredDesign
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.numeric import clamp, clamp01
from rnaiforge.utils.random_source import jitter, resolve_rng

logger = get_logger(__name__)

DOSE_CONCENTRATIONS = [1.0, 2.5, 5.0, 10.0, 25.0, 50.0, 100.0, 200.0]
HALF_MAX_CONCENTRATION = 25.0
TIMEPOINTS_HOURS = [6.0, 12.0, 24.0, 48.0, 72.0, 96.0]
PROTEIN_DAMPING = 0.8
RELEVANCE_TIERS = [RelevanceTier.HIGH, RelevanceTier.MEDIUM, RelevanceTier.LOW]
RELEVANCE_WEIGHTS = [0.3, 0.3, 0.4]


def concentration_multiplier(concentration: Optional[float]) -> float:
    """Efficacy multiplier for a dose band: <5 -> 0.6, >100 -> 0.8, otherwise 1.0.

    A missing or zero concentration counts as no dose given and leaves efficacy unchanged.
    """
    if not concentration:
        return 1.0
    if concentration < 5:
        return 0.6
    if concentration > 100:
        return 0.8
    return 1.0


class ExperimentSimulator:
    """Simulates in-silico and wet-lab knockdown experiments for a design."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)

    def simulate(
        self,
        design: ScoredDesign,
        experiment_type: Union[ExperimentType, str],
        parameters: Optional[ExperimentalParameters] = None,
    ) -> SimulationOutcome:
        """Run one simulated experiment.

        Raises:
            InvalidArgumentError: unknown experiment type.
        """
        experiment = ensure_member(ExperimentType, experiment_type)
        parameters = parameters or ExperimentalParameters()

        if experiment is ExperimentType.IN_SILICO:
            efficiency, safety, statistics = self._run_in_silico(design, parameters)
        elif experiment in (ExperimentType.CELL_CULTURE, ExperimentType.IN_VIVO, ExperimentType.LITERATURE_DERIVED):
            efficiency, safety, statistics = self._run_with_biological_variance(design)
        else:
            unsupported(experiment)

        logger.debug(
            f"Simulated {experiment.value} experiment: knockdown {efficiency.target_knockdown_percentage:.1f}%, "
            f"{len(safety.off_target_effects)} off-target effects"
        )
        return SimulationOutcome(
            efficiency_metrics=efficiency,
            safety_profile=safety,
            statistics=statistics,
            recommendations=self.recommendations(efficiency, safety, statistics),
        )

    def _run_in_silico(
        self, design: ScoredDesign, parameters: ExperimentalParameters
    ) -> tuple[EfficiencyMetrics, SafetyProfile, StatisticalAnalysis]:
        base = design.efficacy_prediction
        specificity = design.specificity_score
        treatment = parameters.treatment_conditions
        adjustment = concentration_multiplier(treatment.concentration if treatment else None)

        knockdown = min(95.0, base * 100 * adjustment)
        efficiency = EfficiencyMetrics(
            target_knockdown_percentage=knockdown,
            knockdown_duration=48 + float(self.rng.random()) * 24,
            dose_response_curve=self.dose_response_curve(base),
            time_course_data=self.time_course(base),
            efficacy_score=clamp01(base * adjustment),
        )
        safety = SafetyProfile(
            cell_viability_impact=max(0.0, (1 - specificity) * 30),
            off_target_effects=self.off_target_effects(specificity),
            cytotoxicity_score=clamp01(1 - specificity),
            immune_activation=ImmuneResponse(
                interferon_activation=float(self.rng.random()) * 0.3,
                inflammatory_markers=float(self.rng.random()) * 0.4,
                immune_score=float(self.rng.random()) * 0.2,
            ),
            overall_safety_score=specificity,
        )
        # in-silico runs always report a significant result
        statistics = StatisticalAnalysis(
            sample_size=6,
            statistical_power=0.85,
            confidence_interval=PercentInterval(lower=max(0.0, knockdown - 15), upper=min(100.0, knockdown + 15)),
            p_value=float(self.rng.random()) * 0.04 + 0.001,
            effect_size=efficiency.efficacy_score,
            variance_explained=0.6 + float(self.rng.random()) * 0.3,
        )
        return efficiency, safety, statistics

    def _run_with_biological_variance(
        self, design: ScoredDesign
    ) -> tuple[EfficiencyMetrics, SafetyProfile, StatisticalAnalysis]:
        base = design.efficacy_prediction * (0.8 + float(self.rng.random()) * 0.4)

        knockdown = clamp(base * 100 + jitter(self.rng, 20), 10.0, 90.0)
        efficacy = clamp01(base)
        efficiency = EfficiencyMetrics(
            target_knockdown_percentage=knockdown,
            knockdown_duration=36 + float(self.rng.random()) * 48,
            dose_response_curve=self.dose_response_curve(base),
            time_course_data=self.time_course(base),
            efficacy_score=efficacy,
        )
        safety = SafetyProfile(
            cell_viability_impact=float(self.rng.random()) * 25,
            off_target_effects=self.off_target_effects(design.specificity_score),
            cytotoxicity_score=float(self.rng.random()) * 0.3,
            immune_activation=ImmuneResponse(
                interferon_activation=float(self.rng.random()) * 0.5,
                inflammatory_markers=float(self.rng.random()) * 0.6,
                immune_score=float(self.rng.random()) * 0.4,
            ),
            overall_safety_score=0.7 + float(self.rng.random()) * 0.3,
        )
        statistics = StatisticalAnalysis(
            sample_size=3 + int(self.rng.integers(0, 6)),
            statistical_power=0.7 + float(self.rng.random()) * 0.2,
            confidence_interval=PercentInterval(lower=max(0.0, knockdown - 20), upper=min(100.0, knockdown + 20)),
            p_value=float(self.rng.random()) * 0.1,
            effect_size=efficacy * (0.7 + float(self.rng.random()) * 0.6),
            variance_explained=0.3 + float(self.rng.random()) * 0.5,
        )
        return efficiency, safety, statistics

    def dose_response_curve(self, base_efficiency: float) -> list[DoseResponsePoint]:
        """Saturating knockdown over the fixed dose series, half-max at 25 units."""
        points = []
        for concentration in DOSE_CONCENTRATIONS:
            normalized = concentration / HALF_MAX_CONCENTRATION
            knockdown = base_efficiency * 100 * (normalized / (1 + normalized))
            viability = max(50.0, 100 - concentration * 0.2)
            points.append(
                DoseResponsePoint(
                    concentration=concentration,
                    knockdown_percentage=clamp(knockdown + jitter(self.rng, 10), 0.0, 95.0),
                    viability_percentage=max(0.0, viability + jitter(self.rng, 20)),
                )
            )
        return points

    def time_course(self, base_efficiency: float) -> list[TimePoint]:
        """Sinusoidal knockdown depth over 6-96 h; protein lags via a 0.8 damping factor."""
        points = []
        for hours in TIMEPOINTS_HOURS:
            time_factor = math.sin(hours / 96 * math.pi)
            expression = 1 - base_efficiency * time_factor
            protein = 1 - base_efficiency * time_factor * PROTEIN_DAMPING
            viability = max(0.6, 1 - hours * 0.002)
            points.append(
                TimePoint(
                    time_hours=hours,
                    gene_expression_level=max(0.0, expression + jitter(self.rng, 0.2)),
                    protein_level=max(0.0, protein + jitter(self.rng, 0.3)),
                    cell_viability=max(0.0, viability + jitter(self.rng, 0.1)) * 100,
                )
            )
        return points

    def off_target_effects(self, specificity_score: float) -> list[OffTargetEffect]:
        """``floor((1 - specificity) * 10)`` synthetic off-target genes."""
        count = max(0, math.floor((1 - specificity_score) * 10))
        effects = []
        for i in range(count):
            tier = RELEVANCE_TIERS[int(self.rng.choice(len(RELEVANCE_TIERS), p=RELEVANCE_WEIGHTS))]
            effects.append(
                OffTargetEffect(
                    gene_name=f"OFFTARGET_{i + 1:03d}",
                    expression_change=jitter(self.rng, 4),
                    statistical_significance=float(self.rng.random()) * 0.05,
                    biological_relevance=tier,
                )
            )
        return effects

    @staticmethod
    def recommendations(
        efficiency: EfficiencyMetrics, safety: SafetyProfile, statistics: StatisticalAnalysis
    ) -> list[str]:
        recommendations = []
        if efficiency.efficacy_score < 0.5:
            recommendations.append(
                "Low efficacy observed - consider redesigning the construct or optimizing experimental conditions"
            )
        if safety.cell_viability_impact > 30:
            recommendations.append("Significant cytotoxicity detected - reduce concentration or modify delivery method")
        if len(safety.off_target_effects) > 5:
            recommendations.append("Multiple off-target effects detected - validate specificity experimentally")
        if statistics.statistical_power < 0.8:
            recommendations.append("Increase sample size to achieve adequate statistical power")
        if efficiency.efficacy_score > 0.8 and safety.overall_safety_score > 0.8:
            recommendations.append("Excellent performance profile - suitable for further development")
        return recommendations
