"""Closed-form thermodynamic heuristics for guide/passenger duplexes.

These are deliberately simple GC-based proxies, not nearest-neighbour
thermodynamics. The per-position free energy profile in particular is a
placeholder shape in the range [-5, -2].
"""

import math
from typing import Optional

from rnaiforge.core.sequence import gc_fraction, seed_region
from rnaiforge.models.rnai import ThermodynamicProperties
from rnaiforge.models.thermodynamics import (
    AnalysisConditions,
    DuplexStability,
    RiscLoadingPrediction,
    SaltDependency,
    StabilityAnalysis,
    StabilityMetrics,
    TemperatureProfile,
    ThermodynamicAnalysis,
)

DEFAULT_PASSENGER_GC = 0.5
PROFILE_TEMPERATURES = [25.0 + 5.0 * i for i in range(15)]
PROFILE_SALTS = [50.0 + 50.0 * i for i in range(10)]


def melting_temperature(sequence: str) -> float:
    """Wallace-style estimate ``64.9 + 41*GC - 675/len``; 0.0 for an empty sequence."""
    if not sequence:
        return 0.0
    return 64.9 + 41 * gc_fraction(sequence) - 675 / len(sequence)


def strand_stability(gc: float) -> float:
    return gc * 5 + 2


def calculate_seed_stability(guide: str) -> float:
    """GC-based stability of positions 2-8; 0.0 for guides shorter than 8 nt."""
    seed = seed_region(guide)
    if not seed:
        return 0.0
    return gc_fraction(seed) * 4 + 1


def free_energy_profile(guide: str) -> list[float]:
    """One small negative value per position from the local trinucleotide GC."""
    return [-(2.0 + 3.0 * gc_fraction(guide[max(0, i - 1) : i + 2])) for i in range(len(guide))]


class ThermodynamicCalculator:
    """Heuristic thermodynamic properties and duplex analysis."""

    def calculate_properties(self, guide: str, passenger: Optional[str] = None) -> ThermodynamicProperties:
        """Summarize a guide (and optional passenger) as :class:`ThermodynamicProperties`."""
        guide_gc = gc_fraction(guide)
        passenger_gc = gc_fraction(passenger) if passenger else DEFAULT_PASSENGER_GC

        guide_stability = strand_stability(guide_gc)
        passenger_stability = strand_stability(passenger_gc)
        asymmetry = abs(guide_stability - passenger_stability) / max(guide_stability, passenger_stability)

        return ThermodynamicProperties(
            melting_temperature=melting_temperature(guide),
            guide_stability=guide_stability,
            passenger_stability=passenger_stability,
            asymmetry_score=asymmetry,
            internal_stability=(guide_stability + passenger_stability) / 2,
            seed_stability=calculate_seed_stability(guide),
            free_energy_profile=free_energy_profile(guide),
        )

    def calculate_stability_metrics(self, sequence: str, temperature: float = 37.0) -> StabilityMetrics:
        """Single-strand stability at ``temperature`` (°C)."""
        gc = gc_fraction(sequence)
        length = len(sequence)
        tm = melting_temperature(sequence)
        enthalpy = -(length * 7.5 + gc * length * 5)
        entropy = -(length * 20 + gc * length * 10)
        gibbs = enthalpy - (temperature + 273.15) * entropy / 1000

        return StabilityMetrics(
            melting_temperature=tm,
            gibbs_free_energy=gibbs,
            enthalpy=enthalpy,
            entropy=entropy,
            stability_score=max(0.0, min(1.0, (tm - 20) / 60)),
        )

    def calculate_duplex_stability(
        self, guide: str, passenger: str, conditions: AnalysisConditions
    ) -> DuplexStability:
        guide_metrics = self.calculate_stability_metrics(guide, conditions.temperature)
        passenger_metrics = self.calculate_stability_metrics(passenger, conditions.temperature)

        return DuplexStability(
            duplex_melting_temp=(guide_metrics.melting_temperature + passenger_metrics.melting_temperature) / 2,
            duplex_free_energy=(guide_metrics.gibbs_free_energy + passenger_metrics.gibbs_free_energy) / 2,
            asymmetry_parameter=abs(guide_metrics.gibbs_free_energy - passenger_metrics.gibbs_free_energy),
            end_stability_5prime=strand_stability(gc_fraction(guide[:4])),
            end_stability_3prime=strand_stability(gc_fraction(guide[-4:])),
        )

    def predict_risc_loading(self, duplex: Optional[DuplexStability]) -> RiscLoadingPrediction:
        """Sigmoid loading model centred at an asymmetry of 2 kcal/mol."""
        if duplex is None:
            return RiscLoadingPrediction(
                guide_loading_probability=1.0,
                passenger_loading_probability=0.0,
                thermodynamic_asymmetry=0.0,
                predicted_loading_efficiency=0.9,
                confidence_score=0.8,
            )

        asymmetry = duplex.asymmetry_parameter
        guide_loading = 1 / (1 + math.exp(-(asymmetry - 2)))
        return RiscLoadingPrediction(
            guide_loading_probability=guide_loading,
            passenger_loading_probability=1 - guide_loading,
            thermodynamic_asymmetry=asymmetry,
            predicted_loading_efficiency=guide_loading * 0.9 + 0.1,
            confidence_score=min(1.0, asymmetry / 5),
        )

    def analyze_duplex(
        self,
        guide: str,
        passenger: Optional[str],
        conditions: Optional[AnalysisConditions] = None,
        design_id: int = 0,
    ) -> ThermodynamicAnalysis:
        """Full stability analysis with temperature and salt profiles.

        A missing passenger (antagomir) reuses the guide metrics and predicts
        unconditional guide loading.
        """
        conditions = conditions or AnalysisConditions()
        guide_metrics = self.calculate_stability_metrics(guide, conditions.temperature)
        passenger_metrics = (
            self.calculate_stability_metrics(passenger, conditions.temperature) if passenger else None
        )
        duplex = self.calculate_duplex_stability(guide, passenger or "", conditions)
        loading = self.predict_risc_loading(duplex if passenger_metrics is not None else None)

        return ThermodynamicAnalysis(
            design_id=design_id,
            stability_analysis=StabilityAnalysis(
                guide_strand_stability=guide_metrics,
                passenger_strand_stability=passenger_metrics or guide_metrics,
                duplex_stability=duplex,
                risc_loading_prediction=loading,
            ),
            temperature_profile=self._temperature_profile(guide, passenger or ""),
            salt_dependency=self._salt_dependency(guide),
            recommendations=self._recommendations(guide_metrics, loading),
        )

    def _temperature_profile(self, guide: str, passenger: str) -> TemperatureProfile:
        guide_scores = [self.calculate_stability_metrics(guide, t).stability_score for t in PROFILE_TEMPERATURES]
        passenger_scores = [
            self.calculate_stability_metrics(passenger, t).stability_score for t in PROFILE_TEMPERATURES
        ]
        return TemperatureProfile(
            temperatures=list(PROFILE_TEMPERATURES),
            guide_stability=guide_scores,
            passenger_stability=passenger_scores,
            duplex_stability=[(g + p) / 2 for g, p in zip(guide_scores, passenger_scores)],
        )

    def _salt_dependency(self, guide: str) -> SaltDependency:
        # The heuristic has no salt term, so the curve is flat.
        score = self.calculate_stability_metrics(guide).stability_score
        return SaltDependency(salt_concentrations=list(PROFILE_SALTS), stability_changes=[score] * len(PROFILE_SALTS))

    @staticmethod
    def _recommendations(guide_metrics: StabilityMetrics, loading: RiscLoadingPrediction) -> list[str]:
        recommendations = []
        if loading.guide_loading_probability < 0.7:
            recommendations.append(
                "Guide strand loading probability is low - consider adjusting thermodynamic asymmetry"
            )
        if guide_metrics.melting_temperature < 40:
            recommendations.append("Guide strand stability is low - may affect efficacy")
        if guide_metrics.melting_temperature > 80:
            recommendations.append("Guide strand is very stable - may impede RISC loading")
        if loading.thermodynamic_asymmetry < 1:
            recommendations.append("Low thermodynamic asymmetry - passenger strand may compete for RISC loading")
        if loading.predicted_loading_efficiency > 0.8:
            recommendations.append("Excellent thermodynamic profile for RISC loading")
        return recommendations
