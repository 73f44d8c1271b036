"""Scoring engine: specificity, thermodynamics, off-target burden and efficacy."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional, Union

import numpy as np

from rnaiforge.core.sequence import SEED_END, SEED_LENGTH, SEED_START, seed_region
from rnaiforge.core.thermodynamics import ThermodynamicCalculator
from rnaiforge.models.rnai import (
    Candidate,
    DesignParameters,
    OffTargetSummary,
    RiskClassification,
    ScoredDesign,
    Target,
    ThermodynamicProperties,
)
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.numeric import clamp01
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)

OVERALL_WEIGHT = 0.6
SEED_WEIGHT = 0.4
EXPECTED_OFF_TARGETS_AT_ZERO_SPECIFICITY = 10


def calculate_alignment_score(guide: str, window: str) -> float:
    """Ungapped identity score weighting the seed region.

    ``0.6 * matches/len + 0.4 * seed_matches/7``; the seed term is 0 for
    guides shorter than 8 nt. Unequal lengths and empty input score 0.
    """
    if not guide or len(guide) != len(window):
        return 0.0

    guide_upper, window_upper = guide.upper(), window.upper()
    matches = 0
    seed_matches = 0
    for i, (a, b) in enumerate(zip(guide_upper, window_upper)):
        if a == b:
            matches += 1
            if SEED_START <= i < SEED_END:
                seed_matches += 1

    seed_score = seed_matches / SEED_LENGTH if len(guide) >= SEED_END else 0.0
    return OVERALL_WEIGHT * (matches / len(guide)) + SEED_WEIGHT * seed_score


def calculate_specificity_score(guide: str, target: str) -> float:
    """Best alignment score over every equal-length window of ``target``.

    1.0 when the guide occurs verbatim in the target; 0.0 when the guide is
    empty or longer than the target.
    """
    length = len(guide)
    if length == 0 or length > len(target):
        return 0.0
    best = 0.0
    for start in range(len(target) - length + 1):
        best = max(best, calculate_alignment_score(guide, target[start : start + length]))
        if best >= 1.0:
            break
    return clamp01(best)


def calculate_seed_region_score(guide: str, target: str) -> float:
    """Best alignment of the guide seed (positions 2-8) against any target 7-mer.

    Each 7-mer is scored like a full alignment, ``0.6 * matches/7 + 0.4 *
    seed_matches/7``, where the seed term counts matches at 7-mer indices
    1-6. A perfect seed therefore scores 0.6 + 0.4 * 6/7.
    """
    seed = seed_region(guide).upper()
    if not seed or len(target) < SEED_LENGTH:
        return 0.0
    target_upper = target.upper()
    best = 0.0
    for start in range(len(target_upper) - SEED_LENGTH + 1):
        window = target_upper[start : start + SEED_LENGTH]
        matches = 0
        inner_matches = 0
        for i, (a, b) in enumerate(zip(seed, window)):
            if a == b:
                matches += 1
                if i >= SEED_START:
                    inner_matches += 1
        best = max(best, OVERALL_WEIGHT * matches / SEED_LENGTH + SEED_WEIGHT * inner_matches / SEED_LENGTH)
    return best


def calculate_position_bias(guide: str) -> float:
    """Positional nucleotide bias score in [0, 1]; 1.0 means no per-base variance."""
    if not guide:
        return 0.0
    bases = np.array(list(guide.upper()))
    bias = sum(float((bases == base).astype(float).var()) for base in ("A", "T", "G", "C"))
    return max(0.0, 1 - bias * 10)


def predict_efficacy(guide: str, thermodynamics: ThermodynamicProperties, specificity_score: float) -> float:
    """Weighted efficacy model clamped to [0, 1]."""
    length_score = 1.0 if 19 <= len(guide) <= 23 else 0.8
    efficacy = (
        0.4 * specificity_score
        + 0.3 * thermodynamics.asymmetry_score
        + 0.2 * length_score
        + 0.1 * (thermodynamics.seed_stability / 5)
    )
    return clamp01(efficacy)


def _target_sequence(target: Union[Target, str]) -> str:
    return target.sequence if isinstance(target, Target) else target.strip().upper()


class ScoringEngine:
    """Scores candidates against their target.

    The off-target count is the only stochastic output; it is drawn from the
    injected generator so seeded runs are reproducible.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        calculator: Optional[ThermodynamicCalculator] = None,
    ) -> None:
        self.rng = resolve_rng(rng)
        self.calculator = calculator or ThermodynamicCalculator()

    def score(
        self,
        candidate: Candidate,
        target: Union[Target, str],
        parameters: DesignParameters,
        rng: Optional[np.random.Generator] = None,
    ) -> ScoredDesign:
        """Score one candidate. ``parameters`` is accepted for interface symmetry."""
        target_sequence = _target_sequence(target)
        thermodynamics = self.calculator.calculate_properties(
            candidate.guide_sequence, candidate.passenger_sequence
        )
        specificity = calculate_specificity_score(candidate.guide_sequence, target_sequence)
        efficacy = predict_efficacy(candidate.guide_sequence, thermodynamics, specificity)
        off_target = self.summarize_off_targets(specificity, rng or self.rng)

        return ScoredDesign(
            **candidate.model_dump(),
            specificity_score=specificity,
            efficacy_prediction=efficacy,
            thermodynamic_properties=thermodynamics,
            off_target_analysis=off_target,
        )

    @staticmethod
    def summarize_off_targets(specificity_score: float, rng: np.random.Generator) -> OffTargetSummary:
        """Draw an off-target burden with mean ``(1 - specificity) * 10``."""
        miss_rate = clamp01(1 - specificity_score)
        total = int(rng.poisson(miss_rate * EXPECTED_OFF_TARGETS_AT_ZERO_SPECIFICITY))
        return OffTargetSummary(
            total_predicted_targets=total,
            high_confidence_targets=int(rng.binomial(total, miss_rate)),
            seed_matches=int(rng.binomial(total, 0.5)),
            genome_wide_search_completed=False,
            analysis_timestamp=datetime.now(timezone.utc).isoformat(),
            risk_classification=RiskClassification.from_specificity(specificity_score),
        )

    def score_many(
        self,
        candidates: list[Candidate],
        target: Union[Target, str],
        parameters: DesignParameters,
        num_threads: int = 1,
    ) -> list[ScoredDesign]:
        """Score candidates, preserving input order.

        Each candidate gets its own child generator, so the result does not
        depend on ``num_threads`` or on thread scheduling.
        """
        if not candidates:
            return []

        child_rngs = self.rng.spawn(len(candidates))
        if num_threads <= 1 or len(candidates) == 1:
            scored = [self.score(c, target, parameters, rng=r) for c, r in zip(candidates, child_rngs)]
        else:
            with ThreadPoolExecutor(max_workers=num_threads) as executor:
                scored = list(
                    executor.map(lambda pair: self.score(pair[0], target, parameters, rng=pair[1]),
                                 zip(candidates, child_rngs))
                )

        logger.debug(f"Scored {len(scored)} candidates with {max(1, num_threads)} thread(s)")
        return scored
