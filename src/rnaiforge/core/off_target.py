"""Simulated off-target screening for a design.

No genome or transcriptome is searched: candidate off-target sites are
random mutants of the guide, scored with the same binding heuristics a real
search would apply to aligned hits.
"""

from typing import Optional

import numpy as np
import pandas as pd

from rnaiforge.core.sequence import SEED_END, SEED_LENGTH, SEED_START, gc_fraction
from rnaiforge.models.off_target import (
    GenomeWideStats,
    OffTargetAnalysisResult,
    OffTargetAnalysisSummary,
    OffTargetPrediction,
    OffTargetRisk,
    OffTargetSearchParameters,
    TissueRisk,
)
from rnaiforge.models.rnai import Design, ScoredDesign
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.numeric import safe_mean
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)

MAX_REPORTED_PREDICTIONS = 50
HIGH_CONFIDENCE_RISK = 0.8
SEED_MATCHED_MINIMUM = 6
SEARCH_SPACE_MULTIPLIER = 10

# tissue name -> (max expressed off-targets, max weighted risk)
TISSUE_RISK_CEILINGS = {
    "Brain": (5, 0.5),
    "Liver": (8, 0.7),
    "Heart": (3, 0.3),
    "Kidney": (6, 0.6),
}


def predictions_to_dataframe(predictions: list[OffTargetPrediction]) -> pd.DataFrame:
    """Convert predictions to a DataFrame, one row per site."""
    if not predictions:
        return pd.DataFrame()
    return pd.DataFrame([p.model_dump() for p in predictions])


def analyze_binding(guide: str, site: str) -> dict:
    """Position-wise comparison of a guide with a candidate site.

    Mismatches inside the seed count double against the risk score.
    """
    guide_upper, site_upper = guide.upper(), site.upper()
    matches = 0
    seed_matches = 0
    mismatch_positions = []
    for i, (a, b) in enumerate(zip(guide_upper, site_upper)):
        if a == b:
            matches += 1
            if SEED_START <= i < SEED_END:
                seed_matches += 1
        else:
            mismatch_positions.append(i)

    similarity = matches / len(guide_upper) if guide_upper else 0.0
    binding_energy = -(matches * 2.5 + gc_fraction(guide_upper) * matches * 1.5)
    position_weight = sum(2 if SEED_START <= pos < SEED_END else 1 for pos in mismatch_positions)
    risk = max(0.0, similarity - position_weight * 0.1) * (0.5 + (seed_matches / SEED_LENGTH) * 0.5)

    return {
        "similarity_score": similarity,
        "mismatch_count": len(mismatch_positions),
        "mismatch_positions": mismatch_positions,
        "seed_region_matches": seed_matches,
        "binding_energy": binding_energy,
        "risk_score": min(1.0, risk),
    }


def classify_risk(high_confidence: int) -> OffTargetRisk:
    if high_confidence == 0:
        return OffTargetRisk.LOW
    if high_confidence <= 2:
        return OffTargetRisk.MODERATE
    if high_confidence <= 5:
        return OffTargetRisk.HIGH
    return OffTargetRisk.CRITICAL


class OffTargetAnalyzer:
    """Heuristic off-target screen driven by the injected generator."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)

    def analyze(
        self,
        design: ScoredDesign,
        genome_database: str = "human",
        parameters: Optional[OffTargetSearchParameters] = None,
    ) -> OffTargetAnalysisResult:
        parameters = parameters or OffTargetSearchParameters()
        guide = design.guide_sequence

        predictions = self.search(guide, parameters)
        summary = self.summarize(predictions)
        stats = self.genome_wide_statistics(predictions)

        logger.info(
            f"Off-target screen for {design.id}: {summary.potential_off_targets} sites, "
            f"risk {summary.risk_classification.value}"
        )
        return OffTargetAnalysisResult(
            design_id=design.design_id if isinstance(design, Design) else 0,
            genome_database=genome_database,
            analysis_summary=summary,
            off_target_predictions=predictions,
            genome_wide_statistics=stats,
            recommendations=self.recommendations(summary, stats),
        )

    def search(self, guide: str, parameters: OffTargetSearchParameters) -> list[OffTargetPrediction]:
        """Score 20-119 simulated sites and keep the riskiest 50 above the binding cutoff."""
        if not guide:
            return []

        predictions = []
        for i in range(int(self.rng.integers(20, 120))):
            site = self.mutate(guide, parameters.max_mismatches)
            binding = analyze_binding(guide, site)
            if binding["similarity_score"] < parameters.minimum_binding_score:
                continue
            predictions.append(
                OffTargetPrediction(
                    off_target_sequence=site,
                    off_target_gene=f"GENE_{i:05d}",
                    off_target_transcript=f"TRANSCRIPT_{i:05d}",
                    **binding,
                )
            )

        predictions.sort(key=lambda p: p.risk_score, reverse=True)
        return predictions[:MAX_REPORTED_PREDICTIONS]

    def mutate(self, template: str, max_mismatches: int) -> str:
        """Copy ``template`` with 0..max_mismatches random substitutions."""
        bases = list(template.upper())
        alphabet = ("A", "U", "G", "C") if "U" in bases else ("A", "T", "G", "C")
        count = min(int(self.rng.integers(0, max_mismatches + 1)), len(bases))
        for pos in self.rng.permutation(len(bases))[:count]:
            alternatives = [b for b in alphabet if b != bases[pos]]
            bases[pos] = alternatives[int(self.rng.integers(len(alternatives)))]
        return "".join(bases)

    @staticmethod
    def summarize(predictions: list[OffTargetPrediction]) -> OffTargetAnalysisSummary:
        high_confidence = sum(1 for p in predictions if p.risk_score >= HIGH_CONFIDENCE_RISK)
        return OffTargetAnalysisSummary(
            total_sites_analyzed=len(predictions) * SEARCH_SPACE_MULTIPLIER,
            potential_off_targets=len(predictions),
            high_confidence_off_targets=high_confidence,
            seed_matched_targets=sum(1 for p in predictions if p.seed_region_matches >= SEED_MATCHED_MINIMUM),
            risk_classification=classify_risk(high_confidence),
        )

    def genome_wide_statistics(self, predictions: list[OffTargetPrediction]) -> GenomeWideStats:
        avg_similarity = safe_mean([p.similarity_score for p in predictions])
        tissues = [
            TissueRisk(
                tissue_name=name,
                expressed_off_targets=int(self.rng.integers(0, max_count)),
                weighted_risk_score=float(self.rng.random()) * max_risk,
            )
            for name, (max_count, max_risk) in TISSUE_RISK_CEILINGS.items()
        ]
        return GenomeWideStats(
            total_sequences_searched=25000 + int(self.rng.integers(0, 5000)),
            average_similarity_score=avg_similarity,
            seed_region_conservation=float(self.rng.random()) * 0.3 + 0.1,
            expression_weighted_risk=avg_similarity * 0.7 + float(self.rng.random()) * 0.3,
            tissue_specific_risks=tissues,
        )

    @staticmethod
    def recommendations(summary: OffTargetAnalysisSummary, stats: GenomeWideStats) -> list[str]:
        recommendations = []
        if summary.risk_classification in (OffTargetRisk.HIGH, OffTargetRisk.CRITICAL):
            recommendations.append("Consider redesigning the construct due to high off-target risk")
        if summary.high_confidence_off_targets > 3:
            recommendations.append("Perform experimental validation of predicted off-targets")
        if stats.seed_region_conservation > 0.3:
            recommendations.append("Seed region shows high conservation - consider alternative target sites")
        if summary.risk_classification is OffTargetRisk.LOW:
            recommendations.append("Design shows good specificity profile for experimental testing")
        return recommendations
