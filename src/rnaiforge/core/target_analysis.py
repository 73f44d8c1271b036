"""Target sequence validation, repeat detection and accessibility heuristics."""

from collections import Counter
from typing import Optional, Union

import numpy as np

from rnaiforge.core.sequence import gc_fraction, has_simple_repeat, is_valid_alphabet
from rnaiforge.errors import ensure_member
from rnaiforge.models.rnai import TargetType
from rnaiforge.models.target import (
    AccessibilityAnalysis,
    AccessibleRegion,
    RepeatRegion,
    SecondaryStructure,
    SequenceAnalysis,
    TargetSite,
    TargetValidationResult,
)
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)

MINIMUM_TARGET_LENGTHS: dict[TargetType, int] = {
    TargetType.MRNA: 200,
    TargetType.LNCRNA: 200,
    TargetType.MIRNA: 18,
    TargetType.CUSTOM: 18,
}
MIN_REPEAT_LENGTH = 4
MAX_REPEAT_LENGTH = 20
SITE_WINDOW = 21
MAX_RECOMMENDED_SITES = 10
PAIRED_ACCESSIBILITY = 0.2

_WATSON_CRICK = {("A", "T"), ("A", "U"), ("T", "A"), ("U", "A"), ("G", "C"), ("C", "G")}


def complexity_score(sequence: str) -> float:
    """``1 - max dinucleotide frequency``; 0.0 for sequences shorter than 2 nt."""
    if len(sequence) < 2:
        return 0.0
    upper = sequence.upper()
    counts = Counter(upper[i : i + 2] for i in range(len(upper) - 1))
    return 1 - max(counts.values()) / (len(upper) - 1)


def find_repeats(sequence: str) -> list[RepeatRegion]:
    """Report, per start position, the shortest 4-20 nt pattern that recurs within one pattern length."""
    upper = sequence.upper()
    repeats = []
    for i in range(len(upper) - MIN_REPEAT_LENGTH):
        for length in range(MIN_REPEAT_LENGTH, min(MAX_REPEAT_LENGTH, len(upper) - i) + 1):
            pattern = upper[i : i + length]
            if upper.find(pattern, i + length, i + 3 * length - 1) != -1:
                repeats.append(
                    RepeatRegion(
                        start=i,
                        end=i + length,
                        repeat_family="simple_repeat" if length <= 6 else "complex_repeat",
                    )
                )
                break
    return repeats


def region_score(sequence: str, start: int, end: int) -> float:
    """GC and repeat based functionality score of ``sequence[start:end + 1]``."""
    if start < 0 or end >= len(sequence):
        return 0.0
    region = sequence[start : end + 1]
    gc = gc_fraction(region)
    if gc < 0.3 or gc > 0.7:
        gc_score = 0.5
    elif 0.4 <= gc <= 0.6:
        gc_score = 1.0
    else:
        gc_score = 0.8
    return gc_score * (0.5 if has_simple_repeat(region) else 1.0)


class TargetAnalyzer:
    """Validates target sequences and suggests accessible sites."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)

    def validate(
        self, sequence: str, target_type: Union[TargetType, str] = TargetType.MRNA, organism: str = "unknown"
    ) -> TargetValidationResult:
        """Validate a target; problems are reported, never raised (except for an unknown type)."""
        target_type = ensure_member(TargetType, target_type)
        sequence = (sequence or "").strip().upper()

        errors = []
        if not sequence:
            errors.append("Sequence cannot be empty")
        if not is_valid_alphabet(sequence):
            errors.append("Sequence contains invalid nucleotides (only A, T, C, G, U allowed)")
        minimum = MINIMUM_TARGET_LENGTHS[target_type]
        if len(sequence) < minimum:
            errors.append(f"Sequence too short for {target_type.value} (minimum {minimum} nucleotides)")

        gc = gc_fraction(sequence)
        if gc < 0.2 or gc > 0.8:
            errors.append(f"Extreme GC content ({gc * 100:.1f}%). Optimal range is 20-80%")
        complexity = complexity_score(sequence)
        if complexity < 0.3:
            errors.append("Sequence has low complexity (may contain repeats or simple sequences)")

        structure = self.predict_secondary_structure(sequence)
        logger.debug(f"Validated {target_type.value} target from {organism}: {len(errors)} error(s)")

        return TargetValidationResult(
            is_valid=not errors,
            validation_errors=errors,
            sequence_analysis=SequenceAnalysis(
                length=len(sequence),
                gc_content=gc,
                complexity_score=complexity,
                repeat_regions=find_repeats(sequence),
                secondary_structure_prediction=structure,
            ),
            accessibility_analysis=self.analyze_accessibility(sequence, structure),
        )

    def predict_secondary_structure(self, sequence: str) -> SecondaryStructure:
        """Greedy outermost Watson-Crick pairing with hairpin loops of at least 3 nt."""
        length = len(sequence)
        partner: dict[int, int] = {}
        for i in range(length - 3):
            if i in partner:
                continue
            for j in range(length - 1, i + 3, -1):
                if j not in partner and (sequence[i], sequence[j]) in _WATSON_CRICK:
                    partner[i] = j
                    partner[j] = i
                    break

        dot_bracket = "".join("." if i not in partner else "(" if i < partner[i] else ")" for i in range(length))
        paired = len(partner)
        mfe = -(paired * 2.5 + gc_fraction(sequence) * paired * 1.5)

        return SecondaryStructure(
            dot_bracket_notation=dot_bracket,
            minimum_free_energy=mfe,
            ensemble_diversity=float(self.rng.random()) * 0.5 + 0.3,
            centroid_structure=dot_bracket,
        )

    def analyze_accessibility(self, sequence: str, structure: SecondaryStructure) -> AccessibilityAnalysis:
        dot_bracket = structure.dot_bracket_notation
        regions = []
        sites = []
        total = 0.0
        region_start = -1

        for i, symbol in enumerate(dot_bracket):
            accessible = symbol == "."
            total += 1.0 if accessible else PAIRED_ACCESSIBILITY

            if accessible and region_start == -1:
                region_start = i
            elif not accessible and region_start != -1:
                regions.append(
                    AccessibleRegion(
                        start=region_start,
                        end=i - 1,
                        accessibility_score=1.0,
                        local_structure=dot_bracket[region_start:i],
                    )
                )
                region_start = -1

            if accessible and SITE_WINDOW - 2 <= i < len(sequence) - 2:
                score = region_score(sequence, i - (SITE_WINDOW - 2), i + 2)
                if score > 0.6:
                    sites.append(
                        TargetSite(
                            position=i - SITE_WINDOW // 2,
                            accessibility_score=1.0,
                            functionality_score=score,
                            recommended_reason="Accessible region with good thermodynamic properties",
                        )
                    )

        if region_start != -1:
            regions.append(
                AccessibleRegion(
                    start=region_start,
                    end=len(dot_bracket) - 1,
                    accessibility_score=1.0,
                    local_structure=dot_bracket[region_start:],
                )
            )

        return AccessibilityAnalysis(
            accessible_regions=regions,
            average_accessibility=total / len(dot_bracket) if dot_bracket else 0.0,
            recommended_target_sites=sites[:MAX_RECOMMENDED_SITES],
        )
