"""Design orchestration: generate, score and select constructs for a target."""

import platform
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Union

import numpy as np

from rnaiforge.config.defaults import CANDIDATE_OVERSAMPLING, DEFAULT_MAX_DESIGNS, PASSING_SPECIFICITY
from rnaiforge.core.generator import CandidateGenerator
from rnaiforge.core.scoring import ScoringEngine
from rnaiforge.errors import InvalidArgumentError, ensure_member
from rnaiforge.models.rnai import (
    ConstructType,
    DesignParameters,
    DesignResult,
    ScoredDesign,
    SelectionResult,
    SelectionSummary,
    Target,
)
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.numeric import clamp01, safe_mean
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)


def select_designs(scored: Sequence[ScoredDesign], max_designs: int = DEFAULT_MAX_DESIGNS) -> SelectionResult:
    """Rank by specificity (stable, best first), truncate and summarize.

    The summary covers every scored candidate, not only the selected subset.
    """
    ranked = sorted(scored, key=lambda d: d.specificity_score, reverse=True)
    selected = ranked[: max(0, max_designs)]

    specificities = [d.specificity_score for d in scored]
    summary = SelectionSummary(
        total_evaluated=len(scored),
        passing_filters=sum(1 for s in specificities if s >= PASSING_SPECIFICITY),
        average_specificity=clamp01(safe_mean(specificities)),
        recommended_id=selected[0].id if selected else None,
    )
    return SelectionResult(designs=selected, summary=summary)


class RNAiDesigner:
    """Main design engine: generator, scoring engine and selector in sequence."""

    def __init__(
        self,
        parameters: DesignParameters,
        construct_type: Union[ConstructType, str] = ConstructType.SIRNA,
        rng: Optional[np.random.Generator] = None,
        num_threads: int = 1,
    ) -> None:
        """Initialize designer with given parameters."""
        self.parameters = parameters
        self.construct_type = ensure_member(ConstructType, construct_type)
        self.rng = resolve_rng(rng)
        self.num_threads = num_threads
        self.generator = CandidateGenerator(self.rng)
        self.scorer = ScoringEngine(self.rng)

    def design(self, target: Union[Target, str], max_designs: int = DEFAULT_MAX_DESIGNS) -> DesignResult:
        """Design constructs for ``target``.

        ``max_designs * 3`` windows are generated so the selector has room to
        rank. A target whose every window is pre-filtered yields an empty
        result rather than an error.
        """
        start_time = time.time()
        if isinstance(target, str):
            target = Target(sequence=target)

        candidates = self.generator.generate(
            target, self.construct_type, self.parameters, max_designs * CANDIDATE_OVERSAMPLING
        )
        scored = self.scorer.score_many(candidates, target, self.parameters, num_threads=self.num_threads)
        selection = select_designs(scored, max_designs)

        processing_time = time.time() - start_time
        logger.info(
            f"Designed {len(selection.designs)} {self.construct_type.value} constructs for {target.label} "
            f"from {len(scored)} candidates in {processing_time:.2f}s"
        )

        return DesignResult(
            target_name=target.name,
            construct_type=self.construct_type,
            parameters=self.parameters,
            candidates=scored,
            designs=selection.designs,
            summary=selection.summary,
            processing_time=processing_time,
            tool_versions=self._get_tool_versions(),
        )

    def design_from_sequence(
        self, sequence: str, name: str = "seq1", max_designs: int = DEFAULT_MAX_DESIGNS
    ) -> DesignResult:
        """Design constructs from a single raw sequence."""
        return self.design(Target(name=name, sequence=sequence), max_designs=max_designs)

    def design_from_file(
        self, input_file: Union[str, Path], max_designs: int = DEFAULT_MAX_DESIGNS
    ) -> list[DesignResult]:
        """Design constructs for every record of a FASTA file, in file order."""
        from rnaiforge.data.fasta import read_targets

        targets = read_targets(input_file)
        if not targets:
            raise InvalidArgumentError(f"No sequences found in {input_file}")
        return [self.design(target, max_designs=max_designs) for target in targets]

    def _get_tool_versions(self) -> dict[str, str]:
        import Bio

        from rnaiforge import __version__

        return {
            "python": platform.python_version(),
            "biopython": Bio.__version__,
            "numpy": np.__version__,
            "rnaiforge": __version__,
        }
