"""Candidate generation: sliding-window enumeration and construct assembly."""

from typing import Optional, Union

import numpy as np

from rnaiforge.config.defaults import MIRNA_MIMIC_MISMATCHES, SHRNA_LOOP, SIRNA_OVERHANG
from rnaiforge.core.sequence import SEED_END, complement, is_valid_alphabet, passes_prefilter, reverse_complement
from rnaiforge.errors import InvalidArgumentError, ensure_member, unsupported
from rnaiforge.models.rnai import Candidate, ConstructType, DesignParameters, Target
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)

RNA_BASES = ("A", "U", "G", "C")


class CandidateGenerator:
    """Slides a fixed-length window over a target and assembles constructs.

    The only randomness is the choice of passenger mismatches for miRNA
    mimics, drawn from the injected generator.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)

    def generate(
        self,
        target: Union[Target, str],
        construct_type: Union[ConstructType, str],
        parameters: DesignParameters,
        max_candidates: int,
    ) -> list[Candidate]:
        """Enumerate candidates in generation order.

        Windows start at 0 and advance by ``max(1, len(target) // max_candidates)``.
        Windows rejected by the pre-filter are skipped, so fewer than
        ``max_candidates`` may be returned.

        Raises:
            InvalidArgumentError: unknown construct type or a target containing
                characters other than A/T/C/G/U.
        """
        construct = ensure_member(ConstructType, construct_type)
        if isinstance(target, Target):
            sequence, label = target.sequence, target.label
        else:
            sequence, label = target.strip().upper(), "target"

        if not sequence or max_candidates <= 0:
            return []
        if not is_valid_alphabet(sequence):
            raise InvalidArgumentError(f"Target {label} contains characters other than A, T, C, G, U")

        length = parameters.length
        target_length = len(sequence)
        step = max(1, target_length // max_candidates)

        candidates: list[Candidate] = []
        rejected = 0
        for start in range(0, target_length - length + 1, step):
            if len(candidates) >= max_candidates:
                break

            window = sequence[start : start + length]
            if not passes_prefilter(window, parameters):
                rejected += 1
                continue

            candidates.append(self._assemble(construct, window, f"{label}_{start + 1}_{start + length}", start + 1))

        logger.debug(
            f"Generated {len(candidates)} {construct.value} candidates for {label} "
            f"(step={step}, rejected={rejected})"
        )
        return candidates

    def _assemble(self, construct: ConstructType, window: str, candidate_id: str, position: int) -> Candidate:
        if construct is ConstructType.SIRNA:
            return Candidate(
                id=candidate_id,
                construct_type=construct,
                position=position,
                guide_sequence=window,
                passenger_sequence=complement(window),
                full_sequence=f"{window}{SIRNA_OVERHANG}",
            )
        elif construct is ConstructType.SHRNA:
            passenger = complement(window)
            return Candidate(
                id=candidate_id,
                construct_type=construct,
                position=position,
                guide_sequence=window,
                passenger_sequence=passenger,
                loop_sequence=SHRNA_LOOP,
                full_sequence=f"{window}{SHRNA_LOOP}{passenger[::-1]}",
            )
        elif construct is ConstructType.MIRNA_MIMIC:
            return Candidate(
                id=candidate_id,
                construct_type=construct,
                position=position,
                guide_sequence=window,
                passenger_sequence=self.introduce_mismatches(complement(window), MIRNA_MIMIC_MISMATCHES),
                full_sequence=window,
            )
        elif construct is ConstructType.ANTAGOMIR:
            antagomir = reverse_complement(window)
            return Candidate(
                id=candidate_id,
                construct_type=construct,
                position=position,
                guide_sequence=antagomir,
                full_sequence=antagomir,
            )
        unsupported(construct)

    def introduce_mismatches(self, passenger: str, count: int) -> str:
        """Mutate ``count`` distinct positions after the seed region (positions 9+)."""
        eligible = np.arange(SEED_END, len(passenger))
        if eligible.size == 0 or count <= 0:
            return passenger

        chosen = self.rng.choice(eligible, size=min(count, eligible.size), replace=False)
        bases = list(passenger)
        for index in sorted(int(i) for i in chosen):
            alternatives = [base for base in RNA_BASES if base != bases[index]]
            bases[index] = alternatives[int(self.rng.integers(len(alternatives)))]
        return "".join(bases)
