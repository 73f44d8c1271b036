"""FASTA input/output for targets and designed constructs."""

from collections.abc import Iterable
from pathlib import Path
from typing import Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from rnaiforge.models.rnai import Candidate, Target, TargetType
from rnaiforge.utils.logging_utils import get_logger

logger = get_logger(__name__)


def read_targets(
    file_path: Union[str, Path],
    target_type: TargetType = TargetType.MRNA,
    organism: str = "unknown",
) -> list[Target]:
    """
    Read every record of a FASTA file as a :class:`Target`.

    Args:
        file_path: Path to FASTA file
        target_type: Transcript kind assigned to every record
        organism: Source organism assigned to every record

    Returns:
        Targets in file order, named by record id
    """
    targets = [
        Target(
            name=record.id,
            sequence=str(record.seq),
            target_type=target_type,
            organism=organism,
            transcript_id=record.id,
        )
        for record in SeqIO.parse(str(file_path), "fasta")
    ]
    logger.debug(f"Read {len(targets)} targets from {file_path}")
    return targets


def write_candidates_fasta(candidates: Iterable[Candidate], output_path: Union[str, Path]) -> int:
    """Write guide strands to FASTA and return the number of records written."""
    records = [
        SeqRecord(Seq(c.guide_sequence), id=c.id, description=c.construct_type.value) for c in candidates
    ]
    count = SeqIO.write(records, str(output_path), "fasta")
    logger.info(f"Saved {count} sequences to {output_path}")
    return count
