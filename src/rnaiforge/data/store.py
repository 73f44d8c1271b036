"""In-memory registry of targets, designs and experiments.

Records can optionally be mirrored as JSON files in a directory so that a run
leaves an inspectable trace. Stored designs are immutable; analyses are
recomputed on demand and never written back.
"""

import itertools
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

from rnaiforge.errors import NotFoundError, PersistenceError
from rnaiforge.models.experiment import ExperimentRecord
from rnaiforge.models.rnai import ConstructType, Design, DesignParameters, ScoredDesign, Target
from rnaiforge.utils.logging_utils import get_logger

logger = get_logger(__name__)


class DesignStore:
    """Sequential-id store for the records the engine produces and consumes."""

    def __init__(self, store_dir: Optional[Union[str, Path]] = None) -> None:
        self.store_dir = Path(store_dir) if store_dir is not None else None
        if self.store_dir is not None:
            self.store_dir.mkdir(parents=True, exist_ok=True)

        self._targets: dict[int, Target] = {}
        self._designs: dict[int, Design] = {}
        self._experiments: dict[int, ExperimentRecord] = {}
        self._target_ids = itertools.count(1)
        self._design_ids = itertools.count(1)
        self._experiment_ids = itertools.count(1)

    # Targets

    def add_target(self, target: Target) -> Target:
        stored = target.model_copy(update={"id": next(self._target_ids)})
        self._write_record("target", stored.id, stored)
        self._targets[stored.id] = stored
        return stored

    def get_target(self, target_id: int) -> Target:
        try:
            return self._targets[target_id]
        except KeyError:
            raise NotFoundError(f"target {target_id} not found") from None

    def list_targets(self) -> list[Target]:
        return list(self._targets.values())

    # Designs

    def save_design(
        self, scored: ScoredDesign, target_id: Optional[int], parameters: DesignParameters
    ) -> Design:
        """Persist one scored design.

        Raises:
            PersistenceError: the record could not be written; nothing is stored.
        """
        design = Design(
            **scored.model_dump(),
            design_id=next(self._design_ids),
            target_id=target_id,
            design_parameters=parameters,
        )
        self._write_record("design", design.design_id, design)
        self._designs[design.design_id] = design
        return design

    def save_designs(
        self, scored: Iterable[ScoredDesign], target_id: Optional[int], parameters: DesignParameters
    ) -> list[Design]:
        """Persist designs in order, skipping any that fail to save."""
        saved = []
        for design in scored:
            try:
                saved.append(self.save_design(design, target_id, parameters))
            except PersistenceError as exc:
                logger.warning(f"Skipping design {design.id}: {exc}")
        return saved

    def get_design(self, design_id: int) -> Design:
        try:
            return self._designs[design_id]
        except KeyError:
            raise NotFoundError(f"design {design_id} not found") from None

    def get_designs(self, design_ids: Iterable[int]) -> list[Design]:
        """Resolve ids in the given order; any missing id raises :class:`NotFoundError`."""
        return [self.get_design(design_id) for design_id in design_ids]

    def list_designs(
        self, target_id: Optional[int] = None, construct_type: Optional[ConstructType] = None
    ) -> list[Design]:
        """Designs filtered by target and type, best specificity first."""
        designs = [
            d
            for d in self._designs.values()
            if (target_id is None or d.target_id == target_id)
            and (construct_type is None or d.construct_type == construct_type)
        ]
        return sorted(designs, key=lambda d: d.specificity_score, reverse=True)

    # Experiments

    def add_experiment(self, record: ExperimentRecord) -> ExperimentRecord:
        self._write_record("experiment", record.experiment_id, record)
        self._experiments[record.experiment_id] = record
        return record

    def next_experiment_id(self) -> int:
        return next(self._experiment_ids)

    def get_experiment(self, experiment_id: int) -> ExperimentRecord:
        try:
            return self._experiments[experiment_id]
        except KeyError:
            raise NotFoundError(f"experiment {experiment_id} not found") from None

    def list_experiments(self, design_id: int) -> list[ExperimentRecord]:
        """Experiments for a design, most recent first."""
        experiments = [e for e in self._experiments.values() if e.design_id == design_id]
        return sorted(experiments, key=lambda e: e.performed_at, reverse=True)

    def _write_record(self, kind: str, record_id: Optional[int], record: BaseModel) -> None:
        if self.store_dir is None:
            return
        path = self.store_dir / f"{kind}_{record_id}.json"
        try:
            with path.open("w") as f:
                json.dump(record.model_dump(mode="json"), f, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"failed to write {path}: {exc}") from exc
