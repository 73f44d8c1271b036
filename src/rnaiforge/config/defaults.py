"""Construct defaults and fixed thresholds of the heuristic model."""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from rnaiforge.errors import InvalidArgumentError, ensure_member
from rnaiforge.models.rnai import ConstructType, DesignParameters

CONSTRUCT_DEFAULT_LENGTHS: dict[ConstructType, int] = {
    ConstructType.SIRNA: 21,
    ConstructType.SHRNA: 19,
    ConstructType.MIRNA_MIMIC: 22,
    ConstructType.ANTAGOMIR: 22,
}

# Guide lengths the validator accepts without raising an issue
ALLOWED_GUIDE_LENGTHS: dict[ConstructType, frozenset[int]] = {
    ConstructType.SIRNA: frozenset({19, 21, 23}),
    ConstructType.SHRNA: frozenset({19, 21}),
    ConstructType.MIRNA_MIMIC: frozenset({20, 22, 24}),
    ConstructType.ANTAGOMIR: frozenset({18, 20, 22}),
}

SHRNA_LOOP = "TTCAAGAGA"
SIRNA_OVERHANG = "UU"
MIRNA_MIMIC_MISMATCHES = 2

PASSING_SPECIFICITY = 0.7
SUCCESS_RATE_THRESHOLD = 0.7
DEFAULT_MAX_DESIGNS = 10
CANDIDATE_OVERSAMPLING = 3
DEFAULT_ALGORITHM_VERSION = "v2.1"


def default_parameters(
    construct_type: Union[ConstructType, str], overrides: Optional[Mapping[str, Any]] = None
) -> DesignParameters:
    """Build parameters for ``construct_type`` with a partial override merged on top.

    Raises:
        InvalidArgumentError: unknown construct type or override keys/values
            rejected by :class:`DesignParameters`.
    """
    construct = ensure_member(ConstructType, construct_type)
    merged: dict[str, Any] = {
        "length": CONSTRUCT_DEFAULT_LENGTHS[construct],
        "algorithm_version": DEFAULT_ALGORITHM_VERSION,
    }
    merged.update(overrides or {})
    try:
        return DesignParameters.model_validate(merged)
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid design parameters: {exc}") from exc
