"""Validation of user supplied guides and of stored designs."""

from typing import Optional, Union

import numpy as np

from rnaiforge.config.defaults import ALLOWED_GUIDE_LENGTHS, PASSING_SPECIFICITY
from rnaiforge.core.scoring import ScoringEngine, calculate_position_bias, calculate_seed_region_score
from rnaiforge.core.sequence import complement, is_valid_alphabet
from rnaiforge.errors import ensure_member, unsupported
from rnaiforge.models.rnai import (
    MAX_CONSTRUCT_LENGTH,
    Candidate,
    ConfidenceInterval,
    ConstructType,
    Design,
    DesignAssessment,
    DesignParameters,
    GCContentRange,
    ScoredDesign,
    SpecificityAnalysis,
    ValidationMethod,
    ValidationResult,
    ValidationStatus,
)
from rnaiforge.utils.logging_utils import get_logger
from rnaiforge.utils.numeric import clamp01
from rnaiforge.utils.random_source import resolve_rng

logger = get_logger(__name__)

CONFIDENCE_HALF_WIDTH = 0.15


def build_specificity_analysis(design: ScoredDesign, target_sequence: str, design_id: int = 0) -> SpecificityAnalysis:
    """Recompute the per-design specificity breakdown against ``target_sequence``."""
    efficacy = design.efficacy_prediction
    return SpecificityAnalysis(
        design_id=design_id,
        specificity_score=design.specificity_score,
        seed_region_score=calculate_seed_region_score(design.guide_sequence, target_sequence),
        thermodynamic_score=design.thermodynamic_properties.asymmetry_score,
        position_bias_score=calculate_position_bias(design.guide_sequence),
        overall_efficacy_prediction=efficacy,
        confidence_interval=ConfidenceInterval(
            lower=clamp01(efficacy - CONFIDENCE_HALF_WIDTH),
            upper=clamp01(efficacy + CONFIDENCE_HALF_WIDTH),
        ),
    )


class DesignValidator:
    """Checks a guide against structural constraints and re-scores it.

    Malformed input never raises: a bad alphabet or an unusual length is
    reported in ``issues`` and the guide is still scored.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = resolve_rng(rng)
        self.scorer = ScoringEngine(self.rng)

    def validate(
        self, guide: str, target: str, construct_type: Union[ConstructType, str] = ConstructType.SIRNA
    ) -> ValidationResult:
        construct = ensure_member(ConstructType, construct_type)
        guide = (guide or "").strip().upper()
        target = (target or "").strip().upper()

        issues: list[str] = []
        if not is_valid_alphabet(guide):
            issues.append("Invalid guide sequence - only A, T, C, G, U nucleotides allowed")
        if not is_valid_alphabet(target):
            issues.append("Invalid target sequence - only A, T, C, G, U nucleotides allowed")
        if len(guide) not in ALLOWED_GUIDE_LENGTHS[construct]:
            issues.append(f"Guide sequence length {len(guide)} not typical for {construct.value}")
        if len(guide) > MAX_CONSTRUCT_LENGTH:
            issues.append(f"Guide sequence length {len(guide)} exceeds the maximum of {MAX_CONSTRUCT_LENGTH}")

        candidate = Candidate(
            id="validation",
            construct_type=construct,
            guide_sequence=guide,
            passenger_sequence=complement(guide),
            full_sequence=guide,
        )
        parameters = DesignParameters(
            length=min(max(1, len(guide)), MAX_CONSTRUCT_LENGTH), gc_content_range=GCContentRange()
        )
        scored = self.scorer.score(candidate, target, parameters)

        thermo = scored.thermodynamic_properties
        recommendations = []
        if scored.specificity_score < PASSING_SPECIFICITY:
            recommendations.append(
                f"Consider redesigning - specificity score is below recommended threshold ({PASSING_SPECIFICITY})"
            )
        if thermo.guide_stability > thermo.passenger_stability:
            recommendations.append(
                "Guide strand may be too stable - consider adjusting design for better RISC loading"
            )

        if issues:
            logger.debug(f"Validation of {construct.value} guide raised {len(issues)} issue(s)")

        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            specificity_analysis=build_specificity_analysis(scored, target),
            thermodynamic_analysis=thermo,
            recommendations=recommendations,
        )


def assess_design(design: ScoredDesign, method: Union[ValidationMethod, str]) -> DesignAssessment:
    """Score a stored design against one validation test.

    Raises:
        InvalidArgumentError: unknown validation method.
    """
    method = ensure_member(ValidationMethod, method)
    details: dict[str, str] = {}

    if method is ValidationMethod.SPECIFICITY:
        score = design.specificity_score
        passed_at, warning_at = 0.7, 0.5
        details["specificity_analysis"] = "Heuristic off-target screening completed"
    elif method is ValidationMethod.EFFICACY:
        score = design.efficacy_prediction
        passed_at, warning_at = 0.6, 0.4
        details["efficacy_prediction"] = "Heuristic efficacy model evaluated"
    elif method is ValidationMethod.THERMODYNAMIC:
        score = design.thermodynamic_properties.asymmetry_score
        passed_at, warning_at = 1.0, 0.5
        details["thermodynamic_analysis"] = "Duplex stability analysis completed"
    else:
        unsupported(method)

    if score >= passed_at:
        status = ValidationStatus.PASSED
    elif score >= warning_at:
        status = ValidationStatus.WARNING
    else:
        status = ValidationStatus.FAILED

    return DesignAssessment(
        design_id=design.design_id if isinstance(design, Design) else 0,
        validation_method=method,
        validation_score=score,
        validation_status=status,
        validation_details=details,
    )
