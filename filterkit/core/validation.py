"""
Validation engine for filter runs.

Structured validation rules that must pass before a run starts.
Returns ValidationIssue list; ERROR severity blocks the run.
"""

import math
from pathlib import Path
from typing import List

from .types import RunConfig, ValidationIssue, ValidationSeverity

MIN_QUALITY = 1
MAX_QUALITY = 100


class ValidationEngine:
    """Validates run configurations."""

    @staticmethod
    def validate_config(config: RunConfig) -> List[ValidationIssue]:
        """
        Validate a run configuration.

        Returns list of ValidationIssue; the run is blocked if any ERROR present.
        The input path is not checked here: a missing input surfaces as a
        DecodeError when the coordinator decodes it.
        """
        issues = []

        # 1. Output quality
        issues.extend(ValidationEngine._validate_quality(config))

        # 2. Progress cadence
        issues.extend(ValidationEngine._validate_cadence(config))

        # 3. Output directory
        issues.extend(ValidationEngine._validate_output_dir(config))

        return issues

    @staticmethod
    def has_errors(issues: List[ValidationIssue]) -> bool:
        """True if any issue blocks the run."""
        return any(i.severity == ValidationSeverity.ERROR for i in issues)

    @staticmethod
    def _validate_quality(config: RunConfig) -> List[ValidationIssue]:
        """Quality must be an integer percentage."""
        issues = []

        if not isinstance(config.quality, int) or isinstance(config.quality, bool):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="INVALID_QUALITY",
                    message=f"Quality must be an integer, got {config.quality!r}.",
                    context={"quality": config.quality},
                )
            )
        elif not MIN_QUALITY <= config.quality <= MAX_QUALITY:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="QUALITY_OUT_OF_RANGE",
                    message=f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {config.quality}.",
                    context={"quality": config.quality},
                )
            )
        elif config.quality < 75:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="LOW_QUALITY",
                    message=f"Quality {config.quality} will produce visible compression artifacts.",
                    context={"quality": config.quality},
                )
            )

        return issues

    @staticmethod
    def _validate_cadence(config: RunConfig) -> List[ValidationIssue]:
        """Cadence is a fraction of the image height in (0, 1]."""
        cadence = config.progress_cadence
        if (
            not isinstance(cadence, (int, float))
            or isinstance(cadence, bool)
            or math.isnan(cadence)
            or not 0 < cadence <= 1
        ):
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="INVALID_CADENCE",
                    message=f"Progress cadence must be in (0, 1], got {cadence!r}.",
                    context={"progress_cadence": cadence},
                )
            ]
        return []

    @staticmethod
    def _validate_output_dir(config: RunConfig) -> List[ValidationIssue]:
        """Output directory may not exist yet, but must not be a file."""
        issues = []

        if not config.output_dir:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="NO_OUTPUT_DIR",
                    message="Output directory must be specified.",
                    context={},
                )
            )
            return issues

        output_dir = Path(config.output_dir)
        if output_dir.exists() and not output_dir.is_dir():
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="OUTPUT_DIR_NOT_A_DIRECTORY",
                    message=f"Output path exists and is not a directory: {output_dir}",
                    context={"output_dir": str(output_dir)},
                )
            )

        return issues
