"""End-to-end bundle generation.

Runs the brief through the parser, builder, validator and renderer, and
refuses to render when validation fails.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .generation.prd_builder import build_prd_from_request, filter_features
from .models import BundleConfig, BundleRequest, Prd
from .rendering import GeneratedBundle, render_bundle
from .validators import ValidationReport, validate_prd

logger = logging.getLogger(__name__)


class BundleGenerationError(Exception):
    """Base class for errors that stop bundle generation."""


class InputIncompleteError(BundleGenerationError):
    """Raised when the brief has no usable feature lines."""

    def __init__(self, message: str = "At least one feature is required"):
        super().__init__(message)


class SchemaViolationError(BundleGenerationError):
    """Raised when the built PRD fails validation.

    Carries the full report so every violation can be shown at once.
    """

    def __init__(self, report: ValidationReport):
        self.report = report
        super().__init__("PRD validation failed: " + "; ".join(report.violations))

    @property
    def violations(self) -> list[str]:
        return self.report.violations


@dataclass
class GenerationResult:
    """Result of generating a bundle from a brief."""

    prd: Prd
    report: ValidationReport
    bundle: GeneratedBundle
    generation_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def story_count(self) -> int:
        """Get the number of generated stories."""
        return len(self.prd.user_stories)


def generate_bundle(
    request: BundleRequest,
    config: Optional[BundleConfig] = None,
) -> GenerationResult:
    """Generate a bundle from a brief.

    Args:
        request: Project name, description, features and provider.
        config: Rendering options; defaults if None.

    Returns:
        GenerationResult with the PRD, its validation report and the rendered bundle.

    Raises:
        InputIncompleteError: If every feature line is blank.
        SchemaViolationError: If the PRD fails validation.
    """
    if not filter_features(request.features):
        raise InputIncompleteError()

    prd = build_prd_from_request(request)
    report = validate_prd(prd)

    for warning in report.warnings:
        logger.warning(warning)

    if not report.accepted:
        logger.info(f"PRD for {prd.project!r} rejected with {report.error_count} violation(s)")
        raise SchemaViolationError(report)

    bundle = render_bundle(prd, config)
    logger.info(
        f"Rendered bundle for {prd.branch_name} "
        f"({len(prd.user_stories)} stories, provider {prd.llm_provider.value})"
    )

    return GenerationResult(prd=prd, report=report, bundle=bundle)
