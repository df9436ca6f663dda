"""PRD schema validation.

Checks a PRD against the invariants ralph.sh and the agent rely on. Every
check runs on every call so a single report lists all problems at once.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import BRANCH_PREFIX, MANDATORY_CRITERION, STORY_ID_PATTERN
from .models import Prd, UserStory


class ValidationSeverity(str, Enum):
    """Severity level for validation results."""
    ERROR = "error"      # Blocks rendering
    WARNING = "warning"  # Reported but doesn't block


@dataclass
class ValidationResult:
    """Result of a single validation check."""
    name: str
    passed: bool
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    story_id: Optional[str] = None


@dataclass
class ValidationReport:
    """Aggregated results from all validation checks."""
    results: list[ValidationResult] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        """True when no error-severity check failed."""
        return self.error_count == 0

    @property
    def violations(self) -> list[str]:
        """Messages of the failed error-severity checks, in check order."""
        return [
            r.message for r in self.results
            if not r.passed and r.severity == ValidationSeverity.ERROR
        ]

    @property
    def warnings(self) -> list[str]:
        """Messages of the failed warning-severity checks."""
        return [
            r.message for r in self.results
            if not r.passed and r.severity == ValidationSeverity.WARNING
        ]

    @property
    def error_count(self) -> int:
        """Count of failed error-severity validations."""
        return len(self.violations)

    @property
    def warning_count(self) -> int:
        """Count of failed warning-severity validations."""
        return len(self.warnings)


class PrdValidator:
    """Validates a PRD manifest.

    Runs all checks and returns a comprehensive report. Has no state, so
    validating the same PRD twice gives identical reports.
    """

    def validate(self, prd: Prd) -> ValidationReport:
        """Run every check against the PRD.

        Args:
            prd: The manifest to check.

        Returns:
            ValidationReport with all check results
        """
        report = ValidationReport()

        report.results.append(self._check_project_name(prd))
        report.results.append(self._check_branch_name(prd))
        report.results.append(self._check_has_stories(prd))

        seen_titles: set[str] = set()
        for position, story in enumerate(prd.user_stories, start=1):
            report.results.extend(self._check_story(story, position))

            title = story.title.strip().lower()
            if title:
                report.results.append(
                    self._check_duplicate_title(story, position, title in seen_titles)
                )
                seen_titles.add(title)

        return report

    def _check_project_name(self, prd: Prd) -> ValidationResult:
        passed = bool(prd.project and prd.project.strip())
        return ValidationResult(
            name="Project Name",
            passed=passed,
            message="OK" if passed else "Project name is required",
        )

    def _check_branch_name(self, prd: Prd) -> ValidationResult:
        passed = bool(prd.branch_name) and prd.branch_name.startswith(BRANCH_PREFIX)
        return ValidationResult(
            name="Branch Name",
            passed=passed,
            message="OK" if passed else f'Branch name must start with "{BRANCH_PREFIX}"',
        )

    def _check_has_stories(self, prd: Prd) -> ValidationResult:
        passed = len(prd.user_stories) > 0
        return ValidationResult(
            name="User Stories",
            passed=passed,
            message="OK" if passed else "At least one user story is required",
        )

    def _check_story(self, story: UserStory, position: int) -> list[ValidationResult]:
        """Run the per-story checks.

        Args:
            story: Story to check.
            position: 1-based position used in messages.

        Returns:
            One result per check, in a fixed order.
        """
        prefix = f"Story {position}"
        criteria = story.acceptance_criteria

        checks = [
            (
                "Story ID",
                bool(story.id) and STORY_ID_PATTERN.match(story.id) is not None,
                f"{prefix}: ID must follow pattern US-XXX",
            ),
            (
                "Story Title",
                bool(story.title and story.title.strip()),
                f"{prefix}: Title is required",
            ),
            (
                "Acceptance Criteria",
                len(criteria) > 0,
                f"{prefix}: At least one acceptance criterion is required",
            ),
            (
                "Typecheck Criterion",
                MANDATORY_CRITERION in criteria,
                f'{prefix}: Must include "{MANDATORY_CRITERION}" criterion',
            ),
        ]

        return [
            ValidationResult(
                name=name,
                passed=passed,
                message="OK" if passed else message,
                story_id=story.id,
            )
            for name, passed, message in checks
        ]

    def _check_duplicate_title(
        self,
        story: UserStory,
        position: int,
        duplicate: bool,
    ) -> ValidationResult:
        return ValidationResult(
            name="Unique Title",
            passed=not duplicate,
            message=(
                "OK" if not duplicate
                else f"Story {position}: Title duplicates an earlier story ({story.title})"
            ),
            severity=ValidationSeverity.WARNING,
            story_id=story.id,
        )


def validate_prd(prd: Prd) -> ValidationReport:
    """Validate a PRD with the default validator."""
    return PrdValidator().validate(prd)
