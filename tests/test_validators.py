"""Tests for PRD validation."""

from ralph_bundle.generation import build_prd
from ralph_bundle.models import LlmProvider, Prd, UserStory
from ralph_bundle.validators import (
    PrdValidator,
    ValidationReport,
    ValidationResult,
    ValidationSeverity,
    validate_prd,
)


def _prd(**overrides) -> Prd:
    data = dict(
        project="Demo",
        branch_name="ralph/demo",
        description="",
        user_stories=[
            UserStory(
                id="US-001",
                title="Do a thing",
                description="As a user, I want do a thing so that the application meets my needs.",
                acceptance_criteria=["npm run typecheck passes"],
                priority=1,
            )
        ],
        llm_provider=LlmProvider.CLAUDE_4_5,
    )
    data.update(overrides)
    return Prd(**data)


class TestValidationReport:
    def test_empty_report_accepted(self):
        report = ValidationReport()
        assert report.accepted is True
        assert report.violations == []
        assert report.warnings == []

    def test_failed_error_blocks(self):
        report = ValidationReport(results=[
            ValidationResult(name="A", passed=True, message="OK"),
            ValidationResult(name="B", passed=False, message="B is broken"),
        ])
        assert report.accepted is False
        assert report.violations == ["B is broken"]
        assert report.error_count == 1

    def test_warning_does_not_block(self):
        report = ValidationReport(results=[
            ValidationResult(
                name="W",
                passed=False,
                message="Looks odd",
                severity=ValidationSeverity.WARNING,
            ),
        ])
        assert report.accepted is True
        assert report.warnings == ["Looks odd"]
        assert report.warning_count == 1


class TestPrdValidator:
    def test_valid_prd_accepted(self, sample_prd):
        report = validate_prd(sample_prd)
        assert report.accepted is True
        assert report.violations == []

    def test_revalidating_accepted_prd(self, sample_prd):
        validator = PrdValidator()
        assert validator.validate(sample_prd).accepted
        assert validator.validate(sample_prd).accepted

    def test_no_stories(self):
        prd = build_prd("App", "", ["   ", ""], LlmProvider.CLAUDE_4_5)
        report = validate_prd(prd)

        assert report.accepted is False
        assert report.violations == ["At least one user story is required"]

    def test_blank_project_name(self):
        report = validate_prd(_prd(project="   "))
        assert report.violations == ["Project name is required"]

    def test_branch_prefix(self):
        report = validate_prd(_prd(branch_name="feature/demo"))
        assert report.violations == ['Branch name must start with "ralph/"']

    def test_empty_branch(self):
        report = validate_prd(_prd(branch_name=""))
        assert report.violations == ['Branch name must start with "ralph/"']

    def test_collects_every_violation(self):
        bad_story = UserStory(id="US-1", title="  ", description="", priority=1)
        prd = _prd(project="", branch_name="main", user_stories=[bad_story])

        report = validate_prd(prd)

        assert report.violations == [
            "Project name is required",
            'Branch name must start with "ralph/"',
            "Story 1: ID must follow pattern US-XXX",
            "Story 1: Title is required",
            "Story 1: At least one acceptance criterion is required",
            'Story 1: Must include "npm run typecheck passes" criterion',
        ]

    def test_missing_typecheck_only(self):
        story = UserStory(
            id="US-002",
            title="Second",
            description="",
            acceptance_criteria=["npm test passes"],
            priority=2,
        )
        prd = _prd()
        prd.user_stories.append(story)

        report = validate_prd(prd)

        assert report.violations == ['Story 2: Must include "npm run typecheck passes" criterion']

    def test_story_id_pattern(self):
        for bad_id in ["US-1000", "us-001", "US-01", "XX-001", ""]:
            story = _prd().user_stories[0].model_copy(update={"id": bad_id})
            report = validate_prd(_prd(user_stories=[story]))
            assert report.violations == ["Story 1: ID must follow pattern US-XXX"], bad_id

    def test_invalid_prd_gives_identical_reports(self):
        prd = _prd(project="", user_stories=[])
        first = validate_prd(prd)
        second = validate_prd(prd)
        assert first.violations == second.violations
        assert first.results == second.results

    def test_degenerate_title_is_a_violation(self):
        prd = build_prd("App", "", ["-"], LlmProvider.CLAUDE_4_5)
        assert validate_prd(prd).violations == ["Story 1: Title is required"]

    def test_duplicate_titles_warn(self):
        prd = build_prd("App", "", ["Add login form", "add login form"], LlmProvider.CLAUDE_4_5)
        report = validate_prd(prd)

        assert report.accepted is True
        assert report.warnings == ["Story 2: Title duplicates an earlier story (add login form)"]

    def test_results_tagged_with_story_id(self, sample_prd):
        report = validate_prd(sample_prd)
        story_ids = {r.story_id for r in report.results if r.story_id}
        assert story_ids == {"US-001", "US-002"}
