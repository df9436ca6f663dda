"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from ralph_bundle.models import (
    ArchiveFormat, BundleConfig, BundleRequest, LlmProvider, Prd, ProviderProfile, UserStory
)


class TestUserStory:
    def test_defaults(self):
        story = UserStory(id="US-001", title="Test", description="A test", priority=1)
        assert story.passes is False
        assert story.notes == ""
        assert story.acceptance_criteria == []

    def test_accepts_alias_and_field_name(self):
        by_alias = UserStory.model_validate({
            "id": "US-001",
            "title": "T",
            "description": "D",
            "acceptanceCriteria": ["npm run typecheck passes"],
            "priority": 1,
        })
        by_name = UserStory(
            id="US-001",
            title="T",
            description="D",
            acceptance_criteria=["npm run typecheck passes"],
            priority=1,
        )
        assert by_alias == by_name

    def test_missing_id_and_title_left_for_validator(self):
        story = UserStory.model_validate({"description": "D", "priority": 1})
        assert story.id == ""
        assert story.title == ""

    def test_priority_must_be_positive(self):
        with pytest.raises(ValidationError):
            UserStory(id="US-001", title="T", description="D", priority=0)


class TestPrd:
    def test_missing_project_and_branch_left_for_validator(self):
        prd = Prd.model_validate({"llmProvider": "CLAUDE_4_5"})
        assert prd.project == ""
        assert prd.branch_name == ""

    def test_parse_camel_case_document(self):
        prd = Prd.model_validate({
            "project": "Demo",
            "branchName": "ralph/demo",
            "description": "",
            "userStories": [],
            "llmProvider": "GPT_4O",
        })
        assert prd.branch_name == "ralph/demo"
        assert prd.llm_provider == LlmProvider.GPT_4O
        assert prd.user_stories == []

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            Prd(project="Demo", branch_name="ralph/demo", llm_provider="MISTRAL")

    def test_dump_uses_aliases(self, sample_prd):
        data = sample_prd.model_dump(by_alias=True, mode="json")
        assert "branchName" in data
        assert "acceptanceCriteria" in data["userStories"][0]
        assert data["llmProvider"] == "CLAUDE_4_5"


class TestProviderProfile:
    def test_frozen(self):
        profile = ProviderProfile(
            provider=LlmProvider.GPT_4O,
            display_name="GPT-4o",
            cli_command="openai",
            model_id="gpt-4o",
            max_tokens=128000,
        )
        with pytest.raises(ValidationError):
            profile.model_id = "other"


class TestBundleRequest:
    def test_default_provider_is_first_catalog_entry(self):
        request = BundleRequest(project_name="Demo")
        assert request.llm_provider == LlmProvider.CLAUDE_4_5
        assert request.features == []


class TestBundleConfig:
    def test_defaults(self):
        config = BundleConfig()
        assert config.max_iterations == 10
        assert config.iteration_delay_seconds == 2
        assert config.cli_max_tokens == 8192
        assert config.archive_format == ArchiveFormat.ZIP
        assert config.default_provider == LlmProvider.CLAUDE_4_5

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            BundleConfig.model_validate({"max_iterations": 5, "colour": "blue"})

    def test_rejects_zero_iterations(self):
        with pytest.raises(ValidationError):
            BundleConfig(max_iterations=0)

    def test_archive_format_from_string(self):
        assert BundleConfig(archive_format="dir").archive_format == ArchiveFormat.DIRECTORY
