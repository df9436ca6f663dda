"""Data models for Ralph bundle generation.

Uses Pydantic for validation. The manifest is serialized with camelCase keys
(branchName, userStories, ...) so the generated prd.json stays readable by
ralph.sh and by the agent following prompt.md.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LlmProvider(str, Enum):
    """Catalog keys for the supported language-model providers."""
    CLAUDE_4_5 = "CLAUDE_4_5"
    CLAUDE_SONNET = "CLAUDE_SONNET"
    GPT_4O = "GPT_4O"
    GPT_4_TURBO = "GPT_4_TURBO"


class ArchiveFormat(str, Enum):
    """How the rendered bundle is written to disk."""
    ZIP = "zip"
    DIRECTORY = "dir"


class ProviderProfile(BaseModel):
    """Static description of how to invoke a provider from ralph.sh."""
    model_config = ConfigDict(frozen=True)

    provider: LlmProvider
    display_name: str = Field(..., description="Human-readable provider name")
    cli_command: str = Field(
        ...,
        description="Command family: 'anthropic', 'openai', or a bare executable name"
    )
    model_id: str = Field(..., description="Concrete model identifier passed to --model")
    description: str = ""
    max_tokens: int = Field(..., gt=0, description="Context budget of the model")


class UserStory(BaseModel):
    """A single unit of work in the PRD.

    Created once per feature line; ralph.sh and the agent flip `passes`
    later, the generator always emits False.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", description="Story identifier, e.g. US-001")
    title: str = ""
    description: str
    acceptance_criteria: list[str] = Field(
        default_factory=list,
        alias="acceptanceCriteria",
        description="Conditions the agent must verify before marking the story done"
    )
    priority: int = Field(..., ge=1, description="1 = implement first")
    passes: bool = False
    notes: str = ""


class Prd(BaseModel):
    """The manifest that drives the Ralph loop (prd.json)."""
    model_config = ConfigDict(populate_by_name=True)

    project: str = ""
    branch_name: str = Field(default="", alias="branchName")
    description: str = ""
    user_stories: list[UserStory] = Field(default_factory=list, alias="userStories")
    llm_provider: LlmProvider = Field(..., alias="llmProvider")


class BundleRequest(BaseModel):
    """Input record for one generation request."""
    project_name: str
    description: str = ""
    features: list[str] = Field(
        default_factory=list,
        description="One feature per entry; blank entries are discarded"
    )
    llm_provider: LlmProvider = LlmProvider.CLAUDE_4_5


class BundleConfig(BaseModel):
    """Configuration for bundle rendering and export."""
    model_config = ConfigDict(extra="forbid")

    default_provider: LlmProvider = Field(
        default=LlmProvider.CLAUDE_4_5,
        description="Provider used when none is given on the command line"
    )
    max_iterations: int = Field(
        default=10,
        ge=1,
        description="Default iteration ceiling baked into ralph.sh"
    )
    iteration_delay_seconds: int = Field(
        default=2,
        ge=0,
        description="Pause between ralph.sh iterations"
    )
    cli_max_tokens: int = Field(
        default=8192,
        ge=1,
        description="--max-tokens value for the anthropic and openai command families"
    )
    archive_format: ArchiveFormat = Field(
        default=ArchiveFormat.ZIP,
        description="'zip' writes a single archive, 'dir' writes a directory tree"
    )
