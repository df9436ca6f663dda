"""Language-model provider catalog.

Maps each provider key to the profile ralph.sh needs to invoke it, and
builds the shell command line for a profile.
"""

from types import MappingProxyType
from typing import Mapping

from .constants import PROMPT_FILENAME
from .models import LlmProvider, ProviderProfile


# Provider used when the caller does not pick one (first catalog entry)
DEFAULT_PROVIDER = LlmProvider.CLAUDE_4_5

# --max-tokens passed to the anthropic/openai CLIs
DEFAULT_CLI_MAX_TOKENS = 8192

# Prompt path as seen from inside ralph.sh
PROMPT_PATH = f'"$SCRIPT_DIR/{PROMPT_FILENAME}"'

LLM_CONFIGS: Mapping[LlmProvider, ProviderProfile] = MappingProxyType({
    LlmProvider.CLAUDE_4_5: ProviderProfile(
        provider=LlmProvider.CLAUDE_4_5,
        display_name="Claude Opus 4.5",
        cli_command="anthropic",
        model_id="claude-opus-4-5-20251101",
        description="Most capable Claude model for complex reasoning and code generation",
        max_tokens=200000,
    ),
    LlmProvider.CLAUDE_SONNET: ProviderProfile(
        provider=LlmProvider.CLAUDE_SONNET,
        display_name="Claude Sonnet 4",
        cli_command="anthropic",
        model_id="claude-sonnet-4-20250514",
        description="Balanced Claude model for everyday tasks",
        max_tokens=200000,
    ),
    LlmProvider.GPT_4O: ProviderProfile(
        provider=LlmProvider.GPT_4O,
        display_name="GPT-4o",
        cli_command="openai",
        model_id="gpt-4o",
        description="OpenAI flagship multimodal model",
        max_tokens=128000,
    ),
    LlmProvider.GPT_4_TURBO: ProviderProfile(
        provider=LlmProvider.GPT_4_TURBO,
        display_name="GPT-4 Turbo",
        cli_command="openai",
        model_id="gpt-4-turbo",
        description="OpenAI enhanced GPT-4 with vision capabilities",
        max_tokens=128000,
    ),
})

# Subcommand for each known command family
FAMILY_SUBCOMMANDS: Mapping[str, str] = MappingProxyType({
    "anthropic": "messages create",
    "openai": "api chat.completions.create",
})


def get_profile(provider: LlmProvider | str) -> ProviderProfile:
    """Look up a provider profile by enum member or key.

    Raises:
        ValueError: If the key is not in the catalog.
    """
    try:
        key = LlmProvider(provider)
    except ValueError:
        raise ValueError(
            f"Unknown LLM provider: {provider}. "
            f"Available: {', '.join(p.value for p in LLM_CONFIGS)}"
        ) from None
    return LLM_CONFIGS[key]


def build_llm_command(
    profile: ProviderProfile,
    max_tokens: int = DEFAULT_CLI_MAX_TOKENS,
    prompt_path: str = PROMPT_PATH,
) -> str:
    """Build the command ralph.sh runs once per iteration.

    Known families get `<family> <subcommand> --model ... --max-tokens ... -f`;
    anything else is treated as a plain executable taking `--model` and `-f`.
    """
    subcommand = FAMILY_SUBCOMMANDS.get(profile.cli_command)
    if subcommand:
        return (
            f"{profile.cli_command} {subcommand} --model {profile.model_id} "
            f"--max-tokens {max_tokens} -f {prompt_path}"
        )
    return f"{profile.cli_command} --model {profile.model_id} -f {prompt_path}"
