"""Ralph Bundle - generate autonomous agent-loop bundles from a project brief."""

__version__ = "0.1.0"

from .models import (
    BundleConfig,
    BundleRequest,
    LlmProvider,
    Prd,
    ProviderProfile,
    UserStory,
)
from .providers import LLM_CONFIGS, get_profile
from .generation import build_prd, parse_feature
from .validators import ValidationReport, validate_prd
from .rendering import GeneratedBundle, render_bundle
from .pipeline import (
    BundleGenerationError,
    InputIncompleteError,
    SchemaViolationError,
    generate_bundle,
)

__all__ = [
    "BundleConfig",
    "BundleRequest",
    "LlmProvider",
    "Prd",
    "ProviderProfile",
    "UserStory",
    "LLM_CONFIGS",
    "get_profile",
    "build_prd",
    "parse_feature",
    "ValidationReport",
    "validate_prd",
    "GeneratedBundle",
    "render_bundle",
    "BundleGenerationError",
    "InputIncompleteError",
    "SchemaViolationError",
    "generate_bundle",
]
