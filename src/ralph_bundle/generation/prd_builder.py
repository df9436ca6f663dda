"""Assemble a PRD manifest from a project brief.

No validation happens here: an empty feature list produces a PRD with no
stories, which validate_prd() then rejects.
"""

import logging
import re
from typing import Iterable

from ..constants import BRANCH_PREFIX
from ..models import BundleRequest, LlmProvider, Prd
from .story_parser import clean_feature, parse_feature

logger = logging.getLogger(__name__)


def to_branch_name(name: str) -> str:
    """Convert a display name to a branch-safe slug.

    "User Auth Feature" -> "user-auth-feature"
    """
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def branch_name_for(project_name: str) -> str:
    """Namespaced branch identifier for a project, e.g. ralph/my-cool-app."""
    return f"{BRANCH_PREFIX}{to_branch_name(project_name)}"


def filter_features(features: Iterable[str]) -> list[str]:
    """Drop blank and whitespace-only feature lines, keeping order."""
    return [feature for feature in features if feature.strip()]


def build_prd(
    project_name: str,
    description: str,
    features: Iterable[str],
    provider: LlmProvider | str,
) -> Prd:
    """Build a PRD from the project brief.

    Args:
        project_name: Display name of the project.
        description: Free-text project goal.
        features: Feature lines; blanks are discarded, order is priority.
        provider: Catalog key of the selected provider.

    Returns:
        Unvalidated Prd.
    """
    usable = filter_features(features)

    stories = []
    for index, feature in enumerate(usable):
        if not clean_feature(feature):
            logger.warning(f"Feature {index + 1} is empty after removing its bullet: {feature!r}")
        stories.append(parse_feature(feature, index))

    prd = Prd(
        project=project_name,
        branch_name=branch_name_for(project_name),
        description=description,
        user_stories=stories,
        llm_provider=LlmProvider(provider),
    )
    logger.debug(f"Built PRD for {prd.branch_name} with {len(stories)} stories")
    return prd


def build_prd_from_request(request: BundleRequest) -> Prd:
    """Build a PRD from a BundleRequest."""
    return build_prd(
        request.project_name,
        request.description,
        request.features,
        request.llm_provider,
    )
