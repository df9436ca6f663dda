"""Render the three bundle artifacts from an accepted PRD."""

from dataclasses import dataclass
from typing import Optional

from ..models import BundleConfig, Prd
from ..validators import validate_prd
from .manifest import serialize_prd
from .prompt import render_prompt
from .script import render_script


@dataclass(frozen=True)
class GeneratedBundle:
    """Rendered text of prd.json, prompt.md and ralph.sh."""
    prd_json: str
    prompt_md: str
    ralph_sh: str


def render_bundle(prd: Prd, config: Optional[BundleConfig] = None) -> GeneratedBundle:
    """Render all three artifacts for a PRD.

    Args:
        prd: Manifest to render. Must pass validate_prd().
        config: Rendering options for ralph.sh; defaults if None.

    Returns:
        GeneratedBundle with the rendered strings.

    Raises:
        ValueError: If the PRD does not pass validation.
    """
    report = validate_prd(prd)
    if not report.accepted:
        raise ValueError(
            "Refusing to render an invalid PRD: " + "; ".join(report.violations)
        )

    return GeneratedBundle(
        prd_json=serialize_prd(prd),
        prompt_md=render_prompt(prd),
        ralph_sh=render_script(prd.llm_provider, config),
    )
