"""Rendering module: PRD to bundle artifacts.

This module provides tools to:
- Serialize and parse prd.json (manifest.py)
- Render the agent instructions, prompt.md (prompt.py)
- Render the driver loop, ralph.sh (script.py)
- Render all three at once (bundle.py)
"""

from .manifest import serialize_prd, parse_prd
from .prompt import render_prompt
from .script import render_script
from .bundle import GeneratedBundle, render_bundle

__all__ = [
    "serialize_prd",
    "parse_prd",
    "render_prompt",
    "render_script",
    "GeneratedBundle",
    "render_bundle",
]
