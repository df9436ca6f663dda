"""Generation module: feature lines to a PRD manifest.

This module provides tools to:
- Parse feature lines into user stories (story_parser.py)
- Assemble the PRD manifest and its branch name (prd_builder.py)
"""

from .story_parser import parse_feature, is_ui_feature, generate_acceptance_criteria
from .prd_builder import build_prd, build_prd_from_request, branch_name_for, to_branch_name

__all__ = [
    "parse_feature",
    "is_ui_feature",
    "generate_acceptance_criteria",
    "build_prd",
    "build_prd_from_request",
    "branch_name_for",
    "to_branch_name",
]
