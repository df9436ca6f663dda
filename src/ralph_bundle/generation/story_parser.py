"""Feature-line parser.

Turns one free-text feature ("Add login form") into a structured
UserStory with a title, a user-story sentence and keyword-driven
acceptance criteria.
"""

import re

from ..constants import MANDATORY_CRITERION, STORY_ID_PREFIX
from ..models import UserStory


# Leading bullet glyph ("- ", "* ", "• ") stripped from feature lines
BULLET_PATTERN = re.compile(r"^[-*•]\s*")

# Titles longer than this many words are truncated with an ellipsis
MAX_TITLE_WORDS = 6

# Keywords that mark a feature as touching the UI
UI_KEYWORDS = [
    "ui",
    "interface",
    "button",
    "form",
    "page",
    "view",
    "component",
    "display",
    "screen",
    "modal",
    "dialog",
    "input",
    "select",
    "dropdown",
    "layout",
    "navigation",
    "menu",
    "header",
    "footer",
    "sidebar",
]

# Ordered (keywords, criterion) rules; each fires independently
KEYWORD_CRITERIA: list[tuple[tuple[str, ...], str]] = [
    (("api", "endpoint"), "API endpoint responds with correct data structure"),
    (("validation", "validate"), "Input validation handles edge cases correctly"),
    (("error", "handle"), "Error states are handled gracefully"),
    (("data", "model"), "Data model matches expected schema"),
]

DEFAULT_CRITERION = "Feature implementation matches specification"
TEST_CRITERION = "npm test passes"
BROWSER_CRITERION = "Verify in browser using dev-browser skill"

# Non-UI features mentioning these get an automated test criterion
TESTABLE_KEYWORDS = ("logic", "util", "service")


def clean_feature(raw_text: str) -> str:
    """Trim whitespace and a leading bullet from a feature line."""
    return BULLET_PATTERN.sub("", raw_text.strip(), count=1).strip()


def is_ui_feature(text: str) -> bool:
    """Check whether the text mentions any UI keyword (case-insensitive)."""
    lower = text.lower()
    return any(keyword in lower for keyword in UI_KEYWORDS)


def make_story_id(index: int) -> str:
    """Story id for a zero-based position: 0 -> US-001."""
    return f"{STORY_ID_PREFIX}{index + 1:03d}"


def make_title(text: str) -> str:
    """Short title: the text itself, or its first six words plus '...'."""
    words = text.split()
    if len(words) <= MAX_TITLE_WORDS:
        return text
    return " ".join(words[:MAX_TITLE_WORDS]) + "..."


def generate_acceptance_criteria(text: str, is_ui: bool) -> list[str]:
    """Derive acceptance criteria from keywords in the feature text.

    Args:
        text: Cleaned feature text.
        is_ui: Whether the feature was classified as UI work.

    Returns:
        Ordered criteria; always contains MANDATORY_CRITERION.
    """
    lower = text.lower()
    criteria = [
        criterion
        for keywords, criterion in KEYWORD_CRITERIA
        if any(keyword in lower for keyword in keywords)
    ]

    if not criteria:
        criteria.append(DEFAULT_CRITERION)

    criteria.append(MANDATORY_CRITERION)

    if not is_ui and any(keyword in lower for keyword in TESTABLE_KEYWORDS):
        criteria.append(TEST_CRITERION)

    if is_ui:
        criteria.append(BROWSER_CRITERION)

    return criteria


def parse_feature(raw_text: str, index: int) -> UserStory:
    """Parse a single feature line into a UserStory.

    Never fails: a line that cleans down to nothing still yields a
    well-formed (if empty-titled) story.

    Args:
        raw_text: One non-blank feature line.
        index: Zero-based position among the non-blank features.

    Returns:
        UserStory with priority index + 1 and passes=False.
    """
    cleaned = clean_feature(raw_text)
    is_ui = is_ui_feature(cleaned)

    return UserStory(
        id=make_story_id(index),
        title=make_title(cleaned),
        description=(
            f"As a user, I want {cleaned.lower()} so that the application meets my needs."
        ),
        acceptance_criteria=generate_acceptance_criteria(cleaned, is_ui),
        priority=index + 1,
        passes=False,
        notes="",
    )
