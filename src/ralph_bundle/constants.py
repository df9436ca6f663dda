"""Shared constants for bundle generation.

The manifest, the prompt and the driver script all refer to these names,
so they live in one place.
"""

import re

# Branch identifiers are namespaced under this token
BRANCH_NAMESPACE = "ralph"
BRANCH_PREFIX = f"{BRANCH_NAMESPACE}/"

# Story identifiers: US-001, US-002, ...
STORY_ID_PREFIX = "US-"
STORY_ID_PATTERN = re.compile(r"^US-\d{3}$")

# Every story must carry this criterion
MANDATORY_CRITERION = "npm run typecheck passes"

# Marker the agent prints when every story passes; ralph.sh scans for it
COMPLETION_SENTINEL = "<promise>COMPLETE</promise>"

# Bundle layout (relative to the bundle root)
SCRIPT_DIR = "scripts/ralph"
TASKS_DIR = "tasks"
PRD_FILENAME = "prd.json"
PROMPT_FILENAME = "prompt.md"
SCRIPT_FILENAME = "ralph.sh"
PROGRESS_FILENAME = "progress.txt"
LAST_BRANCH_FILENAME = ".last-branch"
ARCHIVE_DIRNAME = "archive"

PROGRESS_HEADER = "# Ralph Progress Log"
