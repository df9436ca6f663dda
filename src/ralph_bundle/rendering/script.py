"""ralph.sh rendering.

The driver script is a bounded retry loop:

    ARCHIVE-CHECK -> INIT-LOG -> ITERATE(1..N) -> SUCCESS | EXHAUSTED

It archives the previous run when the PRD's branch changes, then invokes
the provider command once per iteration until the output contains the
completion sentinel (exit 0) or the ceiling is reached (exit 1).
"""

from typing import Optional

from ..constants import (
    ARCHIVE_DIRNAME,
    BRANCH_PREFIX,
    COMPLETION_SENTINEL,
    LAST_BRANCH_FILENAME,
    PRD_FILENAME,
    PROGRESS_FILENAME,
    PROGRESS_HEADER,
    SCRIPT_DIR,
    SCRIPT_FILENAME,
)
from ..models import BundleConfig, LlmProvider
from ..providers import build_llm_command, get_profile

# Path from the script directory back to the bundle root
ROOT_FROM_SCRIPT_DIR = "/".join([".."] * len(SCRIPT_DIR.split("/")))


SCRIPT_TEMPLATE = '''#!/bin/bash
# Ralph Wiggum - Long-running AI agent loop
# Provider: {provider_name}
# Usage: ./{script_file} [max_iterations]
#
# This script runs an autonomous AI loop that works through stories
# in {prd_file} until all pass or max iterations is reached.

set -e

MAX_ITERATIONS=${{1:-{max_iterations}}}
SCRIPT_DIR="$(cd "$(dirname "${{BASH_SOURCE[0]}}")" && pwd)"
ROOT_DIR="$(cd "$SCRIPT_DIR/{root_from_script}" && pwd)"
PRD_FILE="$SCRIPT_DIR/{prd_file}"
PROGRESS_FILE="$ROOT_DIR/{progress_file}"
ARCHIVE_DIR="$SCRIPT_DIR/{archive_dir}"
LAST_BRANCH_FILE="$SCRIPT_DIR/{last_branch_file}"

if ! [[ "$MAX_ITERATIONS" =~ ^[1-9][0-9]*$ ]]; then
  echo "max_iterations must be a positive integer (got: $MAX_ITERATIONS)" >&2
  exit 2
fi

read_branch() {{
  jq -r '.branchName // empty' "$PRD_FILE" 2>/dev/null || echo ""
}}

init_progress() {{
  echo "{progress_header}" > "$PROGRESS_FILE"
  echo "Started: $(date)" >> "$PROGRESS_FILE"
  echo "---" >> "$PROGRESS_FILE"
}}

# Archive previous run if branch changed
if [ -f "$PRD_FILE" ] && [ -f "$LAST_BRANCH_FILE" ]; then
  CURRENT_BRANCH=$(read_branch)
  LAST_BRANCH=$(cat "$LAST_BRANCH_FILE" 2>/dev/null || echo "")

  if [ -n "$CURRENT_BRANCH" ] && [ -n "$LAST_BRANCH" ] && [ "$CURRENT_BRANCH" != "$LAST_BRANCH" ]; then
    DATE=$(date +%Y-%m-%d)
    # Strip the namespace prefix from the branch name for the folder
    FOLDER_NAME=$(echo "$LAST_BRANCH" | sed 's|^{branch_prefix}||')
    ARCHIVE_FOLDER="$ARCHIVE_DIR/$DATE-$FOLDER_NAME"

    echo "Archiving previous run: $LAST_BRANCH"
    mkdir -p "$ARCHIVE_FOLDER"
    [ -f "$PRD_FILE" ] && cp "$PRD_FILE" "$ARCHIVE_FOLDER/"
    [ -f "$PROGRESS_FILE" ] && cp "$PROGRESS_FILE" "$ARCHIVE_FOLDER/"
    echo "   Archived to: $ARCHIVE_FOLDER"

    init_progress
  fi
fi

# Track current branch
if [ -f "$PRD_FILE" ]; then
  CURRENT_BRANCH=$(read_branch)
  if [ -n "$CURRENT_BRANCH" ]; then
    echo "$CURRENT_BRANCH" > "$LAST_BRANCH_FILE"
  fi
fi

if [ ! -f "$PROGRESS_FILE" ]; then
  init_progress
fi

echo "Starting Ralph - Max iterations: $MAX_ITERATIONS"
echo "Provider: {provider_name}"

for i in $(seq 1 "$MAX_ITERATIONS"); do
  echo ""
  echo "======================================================="
  echo "  Ralph Iteration $i of $MAX_ITERATIONS"
  echo "======================================================="

  # Run {provider_name} with the ralph prompt
  OUTPUT=$({llm_command} 2>&1 | tee /dev/stderr) || true

  if echo "$OUTPUT" | grep -qF "{sentinel}"; then
    echo ""
    echo "Ralph completed all tasks!"
    echo "Completed at iteration $i of $MAX_ITERATIONS"
    exit 0
  fi

  echo "Iteration $i complete. Continuing..."
  sleep {delay}
done

echo ""
echo "Ralph reached max iterations ($MAX_ITERATIONS) without completing all tasks."
echo "Check $PROGRESS_FILE for status."
exit 1
'''


def render_script(provider: LlmProvider | str, config: Optional[BundleConfig] = None) -> str:
    """Render ralph.sh for a provider.

    Args:
        provider: Catalog key of the provider to invoke.
        config: Iteration ceiling, delay and --max-tokens; defaults if None.

    Returns:
        Bash script text.
    """
    config = config or BundleConfig()
    profile = get_profile(provider)

    return SCRIPT_TEMPLATE.format(
        provider_name=profile.display_name,
        llm_command=build_llm_command(profile, max_tokens=config.cli_max_tokens),
        max_iterations=config.max_iterations,
        delay=config.iteration_delay_seconds,
        script_file=SCRIPT_FILENAME,
        root_from_script=ROOT_FROM_SCRIPT_DIR,
        prd_file=PRD_FILENAME,
        progress_file=PROGRESS_FILENAME,
        progress_header=PROGRESS_HEADER,
        archive_dir=ARCHIVE_DIRNAME,
        last_branch_file=LAST_BRANCH_FILENAME,
        branch_prefix=BRANCH_PREFIX,
        sentinel=COMPLETION_SENTINEL,
    )
