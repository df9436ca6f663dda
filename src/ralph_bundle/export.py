"""Bundle export: lay out rendered artifacts and write them to disk.

Bundle layout:
    scripts/ralph/
    ├── ralph.sh        # Driver loop (executable)
    ├── prompt.md       # Agent instructions
    └── prd.json        # Manifest
    tasks/              # Empty, reserved for task files
    progress.txt        # Progress log seeded with a header
    docs/...            # Optional reference documents, copied verbatim
"""

import logging
import re
import stat
import zipfile
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Mapping, Optional

from .constants import (
    PRD_FILENAME,
    PROGRESS_FILENAME,
    PROGRESS_HEADER,
    PROMPT_FILENAME,
    SCRIPT_DIR,
    SCRIPT_FILENAME,
    TASKS_DIR,
)
from .rendering import GeneratedBundle

logger = logging.getLogger(__name__)

SCRIPT_PATH = f"{SCRIPT_DIR}/{SCRIPT_FILENAME}"

# Mode bits for files and directories written by the exporter
FILE_MODE = 0o644
EXECUTABLE_MODE = 0o755


def progress_log_seed(project_name: str, started_at: Optional[datetime] = None) -> str:
    """Initial content of progress.txt."""
    started_at = started_at or datetime.now(timezone.utc)
    return (
        f"{PROGRESS_HEADER}\n"
        f"Project: {project_name}\n"
        f"Started: {started_at.isoformat()}\n"
        f"---\n"
        f"\n"
        f"Ready for Ralph execution. Run `./{SCRIPT_PATH}` to begin.\n"
    )


def _check_relative_path(path: str) -> str:
    """Normalize a bundle-relative path, rejecting anything that escapes the root.

    Raises:
        ValueError: If the path is absolute, empty or contains '..'.
    """
    posix = PurePosixPath(path.replace("\\", "/"))
    if posix.is_absolute() or not posix.parts or ".." in posix.parts:
        raise ValueError(f"Reference document path must stay inside the bundle: {path}")
    return str(posix)


def bundle_files(
    bundle: GeneratedBundle,
    project_name: str,
    started_at: Optional[datetime] = None,
    reference_docs: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Map bundle-relative paths to file contents.

    Directory entries end with '/' and have empty content.

    Args:
        bundle: Rendered artifacts.
        project_name: Display name written into progress.txt.
        started_at: Timestamp for progress.txt (default: now, in UTC).
        reference_docs: Extra files as relative path -> content.

    Returns:
        Ordered mapping of path -> content.

    Raises:
        ValueError: If a reference path escapes the bundle or clashes with a generated file.
    """
    files: dict[str, str] = {
        SCRIPT_PATH: bundle.ralph_sh,
        f"{SCRIPT_DIR}/{PROMPT_FILENAME}": bundle.prompt_md,
        f"{SCRIPT_DIR}/{PRD_FILENAME}": bundle.prd_json,
        f"{TASKS_DIR}/": "",
        PROGRESS_FILENAME: progress_log_seed(project_name, started_at),
    }

    for path, content in (reference_docs or {}).items():
        rel_path = _check_relative_path(path)
        if rel_path in files or f"{rel_path}/" in files:
            raise ValueError(f"Reference document would overwrite a generated file: {rel_path}")
        files[rel_path] = content

    return files


def bundle_archive_name(project_name: str) -> str:
    """File name for the zip archive, e.g. ralph-bundle-my-cool-app.zip."""
    safe_name = re.sub(r"[^a-z0-9]", "-", project_name.lower())
    safe_name = re.sub(r"-+", "-", safe_name).strip("-")
    return f"ralph-bundle-{safe_name}.zip"


def _file_mode(path: str) -> int:
    return EXECUTABLE_MODE if path.endswith(".sh") else FILE_MODE


def write_zip(
    files: Mapping[str, str],
    archive_path: Path | str,
    timestamp: Optional[datetime] = None,
) -> Path:
    """Write the bundle as a zip archive.

    Args:
        files: Output of bundle_files().
        archive_path: Destination .zip file; parent directories are created.
        timestamp: Modification time stored for every entry (default: now).

    Returns:
        Path to the written archive.
    """
    archive_path = Path(archive_path)
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    date_time = (timestamp or datetime.now(timezone.utc)).timetuple()[:6]

    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path, content in files.items():
            info = zipfile.ZipInfo(path, date_time=date_time)
            if path.endswith("/"):
                info.external_attr = (stat.S_IFDIR | EXECUTABLE_MODE) << 16
                zf.writestr(info, "")
            else:
                info.external_attr = (stat.S_IFREG | _file_mode(path)) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, content)

    logger.info(f"Wrote {len(files)} entries to {archive_path}")
    return archive_path


def write_directory(files: Mapping[str, str], root: Path | str) -> Path:
    """Write the bundle as a directory tree.

    Existing files at the same paths are overwritten.

    Args:
        files: Output of bundle_files().
        root: Bundle root directory; created if missing.

    Returns:
        The bundle root.
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)

    for path, content in files.items():
        target = root / path
        if path.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8", newline="\n")
        target.chmod(_file_mode(path))

    logger.info(f"Wrote {len(files)} entries under {root}")
    return root
