"""Helpers shared by the CLI commands.

Logging setup, platform-safe status symbols, and readers for the files
the CLI accepts (feature lists and reference documents).
"""

import logging
import sys
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler

# Windows-compatible symbols (cp1252 doesn't support Unicode checkmarks)
if sys.platform == "win32":
    SYM_OK = "[OK]"
    SYM_FAIL = "[X]"
    SYM_WARN = "[!]"
else:
    SYM_OK = "✓"
    SYM_FAIL = "✗"
    SYM_WARN = "!"

# Reference documents are placed under this bundle directory
REFERENCE_DOCS_DIR = "docs"


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich on stderr.

    Args:
        verbose: Show DEBUG messages instead of only warnings and errors.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def read_features_file(path: Path | str) -> list[str]:
    """Read one feature per line; blank lines are kept for the builder to drop."""
    return Path(path).read_text(encoding="utf-8").splitlines()


def load_reference_docs(paths: Iterable[Path | str]) -> dict[str, str]:
    """Read reference documents keyed by their bundle path (docs/<name>).

    Raises:
        ValueError: If two documents share a file name.
    """
    docs: dict[str, str] = {}
    for path in paths:
        path = Path(path)
        key = f"{REFERENCE_DOCS_DIR}/{path.name}"
        if key in docs:
            raise ValueError(f"Duplicate reference document name: {path.name}")
        docs[key] = path.read_text(encoding="utf-8")
    return docs
