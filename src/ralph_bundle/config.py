"""Loading BundleConfig overrides from a JSON file."""

import json
from pathlib import Path

from pydantic import ValidationError

from .models import BundleConfig


class ConfigError(ValueError):
    """Raised when a config file cannot be loaded."""


def load_config(path: Path | str) -> BundleConfig:
    """Load and validate a BundleConfig from JSON.

    Keys not present in the file keep their defaults.

    Args:
        path: Path to the JSON config file.

    Returns:
        Validated BundleConfig.

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation.
    """
    path = Path(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON ({path}): {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {path}")

    try:
        return BundleConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}:\n{e}") from e
