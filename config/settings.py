"""Import and export of routing rule settings as JSON."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from selector import PriorityWeights

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_STEM = "rules"


class SettingsImportError(ValueError):
    """Settings file could not be parsed or has the wrong shape."""
    pass


@dataclass(frozen=True)
class SettingsUpdate:
    """Fields found in an imported settings file; None means absent."""
    name: Optional[str] = None
    weights: Optional[PriorityWeights] = None


def settings_filename(name: str) -> str:
    """File name for a rule set; never leaves the target directory."""
    stem = re.sub(r"[\s\\/]+", "_", name).lstrip(".") or DEFAULT_SETTINGS_STEM
    return f"{stem}.json"


def _reject_constant(token: str):
    # json.loads accepts NaN and Infinity, which are not JSON
    raise SettingsImportError(f"Invalid JSON file: unsupported constant {token}")


def dump_settings(name: str, weights: PriorityWeights) -> str:
    return json.dumps({"name": name, "priority": weights.to_dict()}, indent=2)


def parse_settings(text: str) -> SettingsUpdate:
    """Parse an exported settings document.

    Only truthy `priority` and `name` fields are applied; both may be
    missing.

    Raises:
        SettingsImportError: invalid JSON or malformed fields
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise SettingsImportError(f"Invalid JSON file: {e}") from e

    if not isinstance(data, dict):
        raise SettingsImportError("Invalid settings file: expected a JSON object")

    weights = None
    if data.get("priority"):
        try:
            weights = PriorityWeights.from_dict(data["priority"])
        except ValueError as e:
            raise SettingsImportError(f"Invalid settings file: {e}") from e

    name = None
    if data.get("name"):
        if not isinstance(data["name"], str):
            raise SettingsImportError("Invalid settings file: 'name' must be a string")
        name = data["name"]

    return SettingsUpdate(name=name, weights=weights)


def export_settings(directory: Union[str, Path], name: str, weights: PriorityWeights) -> Path:
    """Write the settings file into `directory`, returning its path."""
    path = Path(directory) / settings_filename(name)
    path.write_text(dump_settings(name, weights), encoding="utf-8")
    logger.info("[settings] Exported '%s' to %s", name, path)
    return path


def read_settings_text(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SettingsImportError(f"Invalid JSON file: {e}") from e


def read_settings(path: Union[str, Path]) -> SettingsUpdate:
    return parse_settings(read_settings_text(path))
