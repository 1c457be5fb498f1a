"""Reading plugin.json properties."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .version import Version, parse_version

logger = logging.getLogger(__name__)

PLUGIN_JSON_FILE = "plugin.json"


def read_plugin_properties(path: Path | str) -> dict[str, Any]:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read %s: %s", path.name, e)
        raise
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a JSON object, got {type(data).__name__}")
    return data


def plugin_version(path: Path | str) -> Version:
    """Parse the ``version`` field of a plugin properties file."""
    props = read_plugin_properties(path)
    version = props.get("version")
    if not isinstance(version, str):
        raise ValueError(f"{Path(path).name}: missing string field 'version'")
    return parse_version(version)


def plugin_id(path: Path | str) -> str:
    props = read_plugin_properties(path)
    ident = props.get("id") or props.get("name")
    if not isinstance(ident, str) or not ident:
        raise ValueError(f"{Path(path).name}: missing field 'id'")
    return ident
