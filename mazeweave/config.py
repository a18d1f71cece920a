"""JSON configuration objects feeding command-line defaults."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional


def parse_config(config_path: Optional[str], config_json: Optional[str] = None) -> Dict[str, Any]:
    if config_path:
        payload = json.loads(Path(config_path).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("config file must contain a JSON object")
        return payload
    if config_json:
        payload = json.loads(config_json)
        if not isinstance(payload, dict):
            raise ValueError("config must be a JSON object")
        return payload
    return {}


def apply_config_defaults(parser: argparse.ArgumentParser, config: Dict[str, Any]) -> None:
    """Use ``config`` entries as defaults for matching parser options.

    Keys may be spelled with dashes or underscores. Unknown keys raise
    ``ValueError`` so typos do not go unnoticed.
    """

    known = {action.dest for action in parser._actions}
    defaults: Dict[str, Any] = {}
    for key, value in config.items():
        dest = key.replace("-", "_")
        if dest not in known:
            raise ValueError(f"Unknown config key '{key}'")
        defaults[dest] = value
    parser.set_defaults(**defaults)


def parse_with_config(parser: argparse.ArgumentParser, argv: Optional[list] = None) -> argparse.Namespace:
    """Parse ``argv`` twice: first to find ``--config``/``--config-json``, then
    with the configured values as defaults. The file wins when both are given.
    """

    preliminary, _ = parser.parse_known_args(argv)
    config_path = getattr(preliminary, "config", None)
    config_json = getattr(preliminary, "config_json", None)
    if config_path or config_json:
        apply_config_defaults(parser, parse_config(str(config_path) if config_path else None, config_json))
    return parser.parse_args(argv)


__all__ = ["parse_config", "apply_config_defaults", "parse_with_config"]
