"""Simple module to load configuration from file"""

import json
import os
from pathlib import Path
from typing import Any

# Parse configuration file (if it exists)
cfg: dict[str, Any]
cfg_path = os.environ.get("MATHREVEAL_CONFIG", "~/.config/mathreveal/mathreveal.json")
cfg_file = Path(cfg_path).expanduser()
if cfg_file.exists():
    with cfg_file.open(encoding="utf8") as f:
        cfg = json.load(f)
else:
    cfg = {}


CFG_DEFAULT_VALUES: dict[str, Any] = {
    "cache_size": 32,
    "engine": "mathml",
    "json_view": True,
    "link_target_blank": True,
    "log_level": "WARNING",
    "markdown_extensions": ["tables", "fenced_code", "sane_lists"],
    "reveal": True,
    "reveal_duration_ms": 1000,
    "reveal_stagger_ms": 0,
    "strict": False,
}

# Ensure that cfg has required keys
for required, default in CFG_DEFAULT_VALUES.items():
    if required not in cfg:
        cfg[required] = default


# Ensure that extensions are stored as a list of names
if isinstance(cfg["markdown_extensions"], str):
    cfg["markdown_extensions"] = cfg["markdown_extensions"].split()
