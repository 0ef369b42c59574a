"""Logic for loading and merging kernel settings."""

import copy
from pathlib import Path
from typing import Any

import yaml

from cascadefs.deep_merge import deep_merge

DEFAULT_SETTINGS: dict[str, Any] = {
    "base_url": "/",
    "index_file": "index.py",
    "charset": "utf-8",
    "errors": True,
    "reporting": "all",
    "profile": False,
    "caching": False,
    "expose": False,
    "timezone": "Europe/Vienna",
    "locale": "en_US.utf-8",
    "cookie": {
        "salt": False,
        "httponly": False,
        "secure": False,
        "domain": None,
    },
    "view_template": "",
    # Regex patterns, matched in full against the request host
    "trusted_hosts": [],
    # Suffix of message/config/i18n data files
    "data_extension": "yaml",
    # Relative paths are resolved against the document root
    "vendor_dir": "vendor",
    "cache_dir": None,
    # Static modules registered after discovery (namespace -> root)
    "modules": {},
}


def load_settings(path: str | Path | None = None) -> dict[str, Any]:
    """Load settings from a YAML file and merge them with the defaults."""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if path:
        p = Path(path)
        if p.exists():
            user_settings = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            settings = deep_merge(settings, user_settings)
    return settings
