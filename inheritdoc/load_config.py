"""Logic for loading run configuration from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from inheritdoc.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    # Directory scanned for XML documentation files (None: current directory)
    "base_path": None,
    # Directory scanned for DocFX *.yml metadata (None: base_path)
    "metadata_dir": None,
    "doc_file_patterns": [],
    "global_source_files": [],
    "exclude_types": ["System.Object"],
    "overwrite_existing": False,
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
