"""Property file loader.

Property files are YAML mappings with simple keys used by the workflows.
Keeping them in YAML allows:
- easy review by privacy/compliance
- versioned configuration across runs
- non-engineers to propose changes safely

A top-level YAML list is read as a set of keys (column-discovery patterns are usually written that way).
"""

from __future__ import annotations
from typing import Any, Dict, List
import yaml

def load_properties(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if isinstance(data, list):
        return dict.fromkeys(str(item) for item in data)
    if not isinstance(data, dict):
        raise ValueError(f"Property file {path} must contain a mapping, got {type(data).__name__}")
    return data

def get_list(props: Dict[str, Any], key: str) -> List[str]:
    """Read a list-valued property written either as a YAML list or as a comma-separated string."""
    value = props.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = str(value).split(",")
    return [s.strip() for s in items if s.strip()]
