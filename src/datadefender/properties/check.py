"""Property validity checks.

Every check returns a list of human-readable errors; an empty list means the
workflow may run. Nothing here raises for a bad file: the orchestrator displays
the errors and stops before any workflow is built.
"""

from __future__ import annotations
import os
import re
from typing import Any, Dict, List, Optional
import yaml
from .loader import get_list, load_properties
# Import specialcase to trigger auto-registration
import datadefender.specialcase  # noqa: F401
from ..specialcase.registry import list_detectors

MODE_NONE = " "
MODE_COLUMNS = "c"
MODE_DATA = "d"

SUPPORTED_VENDORS = ("sqlite", "postgresql", "mysql", "mssql", "oracle")

DEFAULT_DATABASE_PROPERTIES = "db.yaml"
DEFAULT_PROPERTY_FILES = {
    ("file-discovery", MODE_NONE): "filediscovery.yaml",
    ("anonymize", MODE_NONE): "anonymizer.yaml",
    ("generate", MODE_NONE): "anonymizer.yaml",
    ("database-discovery", MODE_COLUMNS): "columndiscovery.yaml",
    ("database-discovery", MODE_DATA): "datadiscovery.yaml",
}

def _read(path: str, errors: List[str]) -> Optional[Dict[str, Any]]:
    if not os.path.isfile(path):
        errors.append(f"Property file {path} does not exist")
        return None
    try:
        return load_properties(path)
    except (yaml.YAMLError, ValueError) as e:
        errors.append(f"Property file {path} cannot be parsed: {e}")
        return None

def _require(props: Dict[str, Any], path: str, keys: List[str], errors: List[str]) -> None:
    for key in keys:
        if props.get(key) in (None, ""):
            errors.append(f"Property '{key}' is not defined in {path}")

def check_database_properties(path: str = DEFAULT_DATABASE_PROPERTIES) -> List[str]:
    errors: List[str] = []
    props = _read(path, errors)
    if props is None:
        return errors
    _require(props, path, ["vendor", "url"], errors)
    vendor = props.get("vendor")
    if vendor and str(vendor).lower() not in SUPPORTED_VENDORS:
        errors.append(f"Database vendor '{vendor}' is not supported. Supported: {list(SUPPORTED_VENDORS)}")
    return errors

def _check_file_discovery(props, path, errors):
    _require(props, path, ["directories"], errors)
    for d in get_list(props, "directories"):
        if not os.path.isdir(d):
            errors.append(f"Directory {d} listed in {path} does not exist")
    _check_models(props, path, errors)

def _check_requirement(props, path, errors):
    _require(props, path, ["requirement"], errors)
    requirement = props.get("requirement")
    if requirement and not os.path.isfile(str(requirement)):
        errors.append(f"Requirement file {requirement} listed in {path} does not exist")

def _check_columns(props, path, errors):
    if not props:
        errors.append(f"No column patterns defined in {path}")
    for pattern in props:
        try:
            re.compile(str(pattern))
        except re.error as e:
            errors.append(f"Column pattern '{pattern}' in {path} is not a valid regular expression: {e}")

def _check_data(props, path, errors):
    _check_models(props, path, errors)
    limit = props.get("limit")
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0):
        errors.append(f"Property 'limit' in {path} must be a positive integer")

def _check_models(props, path, errors):
    available = list_detectors()
    for m in get_list(props, "models"):
        if m not in available:
            errors.append(f"Special case '{m}' in {path} is not registered. Available: {available}")

_CHECKS = {
    ("file-discovery", MODE_NONE): _check_file_discovery,
    ("anonymize", MODE_NONE): _check_requirement,
    ("generate", MODE_NONE): _check_requirement,
    ("database-discovery", MODE_COLUMNS): _check_columns,
    ("database-discovery", MODE_DATA): _check_data,
}

def check(command: str, mode: str = MODE_NONE, path: Optional[str] = None) -> List[str]:
    """Validate the property file a command (and discovery mode) needs."""
    key = (command, mode)
    if key not in _CHECKS:
        return [f"No property check defined for command '{command}' (mode '{mode.strip()}')"]
    path = path or DEFAULT_PROPERTY_FILES[key]
    errors: List[str] = []
    props = _read(path, errors)
    if props is not None:
        _CHECKS[key](props, path, errors)
    return errors
