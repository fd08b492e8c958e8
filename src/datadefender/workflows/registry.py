"""Workflow registry.

The CLI builds every workflow through `make_workflow(kind)`:

- file-discovery    -> FileDiscoverer
- column-discovery  -> ColumnDiscoverer   (database-discovery -c)
- data-discovery    -> DataDiscoverer     (database-discovery -d)
- anonymize         -> DatabaseAnonymizer
- generate          -> DataGenerator

Replacing a built-in (or adding a new kind) is done with register_workflow(),
without touching the CLI.
"""

from __future__ import annotations
from typing import Callable, Dict, List
from .base import Workflow

def _make_file_discoverer() -> Workflow:
    from .file_discovery import FileDiscoverer
    return FileDiscoverer()

def _make_column_discoverer() -> Workflow:
    from .column_discovery import ColumnDiscoverer
    return ColumnDiscoverer()

def _make_data_discoverer() -> Workflow:
    from .data_discovery import DataDiscoverer
    return DataDiscoverer()

def _make_anonymizer() -> Workflow:
    from .anonymizer import DatabaseAnonymizer
    return DatabaseAnonymizer()

def _make_generator() -> Workflow:
    from .generator import DataGenerator
    return DataGenerator()

# Static registry (built-in workflows)
_STATIC_REGISTRY: Dict[str, Callable[[], Workflow]] = {
    "file-discovery": _make_file_discoverer,
    "column-discovery": _make_column_discoverer,
    "data-discovery": _make_data_discoverer,
    "anonymize": _make_anonymizer,
    "generate": _make_generator,
}

# Dynamic registry (plugins/overrides), checked first
_DYNAMIC_REGISTRY: Dict[str, Callable[[], Workflow]] = {}

def register_workflow(kind: str, factory: Callable[[], Workflow]) -> None:
    """Register a workflow factory, overriding a built-in of the same kind."""
    _DYNAMIC_REGISTRY[kind] = factory

def unregister_workflow(kind: str) -> None:
    """Unregister a dynamically registered workflow."""
    if kind in _DYNAMIC_REGISTRY:
        del _DYNAMIC_REGISTRY[kind]

def list_workflows() -> List[str]:
    return sorted(set(_STATIC_REGISTRY) | set(_DYNAMIC_REGISTRY))

def make_workflow(kind: str) -> Workflow:
    if kind in _DYNAMIC_REGISTRY:
        return _DYNAMIC_REGISTRY[kind]()
    if kind in _STATIC_REGISTRY:
        return _STATIC_REGISTRY[kind]()
    raise ValueError(
        f"Unknown workflow kind: {kind}. "
        f"Available: {list_workflows()}. "
        f"Register dynamically with register_workflow()"
    )
