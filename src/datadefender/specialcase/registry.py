"""Special-case detector registry.

Detectors are kept in registration order. `detect_first` offers a value to each
one in turn and stops at the first that classifies it. A plugin contributes a
`SpecialCase` subclass instance through `register_detector`; the email detector
is registered when `datadefender.specialcase` is imported.
"""

from __future__ import annotations
from typing import Iterable, List, Optional
from .base import Carrier, SpecialCase

_DETECTORS: List[SpecialCase] = []

def register_detector(detector: SpecialCase) -> None:
    """Register a special-case detector. Duplicate names are ignored."""
    existing_names = [d.name for d in _DETECTORS]
    if detector.name not in existing_names:
        _DETECTORS.append(detector)

def unregister_detector(name: str) -> None:
    _DETECTORS[:] = [d for d in _DETECTORS if d.name != name]

def list_detectors() -> List[str]:
    return [d.name for d in _DETECTORS]

def get_detector(name: str) -> SpecialCase:
    for d in _DETECTORS:
        if d.name == name:
            return d
    raise ValueError(f"Unknown special case: {name}. Available: {list_detectors()}")

def detect_first(metadata: Carrier, text: Optional[str],
                 models: Optional[Iterable[str]] = None) -> Optional[Carrier]:
    """Offer one candidate to the selected detectors (all by default) in registration order.

    Stops at the first match so a carrier is never stamped twice.
    """
    detectors = list(_DETECTORS) if models is None else [get_detector(m) for m in models]
    for d in detectors:
        found = d.detect(metadata, text)
        if found is not None:
            return found
    return None
