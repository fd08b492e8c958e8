"""Special-case detection package.

Auto-registers built-in detectors on import so discovery workflows can use them.
"""

def _auto_register_detectors():
    """Register built-in special-case detectors."""
    from .registry import list_detectors, register_detector
    from .detectors.email import EmailDetector

    if 'email' not in list_detectors():
        register_detector(EmailDetector())

_auto_register_detectors()
