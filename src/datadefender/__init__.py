"""datadefender

Discover, anonymize and generate data that may contain PII.

Public API surface:
- datadefender.cli.main : CLI entrypoint (file-discovery | database-discovery | anonymize | generate)
- datadefender.specialcase : add/extend special-case detectors (email, ...)
- datadefender.workflows : add/extend workflows dispatched by the CLI
- datadefender.metadata : match metadata carriers filled by detectors
"""
__all__ = ["__version__", "APP_NAME"]
__version__ = "2.0.0"
APP_NAME = "DataDefender"
