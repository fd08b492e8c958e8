"""Match metadata carriers.

One carrier describes one candidate PII occurrence and, once a detector has
classified it, the classification result.

- MatchMetaData: a value coming from a database column
- FileMatchMetaData: text extracted from a file

Discovery creates a fresh carrier per candidate; detectors fill `model` and
`average_probability` on a match and hand the same instance back.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

@dataclass
class _Classification:
    # set only by special-case detectors
    average_probability: float = 0.0   # 0..1
    model: Optional[str] = None        # e.g. "email"

    @property
    def is_match(self) -> bool:
        return self.model is not None and self.average_probability > 0.0

@dataclass
class MatchMetaData(_Classification):
    # identity
    schema: Optional[str] = None
    table: str = ""
    column: str = ""
    column_type: Optional[str] = None

    def __str__(self) -> str:
        name = f"{self.table}.{self.column}"
        return f"{self.schema}.{name}" if self.schema else name

@dataclass
class FileMatchMetaData(_Classification):
    # identity
    directory: str = ""
    file_name: str = ""

    @property
    def path(self) -> str:
        return os.path.join(self.directory, self.file_name)

    def __str__(self) -> str:
        return self.path
