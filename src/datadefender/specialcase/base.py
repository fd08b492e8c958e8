"""Special-case detection primitives.

A special case is a named semantic PII category (email, credit card, national id...).
A detector classifies ONE raw candidate value:

- match: stamp `model` + `average_probability` on the supplied carrier and return it
- no match (including None/empty text): return None, which callers read as "no finding"

Detectors are stateless; the result depends on the text only, never on carrier fields.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, TypeVar, Union
from ..metadata import FileMatchMetaData, MatchMetaData

Carrier = TypeVar("Carrier", bound=Union[MatchMetaData, FileMatchMetaData])

class SpecialCase(ABC):
    name: str

    @abstractmethod
    def detect(self, metadata: Carrier, text: Optional[str]) -> Optional[Carrier]:
        raise NotImplementedError

    def _stamp(self, metadata: Carrier, probability: float = 1.0) -> Carrier:
        metadata.model = self.name
        metadata.average_probability = probability
        return metadata
