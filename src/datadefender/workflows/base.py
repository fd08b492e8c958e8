"""Workflow plugin interface.

Workflows are what the CLI dispatches to. Each one must:
- accept a WorkflowContext (loaded properties + optional database factory + table filter)
- run to completion or raise (the CLI does not catch workflow errors)

Discoverers additionally keep their findings so a requirement file can be written afterwards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
from ..database.factory import DBFactory
from ..metadata import MatchMetaData
from ..requirement import write_requirement

@dataclass
class WorkflowContext:
    properties: Dict[str, Any]
    db_factory: Optional[DBFactory] = None
    db_properties: Dict[str, Any] = field(default_factory=dict)
    # lower-cased; empty means every table
    tables: Set[str] = field(default_factory=set)

    def wants_table(self, name: str) -> bool:
        return not self.tables or name.lower() in self.tables

    def require_db(self) -> DBFactory:
        if self.db_factory is None:
            raise ValueError("This workflow needs a database factory")
        return self.db_factory

class Workflow(ABC):
    name: str = "workflow"

    @abstractmethod
    def run(self, ctx: WorkflowContext) -> Any:
        ...

class Discoverer(Workflow):
    def __init__(self):
        self.findings: List[Any] = []

    def create_requirement(self, path: str) -> None:
        matches = [f for f in self.findings if isinstance(f, MatchMetaData)]
        write_requirement(path, matches)
