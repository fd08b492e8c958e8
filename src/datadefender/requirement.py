"""Requirement artifact.

Discovery can write the sensitive columns it found to a YAML requirement file;
`anonymize` and `generate` read the same file to know what to touch.

```yaml
version: "1.0"
tables:
  - name: users
    columns:
      - name: email
        model: email
        function: mask      # mask | null
```
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import yaml
from .metadata import MatchMetaData

log = logging.getLogger(__name__)

REQUIREMENT_VERSION = "1.0"
FUNCTIONS = ("mask", "null")

@dataclass
class RequiredColumn:
    name: str
    model: Optional[str] = None
    function: str = "mask"

@dataclass
class RequiredTable:
    name: str
    columns: List[RequiredColumn] = field(default_factory=list)

def from_findings(findings: Iterable[MatchMetaData]) -> List[RequiredTable]:
    tables: Dict[str, RequiredTable] = {}
    for f in findings:
        t = tables.setdefault(f.table, RequiredTable(name=f.table))
        if all(c.name != f.column for c in t.columns):
            t.columns.append(RequiredColumn(name=f.column, model=f.model))
    return list(tables.values())

def write_requirement(path: str, findings: Iterable[MatchMetaData]) -> List[RequiredTable]:
    tables = from_findings(findings)
    doc: Dict[str, Any] = {"version": REQUIREMENT_VERSION, "tables": []}
    for t in tables:
        cols = []
        for c in t.columns:
            col: Dict[str, Any] = {"name": c.name}
            if c.model:
                col["model"] = c.model
            col["function"] = c.function
            cols.append(col)
        doc["tables"].append({"name": t.name, "columns": cols})
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(doc, f, sort_keys=False)
    log.info("Requirement file %s created with %d table(s)", path, len(tables))
    return tables

def load_requirement(path: str) -> List[RequiredTable]:
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    tables = []
    for t in doc.get("tables") or []:
        columns = []
        for c in t.get("columns") or []:
            function = str(c.get("function", "mask")).lower()
            if function not in FUNCTIONS:
                raise ValueError(f"Unknown function '{function}' for {t['name']}.{c['name']} in {path}. Available: {list(FUNCTIONS)}")
            columns.append(RequiredColumn(name=c["name"], model=c.get("model"), function=function))
        tables.append(RequiredTable(name=t["name"], columns=columns))
    return tables
