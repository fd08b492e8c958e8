"""Data discovery (database-discovery -d).

Samples the values of every character column and offers them to the
special-case detectors. A column becomes a finding on its first matching value.

Properties (datadiscovery.yaml):
```yaml
models: [email]   # optional, default: every registered detector
limit: 1000       # optional, rows sampled per column
```
"""

from __future__ import annotations
import logging
from typing import List
from sqlalchemy import String, column, select, table as sql_table
# Import specialcase to trigger auto-registration
import datadefender.specialcase  # noqa: F401
from ..metadata import MatchMetaData
from ..properties.loader import get_list
from ..report import print_findings
from ..specialcase.registry import detect_first
from .base import Discoverer, WorkflowContext

log = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000

class DataDiscoverer(Discoverer):
    name = "data-discovery"

    def run(self, ctx: WorkflowContext) -> List[MatchMetaData]:
        db = ctx.require_db()
        models = get_list(ctx.properties, "models") or None
        limit = int(ctx.properties.get("limit") or DEFAULT_LIMIT)
        log.info("Data discovery on %s, sampling %d row(s) per column", db.vendor, limit)

        with db.connect() as conn:
            for table in db.table_names():
                if not ctx.wants_table(table):
                    continue
                for col in db.columns(table):
                    if not isinstance(col["type"], String):
                        continue
                    t = sql_table(table, column(col["name"]), schema=db.schema)
                    c = t.c[col["name"]]
                    stmt = select(c).where(c.is_not(None)).limit(limit)
                    for (value,) in conn.execute(stmt):
                        meta = MatchMetaData(schema=db.schema, table=table, column=col["name"],
                                             column_type=str(col["type"]))
                        hit = detect_first(meta, str(value), models)
                        if hit is not None:
                            log.info("Column %s contains %s", hit, hit.model)
                            self.findings.append(hit)
                            break

        print_findings("Data discovery", self.findings)
        return self.findings
