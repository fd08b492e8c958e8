"""Data generator.

Dumps the distinct values of every requirement column into
`<data_dir>/<table>_<column>.txt`, one value per line. The files serve as
dictionaries for synthesizing replacement data.

Properties (anonymizer.yaml, shared with `anonymize`):
```yaml
requirement: Sample-Requirement.yaml
data_dir: data      # optional
```
"""

from __future__ import annotations
import logging
import os
from typing import List
from sqlalchemy import column, select, table as sql_table
from ..requirement import load_requirement
from .base import Workflow, WorkflowContext

log = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data"

class DataGenerator(Workflow):
    name = "generate"

    def run(self, ctx: WorkflowContext) -> List[str]:
        db = ctx.require_db()
        tables = load_requirement(str(ctx.properties["requirement"]))
        data_dir = str(ctx.properties.get("data_dir") or DEFAULT_DATA_DIR)
        os.makedirs(data_dir, exist_ok=True)
        written = []

        with db.connect() as conn:
            for t in tables:
                if not ctx.wants_table(t.name):
                    continue
                for c in t.columns:
                    col = sql_table(t.name, column(c.name), schema=db.schema).c[c.name]
                    stmt = select(col).where(col.is_not(None)).distinct().order_by(col)
                    values = [str(v) for (v,) in conn.execute(stmt)]
                    path = os.path.join(data_dir, f"{t.name}_{c.name}.txt")
                    with open(path, "w", encoding="utf-8") as f:
                        f.writelines(v + "\n" for v in values)
                    log.info("Generated %s with %d value(s)", path, len(values))
                    written.append(path)

        return written
