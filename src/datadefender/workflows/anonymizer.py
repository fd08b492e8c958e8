"""Database anonymizer.

Rewrites every column listed in the requirement file:
- mask: replace non-null values with a token like <PII:EMAIL>
- null: set the column to NULL

Properties (anonymizer.yaml):
```yaml
requirement: Sample-Requirement.yaml
```
"""

from __future__ import annotations
import logging
from typing import Dict, Optional
from sqlalchemy import column, table as sql_table, update
from ..requirement import load_requirement
from .base import Workflow, WorkflowContext

log = logging.getLogger(__name__)

def mask_token(model: Optional[str]) -> str:
    return f"<PII:{(model or 'value').upper()}>"

class DatabaseAnonymizer(Workflow):
    name = "anonymize"

    def run(self, ctx: WorkflowContext) -> Dict[str, int]:
        db = ctx.require_db()
        tables = load_requirement(str(ctx.properties["requirement"]))
        updated: Dict[str, int] = {}

        with db.begin() as conn:
            for t in tables:
                if not ctx.wants_table(t.name):
                    continue
                for c in t.columns:
                    st = sql_table(t.name, column(c.name), schema=db.schema)
                    col = st.c[c.name]
                    if c.function == "null":
                        stmt = update(st).values({c.name: None})
                    else:
                        stmt = update(st).where(col.is_not(None)).values({c.name: mask_token(c.model)})
                    result = conn.execute(stmt)
                    updated[f"{t.name}.{c.name}"] = result.rowcount
                    log.info("Anonymized %s.%s (%s): %d row(s)", t.name, c.name, c.function, result.rowcount)

        return updated
