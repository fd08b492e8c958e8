"""Column discovery (database-discovery -c).

Matches column names against the regular expressions listed in
columndiscovery.yaml, case-insensitively:

```yaml
- .*email.*
- fname|first_name
- (?:^|_)ssn$
```
"""

from __future__ import annotations
import logging
import re
from typing import List
from ..metadata import MatchMetaData
from ..report import print_findings
from .base import Discoverer, WorkflowContext

log = logging.getLogger(__name__)

class ColumnDiscoverer(Discoverer):
    name = "column-discovery"

    def run(self, ctx: WorkflowContext) -> List[MatchMetaData]:
        db = ctx.require_db()
        patterns = [re.compile(str(p), re.IGNORECASE) for p in ctx.properties]
        log.info("Column discovery on %s with %d pattern(s)", db.vendor, len(patterns))

        for table in db.table_names():
            if not ctx.wants_table(table):
                continue
            for col in db.columns(table):
                name = col["name"]
                if any(p.search(name) for p in patterns):
                    log.debug("Column %s.%s matches", table, name)
                    self.findings.append(MatchMetaData(
                        schema=db.schema, table=table, column=name, column_type=str(col["type"]),
                    ))

        print_findings("Column discovery", self.findings)
        return self.findings
