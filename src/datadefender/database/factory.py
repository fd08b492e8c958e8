"""Database handle factory.

Wraps one SQLAlchemy engine built from the database property file:

```yaml
vendor: postgresql
url: postgresql+psycopg2://db.example.com/hr
username: reader        # optional, merged into url
password: secret        # optional, merged into url
schema: public          # optional
include-tables: users, orders   # optional, used when no tables are given on the command line
```

The factory is a scoped resource: use it in a `with` block so the engine's
connection pool is disposed on every exit path.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Connection, Engine, make_url

log = logging.getLogger(__name__)

class DBFactory:
    def __init__(self, props: Dict[str, Any]):
        self.vendor = str(props["vendor"]).lower()
        self.schema: Optional[str] = props.get("schema") or None
        url = make_url(str(props["url"]))
        if props.get("username"):
            url = url.set(username=str(props["username"]))
        if props.get("password"):
            url = url.set(password=str(props["password"]))
        self.url = url
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            log.debug("Creating %s engine for %s", self.vendor, self.url.render_as_string(hide_password=True))
            self._engine = create_engine(self.url)
        return self._engine

    def connect(self) -> Connection:
        return self.engine.connect()

    def begin(self):
        """Connection inside a transaction committed on success."""
        return self.engine.begin()

    def table_names(self) -> List[str]:
        return inspect(self.engine).get_table_names(schema=self.schema)

    def columns(self, table: str) -> List[Dict[str, Any]]:
        return inspect(self.engine).get_columns(table, schema=self.schema)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "DBFactory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

def get_db_factory(props: Dict[str, Any]) -> DBFactory:
    return DBFactory(props)
