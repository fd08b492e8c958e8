"""Shared fixtures for datadefender tests."""

import pytest
import yaml
from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine

from datadefender.workflows import registry
from datadefender.workflows.base import Discoverer


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def lock_dir(tmp_path):
    """Isolated directory for the application lock."""
    return str(tmp_path / "lock")


@pytest.fixture
def sqlite_db(tmp_path):
    """SQLite database with a users and an orders table."""
    path = tmp_path / "hr.db"
    engine = create_engine(f"sqlite:///{path}")
    meta = MetaData()
    users = Table(
        "users", meta,
        Column("id", Integer, primary_key=True),
        Column("first_name", String(50)),
        Column("email", String(100)),
        Column("notes", Text),
    )
    orders = Table(
        "orders", meta,
        Column("id", Integer, primary_key=True),
        Column("customer_contact", String(100)),
        Column("amount", Integer),
    )
    meta.create_all(engine)
    with engine.begin() as conn:
        conn.execute(users.insert(), [
            {"id": 1, "first_name": "John", "email": "john.doe@example.com", "notes": "vip"},
            {"id": 2, "first_name": "Jane", "email": "jane+news@mail.example.org", "notes": None},
            {"id": 3, "first_name": "Max", "email": None, "notes": "call back"},
        ])
        conn.execute(orders.insert(), [
            {"id": 1, "customer_contact": "not-an-email", "amount": 10},
            {"id": 2, "customer_contact": "buyer@shop.io", "amount": 20},
        ])
    engine.dispose()
    return path


@pytest.fixture
def db_properties(tmp_path, sqlite_db):
    """Valid database property file pointing at sqlite_db."""
    return write_yaml(tmp_path / "db.yaml", {"vendor": "sqlite", "url": f"sqlite:///{sqlite_db}"})


class RecordingWorkflow(Discoverer):
    """Workflow stand-in that records how it was run."""

    def __init__(self, kind, calls):
        super().__init__()
        self.name = kind
        self.calls = calls
        self.calls.append(("created", kind))

    def run(self, ctx):
        self.calls.append(("run", self.name, ctx))
        return []

    def create_requirement(self, path):
        self.calls.append(("requirement", self.name, path))


@pytest.fixture
def workflow_calls(monkeypatch):
    """Replace every built-in workflow with a RecordingWorkflow; returns the call log."""
    calls = []
    for kind in registry.list_workflows():
        monkeypatch.setitem(registry._DYNAMIC_REGISTRY, kind,
                            lambda kind=kind: RecordingWorkflow(kind, calls))
    return calls
