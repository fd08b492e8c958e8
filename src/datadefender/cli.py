"""CLI entrypoint.

Commands:
- `datadefender file-discovery [-F filediscovery.yaml]`
- `datadefender database-discovery -c [-C columndiscovery.yaml] [-r] [table ...]`
- `datadefender database-discovery -d [-D datadiscovery.yaml] [-r] [table ...]`
- `datadefender anonymize [-A anonymizer.yaml] [table ...]`
- `datadefender generate [-A anonymizer.yaml] [table ...]`

Every database command takes its connection from `-P db.yaml`.

Run order: application lock -> argument parsing -> property checks -> workflow.
Only one instance may run at a time. Execution time is logged on every exit path.

Exit codes:
- 0: done, help shown, or nothing to do
- 1: another instance is already active
- 2: property files failed validation
Errors raised by a workflow are not caught here.
"""

from __future__ import annotations
import argparse
import functools
import logging
import sys
import time
from typing import Callable, Dict, List, Optional, Set, Tuple
from . import APP_NAME
from .database.factory import get_db_factory
from .lock import ApplicationLock
from .logging_ import set_log_level, setup_logging
from .properties.check import (
    DEFAULT_DATABASE_PROPERTIES, DEFAULT_PROPERTY_FILES, MODE_COLUMNS, MODE_DATA, MODE_NONE,
    check, check_database_properties,
)
from .properties.loader import get_list, load_properties
from .workflows.base import Discoverer, WorkflowContext
from .workflows.registry import make_workflow

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ALREADY_RUNNING = 1
EXIT_INVALID_PROPERTIES = 2

DEFAULT_REQUIREMENT_FILE = "Sample-Requirement.yaml"

USAGE = ("datadefender anonymize|database-discovery|file-discovery|generate "
         "[options] [table1 [table2 [...]]]")

class CommandLineError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""

class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise CommandLineError(message)

def create_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="datadefender", usage=USAGE, add_help=False,
                        description="Discover, anonymize and generate data containing PII.")
    p.add_argument("-h", "--help", action="store_true", help="display help")
    p.add_argument("-A", "--anonymizer-properties", default=DEFAULT_PROPERTY_FILES[("anonymize", MODE_NONE)],
                   metavar="FILE", help="define anonymizer property file")
    p.add_argument("-c", "--columns", action="store_true",
                   help="discover candidate column names for anonymization based on provided patterns")
    p.add_argument("-C", "--column-properties", default=DEFAULT_PROPERTY_FILES[("database-discovery", MODE_COLUMNS)],
                   metavar="FILE", help="define column property file")
    p.add_argument("-d", "--data", action="store_true",
                   help="discover candidate column for anonymization based on special-case detectors")
    p.add_argument("-D", "--data-properties", default=DEFAULT_PROPERTY_FILES[("database-discovery", MODE_DATA)],
                   metavar="FILE", help="define data property file")
    p.add_argument("-r", "--requirement", action="store_true", help="create requirement file after discovery")
    p.add_argument("-R", "--requirement-file", default=DEFAULT_REQUIREMENT_FILE,
                   metavar="FILE", help="define requirement file name")
    p.add_argument("-P", "--database-properties", default=DEFAULT_DATABASE_PROPERTIES,
                   metavar="FILE", help="define database property file")
    p.add_argument("-F", "--file-discovery-properties", default=DEFAULT_PROPERTY_FILES[("file-discovery", MODE_NONE)],
                   metavar="FILE", help="define file discovery property file")
    p.add_argument("--debug", action="store_true", help="enable debug output")
    p.add_argument("args", nargs="*", metavar="command [table ...]")
    return p

def display_errors(errors: List[str]) -> None:
    for err in errors:
        log.error(err)

def display_execution_time(start_time: float) -> None:
    log.info("Execution time is %.5f seconds", time.time() - start_time)
    log.info("%s completed", APP_NAME)

def get_table_names(table_names: List[str], db_properties: Dict) -> Set[str]:
    """Lower-cased, de-duplicated table names.

    Falls back to the comma-separated `include-tables` database property when no
    names were given on the command line. An empty set means every table.
    """
    names = list(table_names)
    if not names:
        names = get_list(db_properties, "include-tables")
        if names:
            log.debug("Adding tables from property file.")
    tables = {n.lower() for n in names}
    log.info("Tables: %s", sorted(tables))
    return tables

def run_file_discovery(args: argparse.Namespace, tables: List[str]) -> int:
    path = args.file_discovery_properties
    errors = check("file-discovery", MODE_NONE, path)
    if errors:
        display_errors(errors)
        return EXIT_INVALID_PROPERTIES

    discoverer = make_workflow("file-discovery")
    discoverer.run(WorkflowContext(properties=load_properties(path)))
    return EXIT_OK

# command -> (workflow kind, check mode, property file); None when there is nothing to run
Selection = Optional[Tuple[str, str, str]]

def _select_anonymize(args: argparse.Namespace) -> Selection:
    return "anonymize", MODE_NONE, args.anonymizer_properties

def _select_generate(args: argparse.Namespace) -> Selection:
    return "generate", MODE_NONE, args.anonymizer_properties

def _select_database_discovery(args: argparse.Namespace) -> Selection:
    if args.columns:
        return "column-discovery", MODE_COLUMNS, args.column_properties
    if args.data:
        return "data-discovery", MODE_DATA, args.data_properties
    # neither -c nor -d: nothing is run
    return None

_DATABASE_COMMANDS: Dict[str, Callable[[argparse.Namespace], Selection]] = {
    "anonymize": _select_anonymize,
    "generate": _select_generate,
    "database-discovery": _select_database_discovery,
}

def run_database_command(command: str, args: argparse.Namespace, tables: List[str]) -> int:
    db_path = args.database_properties
    errors = check_database_properties(db_path)
    if errors:
        display_errors(errors)
        return EXIT_INVALID_PROPERTIES
    db_props = load_properties(db_path)

    selection = _DATABASE_COMMANDS[command](args)
    if selection is None:
        log.debug("No discovery mode selected for %s", command)
        return EXIT_OK
    kind, mode, path = selection

    errors = check(command, mode, path)
    if errors:
        display_errors(errors)
        return EXIT_INVALID_PROPERTIES
    props = load_properties(path)

    with get_db_factory(db_props) as db:
        workflow = make_workflow(kind)
        workflow.run(WorkflowContext(properties=props, db_factory=db, db_properties=db_props,
                                     tables=get_table_names(tables, db_props)))
        if args.requirement and isinstance(workflow, Discoverer):
            workflow.create_requirement(args.requirement_file)
    return EXIT_OK

COMMANDS: Dict[str, Callable[[argparse.Namespace, List[str]], int]] = {
    "file-discovery": run_file_discovery,
    **{name: functools.partial(run_database_command, name) for name in _DATABASE_COMMANDS},
}

def _dispatch(argv: List[str]) -> int:
    log.info("Command-line arguments: %s", argv)
    parser = create_parser()
    try:
        args = parser.parse_intermixed_args(argv)
    except CommandLineError as e:
        log.error("Invalid command line: %s", e)
        parser.print_help()
        return EXIT_OK

    if args.help or not argv or not args.args:
        parser.print_help()
        return EXIT_OK

    set_log_level(logging.DEBUG if args.debug else logging.INFO)

    cmd, tables = args.args[0], args.args[1:]
    handler = COMMANDS.get(cmd)
    if handler is None:
        log.warning("Unknown command: %s", cmd)
        parser.print_help()
        return EXIT_OK
    return handler(args, tables)

def main(argv: Optional[List[str]] = None, lock_dir: Optional[str] = None) -> int:
    start_time = time.time()
    setup_logging()
    argv = sys.argv[1:] if argv is None else list(argv)

    lock: Optional[ApplicationLock] = None
    try:
        lock = ApplicationLock(APP_NAME, lock_dir=lock_dir)
        if lock.is_app_active():
            log.error("Another instance of this program is already active")
            return EXIT_ALREADY_RUNNING
        return _dispatch(argv)
    finally:
        if lock is not None:
            lock.release()
        display_execution_time(start_time)

if __name__ == "__main__":
    sys.exit(main())
