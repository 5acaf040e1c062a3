"""
Check a sheet export against its registered schema.

Usage:
    python -m sheets.drift_check exports/daily_report.csv --table "Daily Report"
"""
import os
import logging
from datetime import datetime
from typing import Any, List, Optional

import click
import pandas as pd

from config.settings import get_config
from .schema import NotFoundError, SchemaRegistry, build_registry
from .rows import rows_to_records

logger = logging.getLogger("SchemaDriftCheck")

EXIT_OK = 0
EXIT_DRIFT = 1
EXIT_NOT_FOUND = 2


def configure_logging(level: str = "INFO", log_path: Optional[str] = None) -> None:
    # Log to console, and to a daily file when a log directory is configured.
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_path:
        os.makedirs(log_path, exist_ok=True)
        handlers.append(logging.FileHandler(
            os.path.join(log_path, f"schema_drift_{datetime.now().strftime('%Y%m%d')}.log")
        ))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers,
    )


def read_sheet_values(path: str) -> List[List[Any]]:
    # Raw grid of a CSV export, header row first. Cells a short row never had
    # come back as None (absent) while written empty cells stay "". Cells past
    # the header width have no column to decode into and are dropped. Blank
    # lines are skipped and an empty file gives an empty grid.
    options = dict(
        header=None, dtype=object, keep_default_na=False, engine="python", encoding="utf-8-sig"
    )
    try:
        width = pd.read_csv(path, nrows=1, **options).shape[1]
        frame = pd.read_csv(
            path,
            on_bad_lines=lambda row: row[:width],
            **options,
        )
    except pd.errors.EmptyDataError:
        return []

    return [
        [None if pd.isna(value) else value for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]


def check_sheet(
    registry: SchemaRegistry,
    table: str,
    values: List[List[Any]],
    show_rows: int = 0,
    version: Optional[str] = None
) -> int:
    # Log the drift report for one sheet and return the exit code.
    headers = values[0] if values else []
    diff = registry.detect_schema_changes(table, headers)
    active = registry.get_current_version(table)

    logger.info("=" * 70)
    logger.info(f" SHEET: {table} (active schema {active})")
    logger.info("=" * 70)

    if not values:
        logger.warning(" Sheet export is empty")

    if diff.has_changes:
        logger.warning(" Schema drift detected")
        if diff.missing:
            logger.warning(f"   Missing headers: {diff.missing}")
        if diff.extra:
            logger.warning(f"   Extra headers: {diff.extra}")
    else:
        logger.info(" Headers match the active schema")

    if show_rows > 0 and len(values) > 1:
        records = rows_to_records(registry, table, headers, values[1:show_rows + 1], version=version)
        for number, record in enumerate(records, start=1):
            logger.info(f"   Row {number}: {record}")

    return EXIT_DRIFT if diff.has_changes else EXIT_OK


def run_check(
    path: str,
    table: str,
    show_rows: int = 0,
    version: Optional[str] = None,
    registry: Optional[SchemaRegistry] = None
) -> int:
    # Read one export and check it; unknown sheets and versions map to an exit code.
    registry = registry or build_registry(get_config())

    try:
        values = read_sheet_values(path)
        return check_sheet(registry, table, values, show_rows, version)
    except NotFoundError as e:
        logger.error(f" {e}")
        logger.error(f" Known sheets: {registry.list_tables()}")
        return EXIT_NOT_FOUND


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--table", required=True, help="Registered sheet name")
@click.option("--version", "schema_version", default=None, help="Schema version used to decode rows")
@click.option("--show-rows", type=int, default=0, show_default=True, help="Number of decoded rows to log")
@click.pass_context
def main(
    ctx: click.Context, path: str, table: str, schema_version: Optional[str], show_rows: int
) -> None:
    """Detect header drift in a sheet export."""
    app_config = get_config()
    configure_logging(app_config.log_level, app_config.log_path)

    ctx.exit(run_check(path, table, show_rows, schema_version))


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
