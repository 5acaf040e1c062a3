# Conversions between raw sheet rows, records and pandas DataFrames.

import logging
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def rows_to_records(
    registry: SchemaRegistry,
    table: str,
    headers: Sequence[Any],
    rows: Sequence[Sequence[Any]],
    version: Optional[str] = None
) -> List[Dict[str, Any]]:
    # Decode every row against the same header row.
    return [
        registry.map_row_to_object(table, headers, row, version=version)
        for row in rows
    ]


def records_to_frame(
    registry: SchemaRegistry,
    table: str,
    records: Sequence[Dict[str, Any]],
    version: Optional[str] = None
) -> pd.DataFrame:
    # One column per schema field, in schema order. Fields a record lacks are None.
    field_names = list(registry.get_schema(table, version=version).keys())
    data = [
        [record.get(field_name) for field_name in field_names]
        for record in records
    ]
    return pd.DataFrame(data, columns=field_names, dtype=object)


def sheet_to_frame(
    registry: SchemaRegistry,
    table: str,
    values: Sequence[Sequence[Any]],
    version: Optional[str] = None
) -> pd.DataFrame:
    # Decode a raw sheet grid whose first row holds the headers.
    if not values:
        return records_to_frame(registry, table, [], version=version)

    headers, rows = values[0], values[1:]
    records = rows_to_records(registry, table, headers, rows, version=version)
    logger.debug(f"Decoded {len(records)} rows from sheet: {table}")
    return records_to_frame(registry, table, records, version=version)


def frame_to_rows(
    registry: SchemaRegistry,
    table: str,
    frame: pd.DataFrame,
    version: Optional[str] = None
) -> List[List[Any]]:
    # Header row followed by one encoded row per frame record.
    rows = [registry.get_headers(table, version=version)]
    for record in frame.to_dict(orient="records"):
        # NaN cells from pandas are written as empty cells
        cleaned = {k: (None if _is_missing(v) else v) for k, v in record.items()}
        rows.append(registry.map_object_to_row(table, cleaned, version=version))
    return rows


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like cells
        return False
