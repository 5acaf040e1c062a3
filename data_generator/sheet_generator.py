import os
import uuid
import random
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from sheets.schema import SchemaRegistry

logger = logging.getLogger("SheetGenerator")


def generate_cell(field_name: str, row_number: int) -> str:
    #Placeholder value for one cell.
    if field_name in ("timestamp", "lastUpdated"):
        return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    if field_name == "date":
        return datetime.now(timezone.utc).strftime("%Y-%m-%d")
    # Leave some cells blank, as a real form would
    if random.random() < 0.1:
        return ""
    return f"{field_name}-{row_number}"


def generate_rows(
    registry: SchemaRegistry,
    table: str,
    count: int,
    version: Optional[str] = None
) -> pd.DataFrame:
    # Frame of sample rows labelled with the sheet's headers.
    schema = registry.get_schema(table, version=version)
    data = [
        [generate_cell(field_name, number) for field_name in schema]
        for number in range(1, count + 1)
    ]
    return pd.DataFrame(data, columns=list(schema.values()))


def inject_header_drift(
    frame: pd.DataFrame,
    drop: Optional[List[str]] = None,
    rename: Optional[Dict[str, str]] = None,
    add: Optional[List[str]] = None
) -> pd.DataFrame:
    # Simulate manual edits to the header row of a sheet.
    drifted = frame.drop(columns=drop or [], errors="ignore")
    if rename:
        drifted = drifted.rename(columns=rename)
    for header in add or []:
        drifted[header] = ""
    return drifted


def write_sheet_to_file(frame: pd.DataFrame, output_dir: str, prefix: str = "sheet") -> str:
    #Write a frame to a CSV file atomically. Returns the file path.
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    file_name = f"{prefix}_{timestamp}_{uuid.uuid4().hex[:6]}.csv"

    temp_path = os.path.join(output_dir, f".{file_name}")
    final_path = os.path.join(output_dir, file_name)

    try:
        frame.to_csv(temp_path, index=False)
        os.replace(temp_path, final_path)
    except OSError as e:
        logger.error(f" Failed to write file: {str(e)}")
        raise

    logger.info(f" Wrote {len(frame)} rows to {final_path}")
    return final_path
