"""CSV parser for TCPD Lok Sabha result files with chunked reading.

Every cell is read as text and coerced per column: blanks (and non-finite
numbers) become None, numeric columns become int/float and flag
columns become booleans.
"""

import math
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

ResultRecord = dict[str, Any]

INT_COLUMNS = frozenset(
    {
        "year",
        "month",
        "poll_no",
        "delimid",
        "position",
        "n_cand",
        "assembly_no",
        "constituency_no",
        "last_poll",
        "contested",
    }
)
FLOAT_COLUMNS = frozenset({"votes", "valid_votes", "electors", "margin"})
PERCENT_COLUMNS = frozenset(
    {
        "turnout_percentage",
        "vote_share_percentage",
        "margin_percentage",
        "enop",
        "no_terms",
    }
)
FLAG_COLUMNS = frozenset({"same_constituency", "same_party", "turncoat", "incumbent", "recontest"})

REQUIRED_COLUMNS = frozenset({"state_name", "constituency_name", "year", "candidate", "party"})

_TRUE_VALUES = frozenset({"true", "1", "yes"})


def _to_float(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    # "inf", "nan" and out-of-range literals such as "1e999"
    return number if math.isfinite(number) else None


def _to_int(value: str) -> int | None:
    number = _to_float(value)
    return None if number is None else int(number)


def coerce_record(raw: dict[str, str]) -> ResultRecord:
    """Convert one CSV row of strings into typed values.

    Args:
        raw: Column name → cell text.

    Returns:
        Column name → typed value (None for blanks and unparseable numbers).
    """
    record: ResultRecord = {}
    for column, cell in raw.items():
        value = cell.strip() if isinstance(cell, str) else cell
        if column in FLAG_COLUMNS:
            record[column] = isinstance(value, str) and value.lower() in _TRUE_VALUES
        elif value in ("", None):
            record[column] = None
        elif column in INT_COLUMNS:
            record[column] = _to_int(value)
        elif column in FLOAT_COLUMNS or column in PERCENT_COLUMNS:
            record[column] = _to_float(value)
        else:
            record[column] = value
    return record


def parse_results_csv(file_path: Path, batch_size: int = 5000) -> Iterator[list[ResultRecord]]:
    """Parse a results CSV file in chunks.

    Args:
        file_path: Path to the CSV file.
        batch_size: Number of rows per chunk.

    Yields:
        Lists of typed records.

    Raises:
        ValueError: If a required column is missing.
    """
    logger.info(f"Parsing {file_path} with batch_size={batch_size}")

    reader = pd.read_csv(
        file_path,
        chunksize=batch_size,
        dtype=str,
        keep_default_na=False,
    )

    checked = False
    for chunk in reader:
        chunk.columns = chunk.columns.str.strip()
        if not checked:
            missing = REQUIRED_COLUMNS - set(chunk.columns)
            if missing:
                msg = f"{file_path} is missing required columns: {', '.join(sorted(missing))}"
                raise ValueError(msg)
            checked = True
        yield [coerce_record(raw) for raw in chunk.to_dict(orient="records")]
