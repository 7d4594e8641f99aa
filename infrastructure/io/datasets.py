"""Dataset loading utilities."""

import json
from pathlib import Path
from typing import Any

import pandas as pd


def read_table(path: Path) -> pd.DataFrame:
    """
    Read tabular data file (Excel, CSV, JSON or JSON Lines) based on file extension.

    Supported formats:
    - Excel: .xlsx, .xls
    - CSV: .csv
    - JSON array of objects: .json
    - JSON Lines: .jsonl

    Args:
        path: Path to data file

    Returns:
        pandas DataFrame

    Raises:
        ValueError: If file format is not supported
        FileNotFoundError: If file does not exist
        Exception: If file cannot be read (pandas exceptions)
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in [".xlsx", ".xls"]:
        return pd.read_excel(path)
    elif suffix == ".csv":
        return pd.read_csv(path)
    elif suffix == ".json":
        return pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    elif suffix == ".jsonl":
        return pd.read_json(path, orient="records", lines=True, dtype=False, convert_dates=False)
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .xlsx, .xls, .csv, .json, .jsonl")


def read_records(path: Path) -> list[dict[str, Any]]:
    """
    Read a table and return its rows as plain dicts, with missing cells as None.

    Path columns are left in their raw encoding; they are normalized by the domain layer.
    """
    df = read_table(path)
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def read_json(path: Path) -> Any:
    """Read and decode a UTF-8 JSON document."""
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
