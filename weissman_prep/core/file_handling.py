"""
File handling utilities for the Weissman score preparation pipeline.
"""

import os
import logging
import pandas as pd
from pathlib import Path
from typing import Dict, Union

from weissman_prep.core.config import TABLE_NAMES, TABLE_FILE_SUFFIX


def read_input_table(file_path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a raw TSS or sgRNA info table.

    Files ending in .csv are read as comma-delimited, anything else as
    tab-delimited.

    Args:
        file_path: Path to the table

    Returns:
        Table as a DataFrame
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")

    sep = ',' if path.suffix.lower() == '.csv' else '\t'
    df = pd.read_csv(path, sep=sep, encoding='utf-8-sig')
    logging.info(f"Loaded {path}: {len(df)} rows, {len(df.columns)} columns")
    logging.debug(f"Columns: {', '.join(map(str, df.columns))}")
    return df


def ensure_output_dir(output_dir: Union[str, Path]) -> Path:
    """Create the output directory if needed and return it as a Path."""
    path = Path(output_dir)
    os.makedirs(path, exist_ok=True)
    return path


def write_table(df: pd.DataFrame, file_path: Union[str, Path]) -> str:
    """Write a table as tab-delimited text without the index."""
    df.to_csv(file_path, sep='\t', index=False)
    logging.info(f"Wrote {len(df)} rows to {file_path}")
    return str(file_path)


def write_input_tables(tables: Dict[str, pd.DataFrame], output_dir: Union[str, Path]) -> Dict[str, str]:
    """
    Write the four prepared tables to tssTable.txt, p1p2Table.txt,
    sgrnaTable.txt and libraryTable.txt.

    Args:
        tables: Prepared tables keyed by table name
        output_dir: Directory for the output files

    Returns:
        Dictionary of table name -> written file path
    """
    out_dir = ensure_output_dir(output_dir)
    return {
        name: write_table(tables[name], out_dir / f"{name}{TABLE_FILE_SUFFIX}")
        for name in TABLE_NAMES
    }
