"""
Input validation functions for the Weissman score preparation pipeline.
"""

import os
import logging
import pandas as pd
from typing import Any, List, Optional

from weissman_prep.core.config import (
    MODALITIES,
    SCORER_UNSUPPORTED_OS
)
from weissman_prep.core.exceptions import (
    SchemaError,
    InvalidModalityError,
    UnsupportedEnvironmentError
)


def select_required_columns(df: pd.DataFrame, required_cols: List[str],
                            table_name: str = "input table") -> pd.DataFrame:
    """
    Check that all required columns are present and restrict the table to them.

    Rows are neither dropped nor reordered; columns come back in the order
    given by required_cols.

    Args:
        df: Raw input table
        required_cols: Mandatory column names, in output order
        table_name: Name of the table used in error messages

    Returns:
        Copy of df holding only the required columns

    Raises:
        SchemaError: If any required column is absent
    """
    missing_cols = [col for col in required_cols if col not in df.columns]
    if missing_cols:
        logging.error(f"Missing required columns in {table_name}: {missing_cols}")
        logging.error(f"Available columns: {', '.join(map(str, df.columns))}")
        raise SchemaError(missing_cols, table_name=table_name)

    return df.loc[:, list(required_cols)].copy()


def validate_modality(modality: str) -> str:
    """
    Validate the CRISPR modality passed to the scorer.

    Args:
        modality: Either 'CRISPRa' or 'CRISPRi'

    Returns:
        The modality, unchanged

    Raises:
        InvalidModalityError: If modality is not recognized
    """
    if modality not in MODALITIES:
        error_message = f"modality must be one of {', '.join(MODALITIES)}; got {modality!r}"
        logging.error(error_message)
        raise InvalidModalityError(error_message)
    return modality


def current_os_name() -> str:
    """Operating system name as reported by os.name."""
    return os.name


def check_scorer_environment(scorer: Any = None, os_name: Optional[str] = None) -> None:
    """
    Fail fast when the scoring model cannot run on this platform.

    Args:
        scorer: Scorer object; may declare its own `unsupported_platforms`
        os_name: Operating system name as reported by os.name (defaults to the current one)

    Raises:
        UnsupportedEnvironmentError: If the platform is not supported
    """
    if os_name is None:
        os_name = current_os_name()
    unsupported = getattr(scorer, "unsupported_platforms", SCORER_UNSUPPORTED_OS)

    if os_name in unsupported:
        error_message = (
            "Weissman score is not available for Windows at the moment."
            if os_name == "nt"
            else f"Weissman score is not available on platform '{os_name}'."
        )
        logging.error(error_message)
        raise UnsupportedEnvironmentError(error_message)

    logging.debug(f"Scorer environment check passed for platform '{os_name}'")
