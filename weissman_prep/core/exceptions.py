"""
Exceptions raised by the Weissman score input preparation pipeline.
"""

from typing import List, Optional


class WeissmanPrepError(ValueError):
    """Base class for input defects detected by the pipeline."""


class SchemaError(WeissmanPrepError):
    """
    A raw input table lacks one or more mandatory columns.

    Attributes:
        missing_columns: Names of the absent columns, in required order
        table_name: Human readable name of the table being validated
    """

    def __init__(self, missing_columns: List[str], table_name: str = "input table",
                 message: Optional[str] = None):
        self.missing_columns = list(missing_columns)
        self.table_name = table_name
        if message is None:
            message = (
                f"Some of the mandatory columns are not found in the {table_name}: "
                f"{', '.join(self.missing_columns)}"
            )
        super().__init__(message)


class UnsupportedEnvironmentError(WeissmanPrepError):
    """The Weissman scorer cannot run on the current platform."""


class InvalidModalityError(WeissmanPrepError):
    """The modality is neither CRISPRa nor CRISPRi."""
