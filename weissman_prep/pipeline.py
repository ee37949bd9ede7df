"""
Weissman Score Input Preparation Pipeline

This module provides the main entry points: building the four scorer input
tables from a TSS table and an sgRNA info table, filtering them for gene
consistency, and handing them to the CRISPRa/CRISPRi scoring model.
"""

import logging
import pandas as pd
from typing import Callable, Dict, Optional, Union

from weissman_prep.core.config import (
    DEFAULT_MODALITY,
    TSS_TABLE,
    P1P2_TABLE,
    SGRNA_TABLE,
    LIBRARY_TABLE,
    TABLE_NAMES
)
from weissman_prep.core.logging_setup import ProgressReporter
from weissman_prep.core.validation import validate_modality, check_scorer_environment
from weissman_prep.analysis.tables import (
    get_tss_table,
    get_p1p2_table,
    get_sgrna_table,
    get_library_table
)
from weissman_prep.analysis.filtering import (
    remove_inconsistent_genes,
    remove_missing_genes
)
from weissman_prep.analysis.scoring import WeissmanScorer, as_scorer, predict_weissman_score

# table builds plus strand, chromosome and missing-gene passes
PREPARATION_STEPS = 7


def _row_counts(tables: Dict[str, pd.DataFrame]) -> str:
    return ", ".join(f"{name}={len(tables[name])}" for name in TABLE_NAMES)


def prepare_input_data(tss_df: pd.DataFrame, sgrna_df: pd.DataFrame,
                       verbose: bool = False) -> Dict[str, pd.DataFrame]:
    """
    Build and filter the four tables consumed by the scoring model.

    The TSS, P1/P2, sgRNA and library tables are built from the raw inputs;
    genes with inconsistent strand, then inconsistent chromosome, then genes
    absent from the TSS table are removed from every table.

    Args:
        tss_df: Raw TSS table (gene_symbol, promoter, position, strand, chr)
        sgrna_df: Raw sgRNA info table (grna_id, tss_id, pam_site, strand, spacer_19mer)
        verbose: Report progress after each stage

    Returns:
        Dictionary with tssTable, p1p2Table, sgrnaTable and libraryTable

    Raises:
        SchemaError: If a mandatory input column is missing
    """
    progress = ProgressReporter(PREPARATION_STEPS, verbose=verbose)

    tables = {}
    tables[TSS_TABLE] = get_tss_table(tss_df)
    progress.update("Done creating TSS table.")
    tables[P1P2_TABLE] = get_p1p2_table(tss_df)
    progress.update("Done creating p1p2 table.")
    tables[SGRNA_TABLE] = get_sgrna_table(tss_df, sgrna_df)
    progress.update("Done creating sgRNA table.")
    tables[LIBRARY_TABLE] = get_library_table(tss_df, sgrna_df)
    progress.update("Done creating library table.")

    tables = remove_inconsistent_genes(tables, attribute="strand")
    progress.update("Done removing strand mismatches.", _row_counts(tables))
    tables = remove_inconsistent_genes(tables, attribute="chromosome")
    progress.update("Done removing chr mismatches", _row_counts(tables))
    tables = remove_missing_genes(tables)
    progress.update("Done removing missing genes", _row_counts(tables))

    return tables


def get_weissman_score(tss_df: pd.DataFrame,
                       sgrna_df: pd.DataFrame,
                       scorer: Union[WeissmanScorer, Callable],
                       verbose: bool = False,
                       modality: str = DEFAULT_MODALITY,
                       os_name: Optional[str] = None) -> pd.DataFrame:
    """
    Predict Weissman on-target scores for CRISPRa or CRISPRi sgRNAs.

    Args:
        tss_df: Raw TSS table
        sgrna_df: Raw sgRNA info table
        scorer: Scoring model, or a function taking tssTable, p1p2Table,
            sgrnaTable, libraryTable, modality and verbose keyword arguments
        verbose: Report progress after each stage
        modality: 'CRISPRa' or 'CRISPRi'
        os_name: Platform override for the scorer environment check

    Returns:
        Score table returned by the scoring model

    Raises:
        InvalidModalityError: If modality is not recognized
        UnsupportedEnvironmentError: If the scorer cannot run on this platform
        SchemaError: If a mandatory input column is missing
    """
    modality = validate_modality(modality)
    scorer = as_scorer(scorer)
    check_scorer_environment(scorer, os_name=os_name)

    tables = prepare_input_data(tss_df, sgrna_df, verbose=verbose)
    logging.info(f"Prepared Weissman score input tables: {_row_counts(tables)}")

    return predict_weissman_score(scorer, tables, modality, verbose=verbose, os_name=os_name)
