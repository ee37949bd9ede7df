"""
Table builders for Weissman score prediction.
Reshapes raw TSS annotations and sgRNA metadata into the TSS, P1/P2, sgRNA and
library tables expected by the CRISPRa/CRISPRi scoring model.
"""

import logging
import numpy as np
import pandas as pd
from typing import Any, Dict

from weissman_prep.core.config import (
    TSS_TABLE_COLUMNS,
    TSS_TABLE_RENAMED,
    CAGE_PEAK_COLUMN,
    P1P2_TABLE_COLUMNS,
    P1P2_TABLE_RENAMED,
    TSS_SOURCE_LABEL,
    SGRNA_TABLE_COLUMNS,
    SGRNA_TABLE_RENAMED,
    SGRNA_TABLE_OUTPUT,
    PASS_SCORE_LABEL,
    LIBRARY_TABLE_COLUMNS,
    LIBRARY_TABLE_RENAMED,
    LIBRARY_TABLE_OUTPUT,
    SUBLIBRARY_LABEL,
    SPACER_COLUMN,
    TSS_ID_COLUMN,
    PAM_OFFSET
)
from weissman_prep.core.exceptions import SchemaError
from weissman_prep.core.validation import select_required_columns


def truncate_positions(positions: pd.Series) -> pd.Series:
    """
    Floor numeric coordinates to integers.

    Non-integer coordinates are always floored, never rounded, so 5.9 becomes 5
    and -0.5 becomes -1. Missing values are kept as <NA>.

    Args:
        positions: Raw coordinate values (numbers or numeric strings)

    Returns:
        Integer Series with the same index
    """
    floored = np.floor(pd.to_numeric(positions))
    if floored.isna().any():
        return floored.astype("Int64")
    return floored.astype("int64")


def _format_interval(positions: pd.Series, template: str) -> pd.Series:
    # nullable Int64 hands floats to map(), so format from plain ints
    return positions.map(lambda p: template.format(start=int(p), end=int(p) + 1), na_action="ignore")


def derive_gene_names(tss_ids: pd.Series) -> pd.Series:
    """Strip everything from the first underscore of each TSS identifier."""
    return tss_ids.map(lambda x: str(x).split("_", 1)[0], na_action="ignore")


def pam_genentech_to_weissman(pam_sites: pd.Series) -> pd.Series:
    # convert Sonata coordinates (*N*GG) to Weissman coordinates (NG*G*)
    return pam_sites + PAM_OFFSET


def build_tss_lookup(tss_df: pd.DataFrame) -> Dict[Any, Any]:
    """
    Map each TSS identifier to its promoter id.

    Identifiers come from the raw `tss_id` column when the TSS table has one,
    otherwise they are built as `<gene_symbol>_<promoter>`. When an identifier
    occurs more than once the first record wins.

    Args:
        tss_df: Raw TSS table

    Returns:
        Dictionary of TSS identifier -> promoter
    """
    cols = ["gene_symbol", "promoter"]
    if TSS_ID_COLUMN in tss_df.columns:
        cols.append(TSS_ID_COLUMN)
    table = select_required_columns(tss_df, cols, table_name="input TSS table")

    if TSS_ID_COLUMN in table.columns:
        tss_ids = table[TSS_ID_COLUMN]
    else:
        tss_ids = table["gene_symbol"].astype(str) + "_" + table["promoter"].astype(str)

    lookup = {}
    for tss_id, promoter in zip(tss_ids, table["promoter"]):
        lookup.setdefault(tss_id, promoter)
    return lookup


def _single_promoter_genes(tss_df: pd.DataFrame) -> Dict[Any, Any]:
    counts = tss_df["gene_symbol"].value_counts()
    single = set(counts.index[counts == 1])
    return {
        gene: promoter
        for gene, promoter in zip(tss_df["gene_symbol"], tss_df["promoter"])
        if gene in single
    }


def lookup_promoters(tss_ids: pd.Series, tss_df: pd.DataFrame) -> pd.Series:
    """
    Resolve the promoter id of each sgRNA's TSS.

    Exact identifier matches are used first. When the TSS table carries no
    explicit `tss_id` column, an unmatched identifier whose gene has a single
    TSS record resolves to that record's promoter. Anything else is NaN and is
    left for the missing-gene filter.

    Args:
        tss_ids: TSS identifiers of the sgRNAs
        tss_df: Raw TSS table

    Returns:
        Series of promoter ids aligned to tss_ids
    """
    promoters = tss_ids.map(build_tss_lookup(tss_df))

    if TSS_ID_COLUMN not in tss_df.columns:
        unmatched = promoters.isna() & tss_ids.notna()
        if unmatched.any():
            fallback = derive_gene_names(tss_ids[unmatched]).map(_single_promoter_genes(tss_df))
            promoters = promoters.astype(object)
            promoters.loc[unmatched] = fallback
            for tss_id, promoter in zip(tss_ids[unmatched], fallback):
                if pd.notna(promoter):
                    logging.info(f"TSS id {tss_id} has no exact match; using the only promoter "
                                 f"of its gene ({promoter})")

    n_missing = int(promoters.isna().sum())
    if n_missing:
        logging.info(f"{n_missing} sgRNA(s) have no matching TSS record")
    return promoters


def get_tss_table(tss_df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the TSS table.

    Args:
        tss_df: Raw TSS table with gene_symbol, promoter, position, strand and chr columns

    Returns:
        DataFrame with gene, transcripts, position, strand, chromosome and
        cage peak ranges columns, one row per input row
    """
    tss_table = select_required_columns(tss_df, TSS_TABLE_COLUMNS, table_name="input TSS table")
    tss_table.columns = TSS_TABLE_RENAMED
    tss_table = tss_table.reset_index(drop=True)

    tss_table["position"] = truncate_positions(tss_table["position"])
    tss_table[CAGE_PEAK_COLUMN] = _format_interval(tss_table["position"], "[({start}, {end})]")
    return tss_table


def get_p1p2_table(tss_df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the P1/P2 promoter table.

    Only one CAGE peak per promoter is known, so the secondary TSS is a copy
    of the primary TSS.

    Args:
        tss_df: Raw TSS table

    Returns:
        DataFrame with gene, transcript, chromosome, strand, TSS source,
        primary TSS and secondary TSS columns
    """
    p1p2_table = select_required_columns(tss_df, P1P2_TABLE_COLUMNS, table_name="input TSS table")
    p1p2_table.columns = P1P2_TABLE_RENAMED
    p1p2_table = p1p2_table.reset_index(drop=True)

    p1p2_table["TSS source"] = TSS_SOURCE_LABEL
    p1p2_table["position"] = truncate_positions(p1p2_table["position"])
    p1p2_table["primary TSS"] = _format_interval(p1p2_table["position"], "({start}, {end})")
    p1p2_table["secondary TSS"] = p1p2_table["primary TSS"]
    return p1p2_table.drop(columns=["position"])


def get_sgrna_table(tss_df: pd.DataFrame, sgrna_df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the sgRNA table.

    The spacer length is taken from the first sgRNA and applied to the whole
    library, which assumes all spacers have the same length. sgRNAs without a
    strand or PAM site are dropped.

    Args:
        tss_df: Raw TSS table, used to resolve transcript lists
        sgrna_df: Raw sgRNA info table with grna_id, tss_id, pam_site, strand
            and spacer_19mer columns

    Returns:
        DataFrame with the scorer's sgRNA table columns

    Raises:
        SchemaError: If spacer_19mer or any other mandatory column is missing
    """
    if SPACER_COLUMN not in sgrna_df.columns:
        logging.error(f"{SPACER_COLUMN} must be in the sgRNA info table")
        raise SchemaError(
            [SPACER_COLUMN],
            table_name="input sgRNA info table",
            message=f"{SPACER_COLUMN} must be in sgrnaInfoTable"
        )
    first_spacer = sgrna_df[SPACER_COLUMN].iloc[0] if len(sgrna_df) else None
    spacer_length = len(str(first_spacer)) if pd.notna(first_spacer) else None

    sgrna_table = select_required_columns(sgrna_df, SGRNA_TABLE_COLUMNS,
                                          table_name="input sgRNA info table")
    sgrna_table.columns = SGRNA_TABLE_RENAMED
    sgrna_table["gene_name"] = derive_gene_names(sgrna_table["tss_id"])

    keep = sgrna_table["strand"].notna() & sgrna_table["position"].notna()
    if not keep.all():
        logging.info(f"Dropping {int((~keep).sum())} sgRNA(s) with missing strand or PAM site")
    sgrna_table = sgrna_table[keep].reset_index(drop=True)

    sgrna_table["Sublibrary"] = SUBLIBRARY_LABEL
    sgrna_table["length"] = spacer_length
    sgrna_table["pass_score"] = PASS_SCORE_LABEL

    positions = pd.to_numeric(sgrna_table["position"])
    if len(positions) and (positions % 1 == 0).all():
        positions = positions.astype("int64")
    sgrna_table["position"] = positions
    sgrna_table["pam coordinate"] = pam_genentech_to_weissman(positions)

    promoters = lookup_promoters(sgrna_table["tss_id"], tss_df)
    sgrna_table["transcript_list"] = promoters.map(lambda p: f"['{p}']", na_action="ignore")

    return sgrna_table[SGRNA_TABLE_OUTPUT]


def get_library_table(tss_df: pd.DataFrame, sgrna_df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the library table.

    Unlike the sgRNA table, transcripts hold the raw promoter id and no rows
    are dropped.

    Args:
        tss_df: Raw TSS table, used to resolve transcripts
        sgrna_df: Raw sgRNA info table with grna_id, tss_id and spacer_19mer columns

    Returns:
        DataFrame with sgId, sublibrary, gene, transcripts and sequence columns
    """
    library_table = select_required_columns(sgrna_df, LIBRARY_TABLE_COLUMNS,
                                            table_name="input sgRNA info table")
    library_table.columns = LIBRARY_TABLE_RENAMED
    library_table = library_table.reset_index(drop=True)

    library_table["gene"] = derive_gene_names(library_table["tss_id"])
    library_table["sublibrary"] = SUBLIBRARY_LABEL
    library_table["transcripts"] = lookup_promoters(library_table["tss_id"], tss_df)

    # drop unnecessary columns and reorder
    return library_table[LIBRARY_TABLE_OUTPUT]
