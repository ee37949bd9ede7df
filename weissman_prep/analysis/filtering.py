"""
Gene-level filtering of the prepared Weissman score input tables.

Genes whose TSS records disagree on strand or chromosome, and genes targeted
by sgRNAs but absent from the TSS table, are removed from all four tables so
that the tables stay consistent with each other.
"""

import logging
import pandas as pd
from typing import Dict, Iterable, Optional

from weissman_prep.core.config import (
    TSS_TABLE,
    SGRNA_TABLE,
    LIBRARY_TABLE,
    GENE_COLUMNS,
    CONSISTENCY_ATTRIBUTES
)


def remove_genes(tables: Dict[str, pd.DataFrame], genes: Iterable,
                 gene_columns: Optional[Dict[str, str]] = None) -> Dict[str, pd.DataFrame]:
    """
    Drop every row belonging to the given genes from each table.

    Surviving rows keep their relative order. An empty gene list returns the
    tables untouched.

    Args:
        tables: Prepared tables keyed by table name
        genes: Gene identifiers to exclude
        gene_columns: Table name -> gene column mapping (defaults to GENE_COLUMNS)

    Returns:
        Dictionary of filtered tables keyed by table name
    """
    genes = list(genes)
    if not genes:
        return dict(tables)

    if gene_columns is None:
        gene_columns = GENE_COLUMNS

    filtered = {}
    for name, df in tables.items():
        if name not in gene_columns:
            raise KeyError(f"No gene column configured for table '{name}'")
        keep = ~df[gene_columns[name]].isin(genes)
        filtered[name] = df[keep].reset_index(drop=True)
        logging.debug(f"Removed {int((~keep).sum())} row(s) from {name}")
    return filtered


def find_inconsistent_genes(tss_table: pd.DataFrame, attribute: str) -> list:
    """Genes whose TSS records carry more than one distinct value of attribute."""
    gene_col = GENE_COLUMNS[TSS_TABLE]
    n_values = tss_table.groupby(gene_col, sort=False)[attribute].nunique(dropna=False)
    return n_values.index[n_values > 1].tolist()


def remove_inconsistent_genes(tables: Dict[str, pd.DataFrame],
                              attribute: str = "strand") -> Dict[str, pd.DataFrame]:
    """
    Remove genes with conflicting strand or chromosome annotations.

    Args:
        tables: Prepared tables keyed by table name
        attribute: TSS table column that must agree per gene, 'strand' or 'chromosome'

    Returns:
        Dictionary of filtered tables keyed by table name
    """
    if attribute not in CONSISTENCY_ATTRIBUTES:
        raise ValueError(
            f"attribute must be one of {', '.join(CONSISTENCY_ATTRIBUTES)}; got {attribute!r}"
        )

    mismatch_genes = find_inconsistent_genes(tables[TSS_TABLE], attribute)
    if mismatch_genes:
        logging.warning(
            f"Removing {len(mismatch_genes)} gene(s) with inconsistent {attribute}: "
            f"{', '.join(map(str, mismatch_genes))}"
        )
        tables = remove_genes(tables, mismatch_genes)
    return tables


def find_missing_genes(tables: Dict[str, pd.DataFrame]) -> list:
    """
    Genes targeted in the sgRNA or library table but absent from the TSS table.

    Returns:
        Unique gene identifiers, sgRNA table genes first, in order of appearance
    """
    tss_genes = tables[TSS_TABLE][GENE_COLUMNS[TSS_TABLE]]
    sgrna_genes = tables[SGRNA_TABLE][GENE_COLUMNS[SGRNA_TABLE]]
    library_genes = tables[LIBRARY_TABLE][GENE_COLUMNS[LIBRARY_TABLE]]

    missing = pd.concat([
        sgrna_genes[~sgrna_genes.isin(tss_genes)],
        library_genes[~library_genes.isin(tss_genes)]
    ], ignore_index=True)
    return pd.unique(missing).tolist()


def remove_missing_genes(tables: Dict[str, pd.DataFrame]) -> Dict[str, pd.DataFrame]:
    """
    Remove genes that have sgRNAs but no TSS record.

    Args:
        tables: Prepared tables keyed by table name

    Returns:
        Dictionary of filtered tables keyed by table name
    """
    missing_genes = find_missing_genes(tables)
    if missing_genes:
        logging.warning(
            f"Removing {len(missing_genes)} gene(s) missing from the TSS table: "
            f"{', '.join(map(str, missing_genes))}"
        )
        tables = remove_genes(tables, missing_genes)
    return tables
