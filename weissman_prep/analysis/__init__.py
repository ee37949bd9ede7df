"""
Table preparation modules for Weissman score prediction.

This package provides tools for:
1. Building the TSS, P1/P2, sgRNA and library tables from raw annotations
2. Removing genes with inconsistent or missing TSS annotations
3. Handing the prepared tables to the external scoring model
"""

from weissman_prep.analysis.tables import get_tss_table, get_p1p2_table, get_sgrna_table, get_library_table
from weissman_prep.analysis.filtering import remove_genes, remove_inconsistent_genes, remove_missing_genes
