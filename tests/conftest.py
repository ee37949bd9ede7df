"""
Shared fixtures for the Weissman score preparation tests.
This file contains raw input tables that can be reused across test files.
"""

import pandas as pd
import pytest


@pytest.fixture
def single_gene_tss_df():
    """
    Raw TSS table with one gene G1 on chr1, + strand, position 100, promoter p1.

    Returns:
        pd.DataFrame: Raw TSS table
    """
    return pd.DataFrame({
        "gene_symbol": ["G1"],
        "promoter": ["p1"],
        "position": [100],
        "strand": ["+"],
        "chr": ["chr1"],
    })


@pytest.fixture
def single_guide_sgrna_df():
    """
    Raw sgRNA info table with one guide sg1 targeting G1_1.

    Returns:
        pd.DataFrame: Raw sgRNA info table
    """
    return pd.DataFrame({
        "grna_id": ["sg1"],
        "tss_id": ["G1_1"],
        "pam_site": [8],
        "strand": ["+"],
        "spacer_19mer": ["ACGTACGTACGTACGTACG"],
    })


@pytest.fixture
def tss_df():
    """
    Raw TSS table covering several genes.

    GENEA has two promoters that agree on strand and chromosome, GENEB has
    conflicting strands, GENEC has conflicting chromosomes, GENED is clean.
    Extra columns are present to check that they are ignored.

    Returns:
        pd.DataFrame: Raw TSS table
    """
    return pd.DataFrame({
        "tss_id": ["GENEA_P1", "GENEA_P2", "GENEB_P1", "GENEB_P2", "GENEC_P1", "GENEC_P2", "GENED_P1"],
        "gene_symbol": ["GENEA", "GENEA", "GENEB", "GENEB", "GENEC", "GENEC", "GENED"],
        "gene_id": ["ENSG1", "ENSG1", "ENSG2", "ENSG2", "ENSG3", "ENSG3", "ENSG4"],
        "promoter": ["P1", "P2", "P1", "P2", "P1", "P2", "P1"],
        "position": [1000.7, 1500.0, 2000.2, 2500.9, 3000.0, 3500.5, 4000.0],
        "strand": ["+", "+", "+", "-", "-", "-", "+"],
        "chr": ["chr1", "chr1", "chr2", "chr2", "chr3", "chr4", "chr5"],
    })


@pytest.fixture
def sgrna_df():
    """
    Raw sgRNA info table matching the tss_df fixture.

    sg6 targets GENEX, which has no TSS record; sg7 has no strand; sg8 has
    no PAM site.

    Returns:
        pd.DataFrame: Raw sgRNA info table
    """
    return pd.DataFrame({
        "grna_id": ["sg1", "sg2", "sg3", "sg4", "sg5", "sg6", "sg7", "sg8"],
        "tss_id": ["GENEA_P1", "GENEA_P2", "GENEB_P1", "GENEC_P2", "GENED_P1", "GENEX_P1", "GENED_P1", "GENEA_P1"],
        "pam_site": [980, 1490, 1995, 3510, 3990, 10, 4010, None],
        "strand": ["+", "-", "+", "-", "+", "+", None, "+"],
        "spacer_19mer": ["A" * 19, "C" * 19, "G" * 19, "T" * 19, "ACGTACGTACGTACGTACG",
                         "TTTTTCCCCCAAAAAGGGG", "ACACACACACACACACACA", "GTGTGTGTGTGTGTGTGTG"],
        "score": [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8],
    })
