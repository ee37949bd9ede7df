"""
Unit tests for the gene filtering module.
"""

import pandas as pd
import pytest

from weissman_prep.analysis.filtering import (
    remove_genes,
    find_inconsistent_genes,
    remove_inconsistent_genes,
    find_missing_genes,
    remove_missing_genes
)


def make_tables(tss_genes, tss_strands, tss_chroms, sgrna_genes, library_genes):
    """Build a minimal four-table bundle with the given gene columns."""
    return {
        "tssTable": pd.DataFrame({
            "gene": tss_genes,
            "transcripts": [f"P{i}" for i in range(len(tss_genes))],
            "strand": tss_strands,
            "chromosome": tss_chroms,
        }),
        "p1p2Table": pd.DataFrame({
            "gene": tss_genes,
            "transcript": [f"P{i}" for i in range(len(tss_genes))],
        }),
        "sgrnaTable": pd.DataFrame({
            "sgId": [f"sg{i}" for i in range(len(sgrna_genes))],
            "gene_name": sgrna_genes,
        }),
        "libraryTable": pd.DataFrame({
            "sgId": [f"lib{i}" for i in range(len(library_genes))],
            "gene": library_genes,
        }),
    }


@pytest.fixture
def tables():
    return make_tables(
        tss_genes=["G1", "G2", "G1", "G3", "G4"],
        tss_strands=["+", "+", "-", "-", "+"],
        tss_chroms=["chr1", "chr2", "chr1", "chr3", "chr4"],
        sgrna_genes=["G1", "G2", "G3", "G4", "G2"],
        library_genes=["G2", "G1", "G3", "G4", "G2"],
    )


def test_remove_genes_from_all_tables(tables):
    filtered = remove_genes(tables, ["G2"])

    assert filtered["tssTable"]["gene"].tolist() == ["G1", "G1", "G3", "G4"]
    assert filtered["p1p2Table"]["gene"].tolist() == ["G1", "G1", "G3", "G4"]
    assert filtered["sgrnaTable"]["gene_name"].tolist() == ["G1", "G3", "G4"]
    assert filtered["libraryTable"]["gene"].tolist() == ["G1", "G3", "G4"]


def test_remove_genes_preserves_order(tables):
    """Survivors keep their relative order in every table."""
    filtered = remove_genes(tables, ["G3"])

    for name, df in tables.items():
        gene_col = "gene_name" if name == "sgrnaTable" else "gene"
        expected = df[df[gene_col] != "G3"].reset_index(drop=True)
        pd.testing.assert_frame_equal(filtered[name], expected)


def test_remove_genes_empty_set_is_noop(tables):
    originals = {name: df.copy() for name, df in tables.items()}
    filtered = remove_genes(tables, [])

    assert set(filtered) == set(tables)
    for name in tables:
        pd.testing.assert_frame_equal(filtered[name], originals[name])


def test_remove_genes_unknown_table(tables):
    tables["otherTable"] = pd.DataFrame({"gene": ["G1"]})
    with pytest.raises(KeyError):
        remove_genes(tables, ["G1"])


def test_remove_genes_custom_gene_columns():
    tables = {"custom": pd.DataFrame({"symbol": ["A", "B", "A"]})}
    filtered = remove_genes(tables, {"A"}, gene_columns={"custom": "symbol"})
    assert filtered["custom"]["symbol"].tolist() == ["B"]


def test_find_inconsistent_genes(tables):
    assert find_inconsistent_genes(tables["tssTable"], "strand") == ["G1"]
    assert find_inconsistent_genes(tables["tssTable"], "chromosome") == []


def test_remove_inconsistent_strand(tables):
    """A gene annotated on both strands is removed from all four tables."""
    filtered = remove_inconsistent_genes(tables, attribute="strand")

    assert "G1" not in filtered["tssTable"]["gene"].tolist()
    assert "G1" not in filtered["p1p2Table"]["gene"].tolist()
    assert "G1" not in filtered["sgrnaTable"]["gene_name"].tolist()
    assert "G1" not in filtered["libraryTable"]["gene"].tolist()
    assert filtered["sgrnaTable"]["gene_name"].tolist() == ["G2", "G3", "G4", "G2"]


def test_remove_inconsistent_chromosome():
    tables = make_tables(
        tss_genes=["G1", "G1", "G2"],
        tss_strands=["+", "+", "-"],
        tss_chroms=["chr1", "chrX", "chr2"],
        sgrna_genes=["G1", "G2"],
        library_genes=["G1", "G2"],
    )
    filtered = remove_inconsistent_genes(tables, attribute="chromosome")

    assert filtered["tssTable"]["gene"].tolist() == ["G2"]
    assert filtered["sgrnaTable"]["gene_name"].tolist() == ["G2"]
    assert filtered["libraryTable"]["gene"].tolist() == ["G2"]


def test_remove_inconsistent_counts_missing_values():
    """A missing strand next to a known one is a disagreement."""
    tables = make_tables(
        tss_genes=["G1", "G1"],
        tss_strands=["+", None],
        tss_chroms=["chr1", "chr1"],
        sgrna_genes=["G1"],
        library_genes=["G1"],
    )
    filtered = remove_inconsistent_genes(tables, attribute="strand")
    assert len(filtered["tssTable"]) == 0


def test_remove_inconsistent_genes_consistent_is_noop():
    tables = make_tables(
        tss_genes=["G1", "G1"],
        tss_strands=["+", "+"],
        tss_chroms=["chr1", "chr1"],
        sgrna_genes=["G1"],
        library_genes=["G1"],
    )
    filtered = remove_inconsistent_genes(tables, attribute="strand")
    for name in tables:
        pd.testing.assert_frame_equal(filtered[name], tables[name])


def test_remove_inconsistent_genes_rejects_attribute(tables):
    with pytest.raises(ValueError):
        remove_inconsistent_genes(tables, attribute="position")


def test_find_missing_genes():
    tables = make_tables(
        tss_genes=["G1"],
        tss_strands=["+"],
        tss_chroms=["chr1"],
        sgrna_genes=["G2", "G1", "G3"],
        library_genes=["G4", "G2", "G1"],
    )
    assert find_missing_genes(tables) == ["G2", "G3", "G4"]


def test_remove_missing_genes():
    """sgRNAs whose gene has no TSS record are removed; other genes are untouched."""
    tables = make_tables(
        tss_genes=["G1", "G3"],
        tss_strands=["+", "-"],
        tss_chroms=["chr1", "chr3"],
        sgrna_genes=["G1", "G2", "G3"],
        library_genes=["G2", "G1", "G3"],
    )
    filtered = remove_missing_genes(tables)

    assert filtered["sgrnaTable"]["gene_name"].tolist() == ["G1", "G3"]
    assert filtered["sgrnaTable"]["sgId"].tolist() == ["sg0", "sg2"]
    assert filtered["libraryTable"]["gene"].tolist() == ["G1", "G3"]
    pd.testing.assert_frame_equal(filtered["tssTable"], tables["tssTable"])
    pd.testing.assert_frame_equal(filtered["p1p2Table"], tables["p1p2Table"])


def test_remove_missing_genes_drops_unresolved_gene_names():
    """Rows whose gene could not be derived are treated as missing."""
    tables = make_tables(
        tss_genes=["G1"],
        tss_strands=["+"],
        tss_chroms=["chr1"],
        sgrna_genes=["G1", None],
        library_genes=[None, "G1"],
    )
    filtered = remove_missing_genes(tables)
    assert filtered["sgrnaTable"]["gene_name"].tolist() == ["G1"]
    assert filtered["libraryTable"]["gene"].tolist() == ["G1"]
