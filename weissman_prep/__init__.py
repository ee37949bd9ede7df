"""
Weissman Score Input Preparation

Builds the TSS, P1/P2, sgRNA and library tables consumed by the CRISPRa/CRISPRi
Weissman on-target scoring model from TSS annotations and sgRNA metadata.
"""

__version__ = '0.1.0'
__author__ = "CRISPR Analysis Team"

from weissman_prep.pipeline import prepare_input_data, get_weissman_score
