#!/usr/bin/env python3
"""
Prepare Weissman score input tables and optionally score them.

This script reads a TSS table and an sgRNA info table, builds the TSS, P1/P2,
sgRNA and library tables expected by the CRISPRa/CRISPRi scoring model, and
writes them as tab-delimited files. When a scoring module directory is given,
the prepared tables are also scored.

Usage:
    run_weissman_score --tss tss.csv --sgrna sgrna_info.txt -o results/
    run_weissman_score --tss tss.csv --sgrna sgrna_info.txt -o results/ \\
        --scorer-dir /path/to/crisprai --modality CRISPRi
"""

import os
import sys
import argparse
import logging
from pathlib import Path

from weissman_prep.core.config import MODALITIES, DEFAULT_MODALITY, SCORES_FILE_NAME
from weissman_prep.core.exceptions import WeissmanPrepError
from weissman_prep.core.logging_setup import setup_logging, log_system_info, log_input_parameters
from weissman_prep.core.file_handling import read_input_table, write_input_tables, write_table
from weissman_prep.core.validation import validate_modality, check_scorer_environment
from weissman_prep.analysis.scoring import ModuleScorer, predict_weissman_score
from weissman_prep.pipeline import prepare_input_data


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Prepare CRISPRa/CRISPRi sgRNA tables for Weissman score prediction"
    )

    # Input/output arguments
    parser.add_argument("--tss", required=True, help="TSS table (.csv, otherwise tab-delimited)")
    parser.add_argument("--sgrna", required=True, help="sgRNA info table (.csv, otherwise tab-delimited)")
    parser.add_argument("-o", "--output-dir", required=True, help="Directory for prepared tables and scores")
    parser.add_argument("--name", default="weissman", help="Run name used for the log file (default: weissman)")

    # Scoring options
    parser.add_argument("--modality", choices=MODALITIES, default=DEFAULT_MODALITY,
                        help=f"CRISPR modality (default: {DEFAULT_MODALITY})")
    parser.add_argument("--scorer-dir",
                        help="Directory holding predictWeissmanScore.py; tables are only prepared when omitted")
    parser.add_argument("-v", "--verbose", action="store_true", help="Report progress after each stage")

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(log_file=os.path.join(args.output_dir, f"{args.name}.log"), verbose=args.verbose)
    log_system_info()
    log_input_parameters(vars(args))

    try:
        validate_modality(args.modality)
        scorer = None
        if args.scorer_dir:
            scorer = ModuleScorer(args.scorer_dir)
            check_scorer_environment(scorer)

        tss_df = read_input_table(args.tss)
        sgrna_df = read_input_table(args.sgrna)
        tables = prepare_input_data(tss_df, sgrna_df, verbose=args.verbose)
        write_input_tables(tables, args.output_dir)

        if scorer is not None:
            scores = predict_weissman_score(scorer, tables, args.modality, verbose=args.verbose)
            write_table(scores, Path(args.output_dir) / SCORES_FILE_NAME)
    except (WeissmanPrepError, FileNotFoundError) as e:
        logging.error(str(e))
        return 1

    logging.info("Weissman score preparation complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
