"""
Configuration settings for the Weissman score input preparation pipeline.
"""

# Modalities understood by the scoring model
MODALITIES = ["CRISPRa", "CRISPRi"]
DEFAULT_MODALITY = "CRISPRa"

# Required columns of the raw inputs
TSS_REQUIRED_COLUMNS = ["gene_symbol", "promoter", "position", "strand", "chr"]
SGRNA_REQUIRED_COLUMNS = ["grna_id", "tss_id", "pam_site", "strand", "spacer_19mer"]
SPACER_COLUMN = "spacer_19mer"
TSS_ID_COLUMN = "tss_id"

# TSS table
TSS_TABLE_COLUMNS = ["gene_symbol", "promoter", "position", "strand", "chr"]
TSS_TABLE_RENAMED = ["gene", "transcripts", "position", "strand", "chromosome"]
CAGE_PEAK_COLUMN = "cage peak ranges"

# P1/P2 (promoter) table
P1P2_TABLE_COLUMNS = ["gene_symbol", "promoter", "chr", "strand", "position"]
P1P2_TABLE_RENAMED = ["gene", "transcript", "chromosome", "strand", "position"]
TSS_SOURCE_LABEL = "CAGE, matched peaks"

# sgRNA table
SGRNA_TABLE_COLUMNS = ["grna_id", "tss_id", "pam_site", "strand"]
SGRNA_TABLE_RENAMED = ["sgId", "tss_id", "position", "strand"]
SGRNA_TABLE_OUTPUT = [
    "sgId",
    "Sublibrary",
    "gene_name",
    "length",
    "pam coordinate",
    "pass_score",
    "position",
    "strand",
    "transcript_list",
]
PASS_SCORE_LABEL = "e39m1"

# Library table
LIBRARY_TABLE_COLUMNS = ["grna_id", "tss_id", "spacer_19mer"]
LIBRARY_TABLE_RENAMED = ["sgId", "tss_id", "sequence"]
LIBRARY_TABLE_OUTPUT = ["sgId", "sublibrary", "gene", "transcripts", "sequence"]

SUBLIBRARY_LABEL = "customLibrary"

# Sonata PAM coordinates (*N*GG) sit two bases upstream of Weissman ones (NG*G*)
PAM_OFFSET = 2

# Prepared table bundle, in scorer argument order
TSS_TABLE = "tssTable"
P1P2_TABLE = "p1p2Table"
SGRNA_TABLE = "sgrnaTable"
LIBRARY_TABLE = "libraryTable"
TABLE_NAMES = [TSS_TABLE, P1P2_TABLE, SGRNA_TABLE, LIBRARY_TABLE]

# Column holding the gene identity in each prepared table
GENE_COLUMNS = {
    TSS_TABLE: "gene",
    P1P2_TABLE: "gene",
    SGRNA_TABLE: "gene_name",
    LIBRARY_TABLE: "gene",
}

# Attributes that must agree across all TSS records of a gene, checked in order
CONSISTENCY_ATTRIBUTES = ["strand", "chromosome"]

# Scorer environment
SCORER_MODULE_NAME = "predictWeissmanScore"
SCORER_FUNCTION_NAME = "predictWeissmanScore"
SCORER_UNSUPPORTED_OS = ("nt",)  # os.name values; Windows

# Output files
TABLE_FILE_SUFFIX = ".txt"
SCORES_FILE_NAME = "weissman_scores.txt"
