"""
Scoring model interface for Weissman on-target scores.

The CRISPRa/CRISPRi scoring model itself lives outside this package. It is
handed the four prepared tables and the modality and returns a score table.
"""

import sys
import logging
import warnings
import importlib.util
import pandas as pd
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from weissman_prep.core.config import (
    TABLE_NAMES,
    SGRNA_TABLE,
    SCORER_MODULE_NAME,
    SCORER_FUNCTION_NAME,
    SCORER_UNSUPPORTED_OS
)
from weissman_prep.core.validation import validate_modality, check_scorer_environment


class WeissmanScorer:
    """
    Base class for scoring models.

    Subclasses implement `predict`, which receives the prepared tables keyed
    by the scorer's argument names (tssTable, p1p2Table, sgrnaTable,
    libraryTable).
    """

    unsupported_platforms = SCORER_UNSUPPORTED_OS

    def predict(self, tables: Dict[str, pd.DataFrame], modality: str,
                verbose: bool = False) -> pd.DataFrame:
        raise NotImplementedError


class CallableScorer(WeissmanScorer):
    """Wrap a plain function taking the tables and modality as keyword arguments."""

    def __init__(self, func: Callable, unsupported_platforms=SCORER_UNSUPPORTED_OS):
        self.func = func
        self.unsupported_platforms = tuple(unsupported_platforms)

    def predict(self, tables, modality, verbose=False):
        return self.func(modality=modality, verbose=verbose, **tables)


class ModuleScorer(WeissmanScorer):
    """
    Load the scoring model from a Python module on disk.

    The module (predictWeissmanScore.py by default) must expose a
    `predictWeissmanScore(tssTable, p1p2Table, sgrnaTable, libraryTable,
    modality, verbose)` function. The module is imported on first use, with
    its directory on sys.path only for the duration of the import.
    """

    def __init__(self, module_dir: Union[str, Path], module_name: str = SCORER_MODULE_NAME,
                 function_name: str = SCORER_FUNCTION_NAME):
        self.module_dir = Path(module_dir)
        self.module_name = module_name
        self.function_name = function_name
        self._func = None

    def _load(self) -> Callable:
        if self._func is not None:
            return self._func

        module_path = self.module_dir / f"{self.module_name}.py"
        if not module_path.exists():
            raise FileNotFoundError(f"Scoring module not found: {module_path}")

        logging.info(f"Loading scoring module from {module_path}")
        # sibling modules of the model are importable while it loads
        module_dir = str(self.module_dir)
        added = module_dir not in sys.path
        if added:
            sys.path.insert(0, module_dir)
        try:
            spec = importlib.util.spec_from_file_location(self.module_name, module_path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        finally:
            if added and module_dir in sys.path:
                sys.path.remove(module_dir)

        if not hasattr(module, self.function_name):
            raise AttributeError(f"{module_path} does not define {self.function_name}()")
        self._func = getattr(module, self.function_name)
        return self._func

    def predict(self, tables, modality, verbose=False):
        func = self._load()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            return func(modality=modality, verbose=verbose, **tables)


def as_scorer(scorer: Union[WeissmanScorer, Callable]) -> WeissmanScorer:
    """Accept a scorer object or a bare function."""
    if hasattr(scorer, "predict"):
        return scorer
    if callable(scorer):
        return CallableScorer(scorer)
    raise TypeError(f"Expected a scorer with a predict() method or a callable, got {type(scorer).__name__}")


def predict_weissman_score(scorer: Union[WeissmanScorer, Callable],
                           tables: Dict[str, pd.DataFrame],
                           modality: str,
                           verbose: bool = False,
                           os_name: Optional[str] = None) -> pd.DataFrame:
    """
    Score the prepared tables with the external model.

    Args:
        scorer: Scoring model, or a function with the same keyword interface
        tables: The four prepared tables keyed by table name
        modality: 'CRISPRa' or 'CRISPRi'
        verbose: Passed through to the model
        os_name: Platform override for the environment check

    Returns:
        Score table as returned by the model, one row per scored sgRNA

    Raises:
        UnsupportedEnvironmentError: If the model cannot run on this platform
        InvalidModalityError: If modality is not recognized
    """
    scorer = as_scorer(scorer)
    validate_modality(modality)
    check_scorer_environment(scorer, os_name=os_name)

    missing_tables = [name for name in TABLE_NAMES if name not in tables]
    if missing_tables:
        raise KeyError(f"Prepared tables missing: {', '.join(missing_tables)}")

    logging.info(
        f"Scoring {len(tables[SGRNA_TABLE])} sgRNA(s) with {type(scorer).__name__} ({modality})"
    )
    scores = scorer.predict({name: tables[name] for name in TABLE_NAMES}, modality, verbose=verbose)
    if not isinstance(scores, pd.DataFrame):
        scores = pd.DataFrame(scores)
    logging.info(f"Scoring returned {len(scores)} row(s)")
    return scores
