"""
Logging setup for the Weissman score preparation pipeline.
"""

import os
import sys
import logging
import time
import platform
from datetime import datetime
from pathlib import Path
from typing import Optional

import psutil


class ProgressReporter:
    """
    Progress reporting for the table preparation stages.

    Stage messages are logged at INFO level when verbose, DEBUG otherwise,
    so they never change what the pipeline produces.
    """

    def __init__(self, total_steps: int, run_name: str = "Weissman score input", verbose: bool = False):
        """
        Initialize the progress reporter.

        Args:
            total_steps: Total number of stages to report
            run_name: Name used in the start and completion messages
            verbose: Whether stage messages are reported at INFO level
        """
        self.total_steps = total_steps
        self.current_step = 0
        self.run_name = run_name
        self.verbose = verbose
        self.start_time = time.time()
        self.last_update_time = self.start_time
        self.completed_steps = []

        self._log_status(f"Preparing {run_name}")

    def update(self, message: str, step_description: Optional[str] = None):
        """
        Report a completed stage.

        Args:
            message: Stage completion message, e.g. "Done creating TSS table."
            step_description: Optional detail appended to the message
        """
        self.current_step += 1
        self.completed_steps.append(message)
        current_time = time.time()
        step_time = current_time - self.last_update_time

        status = message
        if step_description:
            status += f" ({step_description})"
        self._log_status(status)
        logging.debug(
            f"Step {self.current_step}/{self.total_steps} took {step_time:.2f}s"
        )

        self.last_update_time = current_time
        if self.current_step == self.total_steps:
            elapsed = current_time - self.start_time
            logging.debug(f"{self.run_name} prepared in {elapsed:.2f} seconds")

    def _log_status(self, message: str):
        logging.log(logging.INFO if self.verbose else logging.DEBUG, message)


def setup_logging(output_dir: str = None, run_name: str = None, log_file: str = None,
                  verbose: bool = False) -> str:
    """
    Configure logging with both file and console output.

    Args:
        output_dir: Directory to save log files (optional if log_file is provided)
        run_name: Name of the run for log file naming (optional if log_file is provided)
        log_file: Direct path to the log file (overrides output_dir and run_name)
        verbose: Log DEBUG messages as well

    Returns:
        Path to the log file
    """
    if log_file:
        log_file_path = Path(log_file)
        os.makedirs(log_file_path.parent, exist_ok=True)
    else:
        if not output_dir or not run_name:
            raise ValueError("Either log_file or both output_dir and run_name must be provided")

        os.makedirs(output_dir, exist_ok=True)
        timestamp = datetime.now().strftime('%m-%d-%y_%H-%M')
        log_filename = f"{run_name}_weissman_{timestamp}.log"
        log_file_path = Path(output_dir) / log_filename

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file_path),
            logging.StreamHandler()
        ],
        force=True
    )
    logging.info(f"Log file created at: {log_file_path}")
    return str(log_file_path)


def log_system_info():
    """Log system information to help with debugging."""
    logging.info(f"Python version: {sys.version}")
    logging.info(f"Platform: {platform.platform()}")
    logging.info(f"Python executable: {sys.executable}")

    try:
        mem = psutil.virtual_memory()
        logging.info(f"Memory: {mem.available / (1024**3):.1f} GB available of {mem.total / (1024**3):.1f} GB")
    except (OSError, RuntimeError) as e:
        logging.warning(f"Could not determine memory information: {e}")

    try:
        import pandas
        logging.info(f"Pandas version: {pandas.__version__}")
    except ImportError:
        logging.warning("Pandas not installed")

    try:
        import numpy
        logging.info(f"NumPy version: {numpy.__version__}")
    except ImportError:
        logging.warning("NumPy not installed")


def log_input_parameters(parameters: dict):
    """
    Log input parameters for reproducibility.

    Args:
        parameters: Dictionary of input parameters
    """
    logging.info("===== Input Parameters =====")
    max_key_length = max(len(str(key)) for key in parameters.keys())

    for key, value in parameters.items():
        logging.info(f"{str(key).ljust(max_key_length + 2)}: {value}")

    logging.info("=============================")
