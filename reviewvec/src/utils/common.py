"""
Common utilities for ReviewVec.

This module contains helpers shared by the data, model and example code.
"""

import os
import json
import random
import logging
import numpy as np
import torch
from pathlib import Path
from typing import Dict, Any, Union, Optional


def set_seed(seed: int = 42, deterministic: bool = True) -> None:
    """
    Seed python, numpy and torch so training runs can be repeated.

    Args:
        seed: Random seed to use
        deterministic: Also pin cuDNN to deterministic kernels
    """
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)

    torch.backends.cudnn.deterministic = deterministic
    torch.backends.cudnn.benchmark = not deterministic


def get_device(device: Optional[str] = None) -> str:
    """Return the requested device, or cuda when available and cpu otherwise."""
    return device if device else ('cuda' if torch.cuda.is_available() else 'cpu')


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_str: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
) -> logging.Logger:
    """
    Set up logging for the reviewvec logger.

    Args:
        log_file: Optional file path to save logs
        level: Logging level
        format_str: Format string for log messages

    Returns:
        Configured logger object
    """
    logger = logging.getLogger('reviewvec')
    logger.setLevel(level)

    formatter = logging.Formatter(format_str)

    # Avoid stacking duplicate console handlers on repeated calls
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        create_dir(os.path.dirname(log_file))
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _to_builtin(value):
    # numpy scalars and arrays end up in histories and metrics
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def save_json(data: Dict[str, Any], file_path: Union[str, Path]) -> None:
    """
    Write a dictionary (training history, metrics, ...) as indented JSON.

    Parent directories are created as needed.
    """
    path = Path(file_path)
    create_dir(path.parent)

    path.write_text(json.dumps(data, indent=2, default=_to_builtin))


def load_json(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON file written by save_json."""
    return json.loads(Path(file_path).read_text())


def create_dir(directory: Union[str, Path]) -> None:
    """Create directory if it doesn't exist."""
    if directory and not os.path.exists(directory):
        os.makedirs(directory)
