"""
Utilities Module for ReviewVec

This module provides various utility functions used throughout the ReviewVec system.
"""

# Import common utility functions and classes
from .common import set_seed, get_device, setup_logging, save_json, load_json, create_dir

__all__ = ['set_seed', 'get_device', 'setup_logging', 'save_json', 'load_json', 'create_dir']
