"""
ReviewVec Source Module

This module contains the core components of the ReviewVec system.
"""

# Import the top-level modules that should be exposed
from reviewvec.src import (
    sequence_vectorization,
    data,
    models,
    utils
)

__all__ = [
    'sequence_vectorization',
    'data',
    'models',
    'utils'
]
