"""
Sequence Vectorization Module for ReviewVec

This module turns tokenized reviews into multi-hot indicator vectors and
binary labels into float arrays.
"""

from .model import (
    DEFAULT_DIMENSION,
    SequenceVectorizer,
    vectorize_sequences,
    coerce_labels,
    VectorizationError,
    TokenIndexError,
    InvalidDimensionError,
    InvalidLabelError
)

__all__ = [
    'DEFAULT_DIMENSION',
    'SequenceVectorizer',
    'vectorize_sequences',
    'coerce_labels',
    'VectorizationError',
    'TokenIndexError',
    'InvalidDimensionError',
    'InvalidLabelError'
]
