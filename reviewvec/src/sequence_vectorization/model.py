"""
Sequence Vectorization Module for ReviewVec

This module turns tokenized reviews (lists of integer word indices) into
fixed-width binary indicator vectors, and review labels into float arrays,
so both can be fed to a dense classifier.
"""

import logging
import numbers
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import torch

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = 10000


class VectorizationError(ValueError):
    """Base class for invalid vectorizer input."""


class TokenIndexError(VectorizationError):
    """A token index falls outside [0, dimension)."""


class InvalidDimensionError(VectorizationError):
    """The requested vector width is not a positive integer."""


class InvalidLabelError(VectorizationError):
    """A label is not exactly 0 or 1."""


def _check_dimension(dimension) -> int:
    if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral):
        raise InvalidDimensionError(
            f"Dimension must be a positive integer, got {dimension!r}"
        )
    if dimension <= 0:
        raise InvalidDimensionError(
            f"Dimension must be a positive integer, got {dimension}"
        )
    return int(dimension)


def _is_token(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def _out_of_range(row: int, position: int, token, dimension: int) -> TokenIndexError:
    return TokenIndexError(
        f"Token index {token} at sequence {row}, position {position} "
        f"is out of range [0, {dimension})"
    )


def _not_flat(row: int) -> TokenIndexError:
    return TokenIndexError(f"Sequence {row} must be a flat list of integer token indices")


def _token_array(row: int, sequence: Sequence[int], dimension: int) -> np.ndarray:
    # Arrays are checked by dtype; anything else element by element, so
    # numpy never gets the chance to upcast bools or nested lists
    if isinstance(sequence, np.ndarray):
        if sequence.ndim != 1:
            raise _not_flat(row)
        if sequence.size == 0:
            return np.empty(0, dtype=np.int64)
        if sequence.dtype.kind not in 'iu':
            raise _not_flat(row)

        out_of_range = (sequence < 0) | (sequence >= dimension)
        if out_of_range.any():
            position = int(np.argmax(out_of_range))
            raise _out_of_range(row, position, sequence[position], dimension)

        return sequence.astype(np.int64)

    tokens = list(sequence)
    for position, token in enumerate(tokens):
        if not _is_token(token):
            raise _not_flat(row)
        if not 0 <= token < dimension:
            raise _out_of_range(row, position, token, dimension)

    return np.asarray(tokens, dtype=np.int64)


def vectorize_sequences(
    sequences: Iterable[Sequence[int]],
    dimension: int = DEFAULT_DIMENSION,
    dtype=np.float32
) -> np.ndarray:
    """
    Multi-hot encode a corpus of token index sequences.

    Row i of the result has a 1 in column t for every token t that appears
    in sequence i and 0 everywhere else. Repeated tokens count once.

    Args:
        sequences: Ordered collection of integer token sequences
        dimension: Vocabulary size, i.e. the width of every output row
        dtype: Numpy dtype of the returned matrix

    Returns:
        Array of shape (len(sequences), dimension)

    Raises:
        InvalidDimensionError: If dimension is not a positive integer
        TokenIndexError: If any token is not an integer in [0, dimension)
    """
    dimension = _check_dimension(dimension)
    sequences = list(sequences)

    # Validate everything before allocating so no partial matrix escapes
    token_rows = [
        _token_array(row, sequence, dimension)
        for row, sequence in enumerate(sequences)
    ]

    results = np.zeros((len(token_rows), dimension), dtype=dtype)
    for row, tokens in enumerate(token_rows):
        results[row, tokens] = 1

    logger.debug(f"Vectorized {len(token_rows)} sequences into width {dimension}")

    return results


def coerce_labels(raw_labels: Iterable[Union[int, float, bool]]) -> np.ndarray:
    """
    Convert binary labels to a float32 array.

    Args:
        raw_labels: Ordered labels, each exactly 0 or 1

    Returns:
        1-D float32 array with the same values in the same order

    Raises:
        InvalidLabelError: If any label is not 0 or 1
    """
    labels = list(raw_labels)

    for position, label in enumerate(labels):
        if not isinstance(label, (numbers.Real, np.bool_)) or label not in (0, 1):
            raise InvalidLabelError(
                f"Invalid label value {label!r} at position {position}; expected 0 or 1"
            )

    return np.asarray(labels, dtype=np.float32).reshape(-1)


class SequenceVectorizer:
    """
    Multi-hot vectorizer bound to a fixed vocabulary size.

    Keeps the vector width and output dtype so that training, validation
    and test corpora are all encoded the same way.
    """

    def __init__(self, dimension: int = DEFAULT_DIMENSION, dtype=np.float32):
        """
        Initialize the vectorizer.

        Args:
            dimension: Vocabulary size / output row width
            dtype: Numpy dtype of produced matrices
        """
        self.dimension = _check_dimension(dimension)
        self.dtype = dtype

    def transform(self, sequences: Iterable[Sequence[int]]) -> np.ndarray:
        """Encode a corpus into an indicator matrix."""
        return vectorize_sequences(sequences, self.dimension, self.dtype)

    def transform_labels(self, labels: Iterable[int]) -> np.ndarray:
        """Coerce binary labels to float32."""
        return coerce_labels(labels)

    def to_tensors(
        self,
        sequences: Iterable[Sequence[int]],
        labels: Optional[Iterable[int]] = None,
        device: Optional[str] = None
    ) -> Union[torch.Tensor, Tuple[torch.Tensor, torch.Tensor]]:
        """
        Encode a corpus (and optionally its labels) straight to torch tensors.

        Args:
            sequences: Ordered collection of integer token sequences
            labels: Optional binary labels aligned with sequences
            device: Target device (defaults to cpu)

        Returns:
            Feature tensor, or (features, labels) when labels are given
        """
        device = device or 'cpu'
        features = torch.from_numpy(self.transform(sequences)).to(device)

        if labels is None:
            return features

        targets = torch.from_numpy(self.transform_labels(labels)).to(device)
        if targets.shape[0] != features.shape[0]:
            raise ValueError(
                f"Got {features.shape[0]} sequences but {targets.shape[0]} labels"
            )

        return features, targets

    def __repr__(self) -> str:
        return f"SequenceVectorizer(dimension={self.dimension})"
