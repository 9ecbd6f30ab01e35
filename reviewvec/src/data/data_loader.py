"""
Data Module for ReviewVec

This module handles loading tokenized review corpora, applying the
vocabulary index convention, decoding reviews back to words and wrapping
vectorized data for torch training loops.
"""

import os
import json
import logging
import numpy as np
import pandas as pd
import torch
from torch.utils.data import Dataset
from typing import Dict, List, Optional, Sequence, Tuple

from reviewvec.src.sequence_vectorization import coerce_labels

logger = logging.getLogger(__name__)

# Reserved indices of the standard IMDB vocabulary convention
PAD_CHAR = 0
START_CHAR = 1
OOV_CHAR = 2
INDEX_FROM = 3

Split = Tuple[List[List[int]], np.ndarray]


class ReviewCorpus:
    """
    Class for loading and preparing tokenized review data.
    """

    @staticmethod
    def load_npz(
        filepath: str,
        num_words: Optional[int] = None,
        skip_top: int = 0,
        maxlen: Optional[int] = None,
        seed: int = 113,
        start_char: Optional[int] = START_CHAR,
        oov_char: Optional[int] = OOV_CHAR,
        index_from: int = INDEX_FROM
    ) -> Tuple[Split, Split]:
        """
        Load an IMDB-format archive of tokenized reviews.

        The archive must contain ``x_train``, ``y_train``, ``x_test`` and
        ``y_test``. Raw word ranks are shifted by ``index_from`` so that the
        lowest indices stay free for padding, start and out-of-vocabulary
        markers.

        Args:
            filepath: Path to the .npz archive
            num_words: Keep only the most frequent words; rarer ones become oov_char
            skip_top: Treat the most frequent words as out of vocabulary too
            maxlen: Drop sequences longer than this
            seed: Seed for shuffling train and test splits
            start_char: Marker prepended to every sequence (None to disable)
            oov_char: Replacement for filtered words (None drops them instead)
            index_from: Offset added to every raw word index

        Returns:
            ((x_train, y_train), (x_test, y_test))
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Dataset archive not found: {filepath}")

        with np.load(filepath, allow_pickle=True) as f:
            missing = [k for k in ('x_train', 'y_train', 'x_test', 'y_test') if k not in f.files]
            if missing:
                raise ValueError(f"Archive {filepath} is missing arrays: {missing}")
            x_train, labels_train = f['x_train'], f['y_train']
            x_test, labels_test = f['x_test'], f['y_test']

        rng = np.random.RandomState(seed)

        indices = np.arange(len(x_train))
        rng.shuffle(indices)
        x_train = x_train[indices]
        labels_train = labels_train[indices]

        indices = np.arange(len(x_test))
        rng.shuffle(indices)
        x_test = x_test[indices]
        labels_test = labels_test[indices]

        xs = [list(x) for x in x_train] + [list(x) for x in x_test]
        labels = np.concatenate([labels_train, labels_test])

        if start_char is not None:
            xs = [[start_char] + [w + index_from for w in x] for x in xs]
        elif index_from:
            xs = [[w + index_from for w in x] for x in xs]

        if maxlen:
            keep = [i for i, x in enumerate(xs) if len(x) <= maxlen]
            if not keep:
                raise ValueError(
                    f"After filtering for sequences shorter than maxlen={maxlen}, "
                    f"no sequence was kept"
                )
            n_train_kept = sum(1 for i in keep if i < len(x_train))
            xs = [xs[i] for i in keep]
            labels = labels[keep]
            n_train = n_train_kept
        else:
            n_train = len(x_train)

        if not num_words:
            num_words = max((max(x) for x in xs if x), default=0) + 1

        if oov_char is not None:
            xs = [[w if skip_top <= w < num_words else oov_char for w in x] for x in xs]
        else:
            xs = [[w for w in x if skip_top <= w < num_words] for x in xs]

        logger.info(
            f"Loaded {n_train} training and {len(xs) - n_train} test reviews "
            f"from {filepath} (num_words={num_words})"
        )

        return (xs[:n_train], labels[:n_train]), (xs[n_train:], labels[n_train:])

    @staticmethod
    def load_table(
        filepath: str,
        sequence_column: str = 'tokens',
        label_column: str = 'label'
    ) -> Tuple[List[List[int]], np.ndarray]:
        """
        Load tokenized reviews from a CSV or JSON table.

        Args:
            filepath: Path to the data file (CSV or JSON)
            sequence_column: Column holding token indices (space separated in CSV)
            label_column: Column holding 0/1 labels

        Returns:
            (sequences, labels)
        """
        ext = os.path.splitext(filepath)[1].lower()

        if ext == '.csv':
            df = pd.read_csv(filepath, dtype={sequence_column: str})
        elif ext == '.json':
            df = pd.read_json(filepath)
        else:
            raise ValueError(f"Unsupported file format: {ext}")

        required_columns = [sequence_column, label_column]
        if not all(col in df.columns for col in required_columns):
            raise ValueError(f"DataFrame must contain columns: {required_columns}")

        sequences = []
        for value in df[sequence_column]:
            if isinstance(value, str):
                sequences.append([int(tok) for tok in value.split()])
            elif isinstance(value, (list, tuple, np.ndarray)):
                sequences.append([int(tok) for tok in value])
            else:
                # Empty CSV cells come back as NaN
                sequences.append([])

        labels = df[label_column].to_numpy()

        return sequences, labels

    @staticmethod
    def load_word_index(filepath: str) -> Dict[str, int]:
        """
        Load the word -> rank mapping of a corpus.

        Args:
            filepath: Path to a JSON object mapping words to integer ranks

        Returns:
            Dictionary of word to rank
        """
        with open(filepath, 'r') as f:
            word_index = json.load(f)

        return {word: int(rank) for word, rank in word_index.items()}

    @staticmethod
    def reverse_word_index(word_index: Dict[str, int]) -> Dict[int, str]:
        """Invert a word index into rank -> word."""
        return {rank: word for word, rank in word_index.items()}

    @staticmethod
    def decode_review(
        sequence: Sequence[int],
        reverse_index: Dict[int, str],
        index_from: int = INDEX_FROM,
        unknown: str = '?'
    ) -> str:
        """
        Decode a token sequence back to readable text.

        Indices below ``index_from`` are reserved markers and decode to
        ``unknown``, as do ranks missing from the index.

        Args:
            sequence: Token indices as produced by load_npz
            reverse_index: Rank -> word mapping
            index_from: Offset that was added to raw word ranks
            unknown: Placeholder for reserved or unknown indices

        Returns:
            Space separated words
        """
        return ' '.join(reverse_index.get(i - index_from, unknown) for i in sequence)

    @staticmethod
    def holdout_split(
        x: np.ndarray,
        y: np.ndarray,
        num_validation: int
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Set apart the first ``num_validation`` samples for validation.

        Args:
            x: Feature matrix
            y: Labels aligned with x
            num_validation: Number of leading samples to hold out

        Returns:
            (x_val, y_val, partial_x_train, partial_y_train)
        """
        if len(x) != len(y):
            raise ValueError(f"Got {len(x)} samples but {len(y)} labels")
        if num_validation <= 0 or num_validation >= len(x):
            raise ValueError(
                f"num_validation must be between 1 and {len(x) - 1}, got {num_validation}"
            )

        return x[:num_validation], y[:num_validation], x[num_validation:], y[num_validation:]


class VectorizedReviewDataset(Dataset):
    """
    Dataset over an indicator matrix and its aligned labels.
    """

    def __init__(self, features: np.ndarray, labels: Sequence[int]):
        """
        Initialize the dataset.

        Args:
            features: Indicator matrix of shape (n_samples, vocabulary_size)
            labels: Binary labels of length n_samples
        """
        targets = coerce_labels(labels)
        if len(features) != len(targets):
            raise ValueError(f"Got {len(features)} samples but {len(targets)} labels")

        self.features = torch.as_tensor(np.asarray(features), dtype=torch.float32)
        self.labels = torch.from_numpy(targets)

    def __len__(self) -> int:
        return len(self.labels)

    def __getitem__(self, idx: int) -> Tuple[torch.Tensor, torch.Tensor]:
        return self.features[idx], self.labels[idx]
