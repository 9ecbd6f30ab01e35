import json

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest


RAW_TRAIN = [[1, 2, 3], [4, 5], [6, 7, 8, 9], [1, 1, 1]]
RAW_TRAIN_LABELS = [1, 0, 1, 0]
RAW_TEST = [[2, 4], [9, 8, 7, 6, 5]]
RAW_TEST_LABELS = [0, 1]


def object_array(sequences):
    arr = np.empty(len(sequences), dtype=object)
    for i, sequence in enumerate(sequences):
        arr[i] = list(sequence)
    return arr


@pytest.fixture
def imdb_archive(tmp_path):
    """Small archive in the IMDB .npz layout with raw (unshifted) word ranks."""
    path = tmp_path / 'imdb.npz'
    np.savez(
        path,
        x_train=object_array(RAW_TRAIN),
        y_train=np.array(RAW_TRAIN_LABELS),
        x_test=object_array(RAW_TEST),
        y_test=np.array(RAW_TEST_LABELS)
    )
    return str(path)


@pytest.fixture
def word_index_file(tmp_path):
    path = tmp_path / 'word_index.json'
    path.write_text(json.dumps({"the": 1, "movie": 2, "great": 3, "was": 4}))
    return str(path)
