import numpy as np
import pytest
import torch

from reviewvec.src.sequence_vectorization import (
    SequenceVectorizer,
    vectorize_sequences,
    coerce_labels,
    VectorizationError,
    TokenIndexError,
    InvalidDimensionError,
    InvalidLabelError
)


def test_single_row_marks_present_tokens():
    result = vectorize_sequences([[3, 5]], 10)

    expected = np.zeros((1, 10))
    expected[0, [3, 5]] = 1
    np.testing.assert_array_equal(result, expected)


def test_shape_matches_corpus_and_dimension():
    corpus = [[0], [1, 2, 3], [], [9, 9]]
    result = vectorize_sequences(corpus, 10)

    assert result.shape == (4, 10)
    assert set(np.unique(result)) <= {0, 1}


def test_absent_columns_are_zero():
    result = vectorize_sequences([[0, 4, 7]], 8)

    assert result[0].sum() == 3
    assert list(np.flatnonzero(result[0])) == [0, 4, 7]


def test_duplicate_tokens_do_not_change_row():
    sequence = [2, 7, 7, 1]
    once = vectorize_sequences([sequence], 12)
    twice = vectorize_sequences([sequence + sequence], 12)

    np.testing.assert_array_equal(once, twice)


def test_row_order_is_preserved():
    result = vectorize_sequences([[1], [2], [3]], 5)

    assert [int(np.flatnonzero(row)[0]) for row in result] == [1, 2, 3]


def test_empty_corpus():
    result = vectorize_sequences([], 10000)

    assert result.shape == (0, 10000)


def test_default_dimension_and_dtype():
    result = vectorize_sequences([[9999]])

    assert result.shape == (1, 10000)
    assert result.dtype == np.float32
    assert result[0, 9999] == 1


def test_custom_dtype():
    result = vectorize_sequences([[1]], 3, dtype=np.uint8)

    assert result.dtype == np.uint8


def test_accepts_numpy_sequences():
    corpus = [np.array([1, 3], dtype=np.int32), (0,)]
    result = vectorize_sequences(corpus, np.int64(4))

    np.testing.assert_array_equal(result, [[0, 1, 0, 1], [1, 0, 0, 0]])


def test_token_equal_to_dimension_is_rejected():
    with pytest.raises(TokenIndexError, match="out of range"):
        vectorize_sequences([[10]], 10)


def test_negative_token_is_rejected():
    with pytest.raises(TokenIndexError):
        vectorize_sequences([[0, -1]], 10)


def test_error_reports_row_and_position():
    with pytest.raises(TokenIndexError, match="sequence 1, position 2"):
        vectorize_sequences([[1], [0, 1, 50]], 10)


def test_non_integer_token_is_rejected():
    with pytest.raises(TokenIndexError):
        vectorize_sequences([[1.5]], 10)


@pytest.mark.parametrize("sequence", [
    [True, 3],
    [True],
    np.array([True, False]),
    [[]],
    [[1, 2]],
    np.zeros((1, 0), dtype=np.int64),
    [1, "2"]
])
def test_bool_and_nested_tokens_are_rejected(sequence):
    with pytest.raises(TokenIndexError, match="flat list"):
        vectorize_sequences([sequence], 4)


def test_out_of_range_numpy_row_is_rejected():
    with pytest.raises(TokenIndexError, match="sequence 0, position 1"):
        vectorize_sequences([np.array([1, 4], dtype=np.uint8)], 4)


@pytest.mark.parametrize("dimension", [0, -3, 2.0, "10", True, None])
def test_invalid_dimension(dimension):
    with pytest.raises(InvalidDimensionError):
        vectorize_sequences([[0]], dimension)


def test_errors_are_value_errors():
    assert issubclass(TokenIndexError, VectorizationError)
    assert issubclass(InvalidLabelError, ValueError)


def test_coerce_labels():
    result = coerce_labels([1, 0, 1])

    assert result.dtype == np.float32
    assert result.tolist() == [1.0, 0.0, 1.0]


def test_coerce_labels_accepts_numpy_and_bool():
    result = coerce_labels(np.array([0, 1, 1]))
    assert result.tolist() == [0.0, 1.0, 1.0]

    assert coerce_labels([True, False]).tolist() == [1.0, 0.0]


def test_coerce_labels_empty():
    assert coerce_labels([]).shape == (0,)


@pytest.mark.parametrize("labels", [[2], [0, 1, -1], [0.5], ["1"], [None], [1 + 0j, 0]])
def test_invalid_labels(labels):
    with pytest.raises(InvalidLabelError):
        coerce_labels(labels)


def test_vectorizer_transform():
    vectorizer = SequenceVectorizer(dimension=6)

    result = vectorizer.transform([[1, 2], [5]])

    np.testing.assert_array_equal(result, [[0, 1, 1, 0, 0, 0], [0, 0, 0, 0, 0, 1]])
    assert vectorizer.transform_labels([0, 1]).tolist() == [0.0, 1.0]


def test_vectorizer_rejects_bad_dimension():
    with pytest.raises(InvalidDimensionError):
        SequenceVectorizer(dimension=0)


def test_vectorizer_to_tensors():
    vectorizer = SequenceVectorizer(dimension=4)

    features, labels = vectorizer.to_tensors([[0], [3]], [1, 0])

    assert isinstance(features, torch.Tensor)
    assert features.shape == (2, 4)
    assert features.dtype == torch.float32
    assert labels.tolist() == [1.0, 0.0]

    only_features = vectorizer.to_tensors([[1]])
    assert only_features.shape == (1, 4)


def test_vectorizer_to_tensors_length_mismatch():
    vectorizer = SequenceVectorizer(dimension=4)

    with pytest.raises(ValueError):
        vectorizer.to_tensors([[0], [1]], [1])
