"""
Example usage of the ReviewVec vectorizer.

This script shows how tokenized reviews become multi-hot vectors and how a
classifier consumes them, without needing the IMDB archive on disk.
"""

import sys
from pathlib import Path

import numpy as np

# Add parent directory to path so we can import the reviewvec package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from reviewvec.src.models import ReviewClassifier, ClassifierTrainer
from reviewvec.src.sequence_vectorization import (
    SequenceVectorizer,
    TokenIndexError,
    vectorize_sequences,
    coerce_labels
)


def main():
    # Two tiny "reviews" over a 10 word vocabulary
    print(vectorize_sequences([[3, 5]], dimension=10))
    print(coerce_labels([1, 0, 1]))

    try:
        vectorize_sequences([[10]], dimension=10)
    except TokenIndexError as e:
        print(f"Rejected: {e}")

    # Synthetic corpus: positive reviews use words 50-99, negative ones 0-49
    rng = np.random.RandomState(0)
    labels = rng.randint(0, 2, size=200)
    sequences = [
        list(rng.randint(50, 100, size=20) if label else rng.randint(0, 50, size=20))
        for label in labels
    ]

    vectorizer = SequenceVectorizer(dimension=100)
    x = vectorizer.transform(sequences)
    y = vectorizer.transform_labels(labels)

    trainer = ClassifierTrainer(ReviewClassifier(input_dim=100), device='cpu')
    trainer.fit(x, y, epochs=5, batch_size=32)
    print(trainer.evaluate(x, y))


if __name__ == "__main__":
    main()
