"""
ReviewVec Training Pipeline

This script walks through the full binary review classification example:
loading the tokenized IMDB archive, decoding a review, multi-hot encoding
the corpus, holding out a validation set, training the dense classifier
and evaluating it on the test split.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import the reviewvec package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from reviewvec.src.data import ReviewCorpus
from reviewvec.src.models import ReviewClassifier, ClassifierTrainer, plot_history
from reviewvec.src.sequence_vectorization import SequenceVectorizer
from reviewvec.src.utils import set_seed, setup_logging, save_json
from reviewvec.src.utils.config import config


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Train a sentiment classifier on IMDB reviews.')

    # Data parameters
    parser.add_argument('--data', type=str, default=config.get('data.imdb_path'),
                        help='Path to the IMDB .npz archive')
    parser.add_argument('--word_index', type=str, default=config.get('data.word_index_path'),
                        help='Path to the word index JSON (optional, used for decoding)')
    parser.add_argument('--num_words', type=int, default=config.get('vocabulary_size'),
                        help='Vocabulary size / width of the indicator vectors')
    parser.add_argument('--num_validation', type=int, default=config.get('data.num_validation'),
                        help='Number of training reviews held out for validation')

    # Model parameters
    parser.add_argument('--hidden_units', type=int, default=config.get('training.hidden_units'),
                        help='Units in each hidden layer')

    # Training parameters
    parser.add_argument('--epochs', type=int, default=config.get('training.epochs'),
                        help='Number of training epochs')
    parser.add_argument('--batch_size', type=int, default=config.get('training.batch_size'),
                        help='Batch size for training')
    parser.add_argument('--learning_rate', type=float, default=config.get('training.learning_rate'),
                        help='Learning rate for the optimizer')
    parser.add_argument('--optimizer', type=str, default=config.get('training.optimizer'),
                        help='Optimizer name (rmsprop, adam, adamw, sgd)')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed')

    # Output parameters
    parser.add_argument('--output_dir', type=str, default=config.get('models_dir'),
                        help='Directory for the checkpoint, history and plots')
    parser.add_argument('--device', type=str, default=None,
                        help='Device to use (cpu or cuda)')

    return parser.parse_args()


def main():
    args = parse_args()

    setup_logging()
    set_seed(args.seed)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(exist_ok=True, parents=True)

    print(f"Loading reviews from {args.data}...")
    (train_data, train_labels), (test_data, test_labels) = ReviewCorpus.load_npz(
        args.data,
        num_words=args.num_words,
        seed=config.get('data.seed')
    )
    print(f"Loaded {len(train_data)} training and {len(test_data)} test reviews")

    if args.word_index and Path(args.word_index).exists():
        reverse_index = ReviewCorpus.reverse_word_index(
            ReviewCorpus.load_word_index(args.word_index)
        )
        print("\nFirst training review:")
        print(ReviewCorpus.decode_review(train_data[0], reverse_index))
        print(f"Label: {train_labels[0]}\n")

    vectorizer = SequenceVectorizer(dimension=args.num_words)
    x_train = vectorizer.transform(train_data)
    x_test = vectorizer.transform(test_data)
    y_train = vectorizer.transform_labels(train_labels)
    y_test = vectorizer.transform_labels(test_labels)
    print(f"Training matrix shape: {x_train.shape}")

    x_val, y_val, partial_x_train, partial_y_train = ReviewCorpus.holdout_split(
        x_train, y_train, args.num_validation
    )

    model = ReviewClassifier(input_dim=args.num_words, hidden_units=args.hidden_units)
    trainer = ClassifierTrainer(
        model,
        learning_rate=args.learning_rate,
        optimizer=args.optimizer,
        device=args.device
    )

    history = trainer.fit(
        partial_x_train,
        partial_y_train,
        epochs=args.epochs,
        batch_size=args.batch_size,
        validation_data=(x_val, y_val)
    )

    results = trainer.evaluate(x_test, y_test)
    print(f"\nTest loss: {results['loss']:.4f} - Test accuracy: {results['accuracy']:.4f}")

    trainer.save(output_dir / 'review_classifier.pt')
    save_json({"history": history, "test": results}, str(output_dir / 'history.json'))
    plot_history(history, save_path=output_dir / 'history.png')
    print(f"Results saved to {output_dir}")


if __name__ == '__main__':
    main()
