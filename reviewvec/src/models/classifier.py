"""
Review Classifier for ReviewVec

This module defines a small fully connected network that predicts review
sentiment from multi-hot vectors, together with a trainer that fits it,
tracks training/validation history and persists checkpoints.
"""

import logging
import numpy as np
import pandas as pd
import torch
import torch.nn as nn
import matplotlib.pyplot as plt
from pathlib import Path
from sklearn.metrics import accuracy_score
from torch.utils.data import DataLoader
from typing import Dict, List, Optional, Tuple, Union

from reviewvec.src.data import VectorizedReviewDataset
from reviewvec.src.utils.common import get_device

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, torch.Tensor]


class ReviewClassifier(nn.Module):
    """
    Dense binary classifier over indicator vectors.

    Two ReLU hidden layers followed by a single sigmoid unit giving the
    probability that a review is positive.
    """

    def __init__(self, input_dim: int = 10000, hidden_units: int = 16):
        """
        Initialize the classifier.

        Args:
            input_dim: Width of the indicator vectors (vocabulary size)
            hidden_units: Size of each hidden layer
        """
        super().__init__()

        self.input_dim = input_dim
        self.hidden_units = hidden_units

        self.network = nn.Sequential(
            nn.Linear(input_dim, hidden_units),
            nn.ReLU(),
            nn.Linear(hidden_units, hidden_units),
            nn.ReLU(),
            nn.Linear(hidden_units, 1),
            nn.Sigmoid()
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Args:
            x: Tensor of shape (batch_size, input_dim)

        Returns:
            Probabilities of shape (batch_size, 1)
        """
        return self.network(x)

    def predict_proba(self, x: torch.Tensor) -> torch.Tensor:
        """Positive-class probabilities without tracking gradients."""
        was_training = self.training
        self.eval()
        with torch.no_grad():
            probs = self(x)
        self.train(was_training)
        return probs

    def predict(self, x: torch.Tensor, threshold: float = 0.5) -> torch.Tensor:
        """Hard 0/1 predictions of shape (batch_size, 1)."""
        return (self.predict_proba(x) > threshold).float()


class ClassifierTrainer:
    """
    Trainer for the ReviewClassifier.

    Drives torch's optimizer and binary cross-entropy loss over mini-batches
    and records per-epoch metrics.
    """

    OPTIMIZERS = {
        'rmsprop': torch.optim.RMSprop,
        'adam': torch.optim.Adam,
        'adamw': torch.optim.AdamW,
        'sgd': torch.optim.SGD
    }

    def __init__(
        self,
        model: ReviewClassifier,
        learning_rate: float = 1e-3,
        optimizer: str = 'rmsprop',
        device: Optional[str] = None
    ):
        """
        Initialize the trainer.

        Args:
            model: Classifier to train
            learning_rate: Learning rate for the optimizer
            optimizer: One of 'rmsprop', 'adam', 'adamw', 'sgd'
            device: The device to use (cpu or cuda)
        """
        optimizer_cls = self.OPTIMIZERS.get(optimizer.lower())
        if optimizer_cls is None:
            raise ValueError(
                f"Unknown optimizer '{optimizer}'. Choose from {sorted(self.OPTIMIZERS)}"
            )

        self.device = get_device(device)
        self.model = model.to(self.device)
        self.learning_rate = learning_rate
        self.optimizer_name = optimizer.lower()
        self.optimizer = optimizer_cls(self.model.parameters(), lr=learning_rate)
        self.loss_fn = nn.BCELoss()

    def _check_inputs(self, x: ArrayLike, y: ArrayLike) -> None:
        if x.ndim != 2 or x.shape[1] != self.model.input_dim:
            raise ValueError(
                f"Expected features of shape (n, {self.model.input_dim}), got {tuple(x.shape)}"
            )
        if len(x) != len(y):
            raise ValueError(f"Got {len(x)} samples but {len(y)} labels")

    def _make_loader(self, x: ArrayLike, y: ArrayLike, batch_size: int, shuffle: bool) -> DataLoader:
        self._check_inputs(x, y)
        if isinstance(x, torch.Tensor):
            x = x.cpu().numpy()
        if isinstance(y, torch.Tensor):
            y = y.cpu().numpy()
        dataset = VectorizedReviewDataset(x, np.asarray(y).reshape(-1).tolist())
        return DataLoader(dataset, batch_size=batch_size, shuffle=shuffle)

    def _run_epoch(
        self,
        loader: DataLoader,
        train: bool,
        predictions: Optional[List[np.ndarray]] = None
    ) -> Tuple[float, float]:
        self.model.train(train)

        total_loss = 0.0
        correct = 0
        total = 0

        with torch.set_grad_enabled(train):
            for features, labels in loader:
                features = features.to(self.device)
                labels = labels.to(self.device).unsqueeze(1)

                probs = self.model(features)
                loss = self.loss_fn(probs, labels)

                if train:
                    self.optimizer.zero_grad()
                    loss.backward()
                    self.optimizer.step()

                total_loss += loss.item() * labels.size(0)
                predicted = (probs > 0.5).float()
                if predictions is not None:
                    predictions.append(predicted.detach().cpu().numpy().reshape(-1))

                correct += (predicted == labels).sum().item()
                total += labels.size(0)

        self.model.eval()

        if total == 0:
            return 0.0, 0.0
        return total_loss / total, correct / total

    def fit(
        self,
        x: ArrayLike,
        y: ArrayLike,
        epochs: int = 20,
        batch_size: int = 512,
        validation_data: Optional[Tuple[ArrayLike, ArrayLike]] = None,
        shuffle: bool = True,
        verbose: bool = True
    ) -> Dict[str, List[float]]:
        """
        Train the classifier.

        Args:
            x: Indicator matrix of shape (n_samples, input_dim)
            y: Binary labels
            epochs: Number of passes over the training data
            batch_size: Mini-batch size
            validation_data: Optional (x_val, y_val) evaluated after every epoch
            shuffle: Shuffle training samples each epoch
            verbose: Print a line per epoch

        Returns:
            Dictionary containing training history
        """
        if epochs < 1:
            raise ValueError(f"epochs must be at least 1, got {epochs}")

        train_loader = self._make_loader(x, y, batch_size, shuffle)
        val_loader = None
        if validation_data is not None:
            val_loader = self._make_loader(*validation_data, batch_size=batch_size, shuffle=False)

        history = {
            "loss": [],
            "accuracy": [],
            "val_loss": [],
            "val_accuracy": []
        }

        for epoch in range(epochs):
            loss, accuracy = self._run_epoch(train_loader, train=True)
            history["loss"].append(loss)
            history["accuracy"].append(accuracy)

            message = f"Epoch {epoch+1}/{epochs} - Loss: {loss:.4f} - Accuracy: {accuracy:.4f}"

            if val_loader is not None:
                val_loss, val_accuracy = self._run_epoch(val_loader, train=False)
                history["val_loss"].append(val_loss)
                history["val_accuracy"].append(val_accuracy)
                message += f" - Val Loss: {val_loss:.4f} - Val Accuracy: {val_accuracy:.4f}"

            logger.debug(message)
            if verbose:
                print(message)

        return history

    def predict_proba(self, x: ArrayLike) -> np.ndarray:
        """Positive-class probabilities as a flat array."""
        features = torch.as_tensor(x, dtype=torch.float32).to(self.device)
        return self.model.predict_proba(features).cpu().numpy().reshape(-1)

    def evaluate(self, x: ArrayLike, y: ArrayLike, batch_size: int = 512) -> Dict[str, float]:
        """
        Compute loss and accuracy on held-out data.

        Args:
            x: Indicator matrix
            y: Binary labels

        Returns:
            Dictionary with "loss" and "accuracy"
        """
        loader = self._make_loader(x, y, batch_size, shuffle=False)
        if len(loader.dataset) == 0:
            raise ValueError("Cannot evaluate on an empty split")

        predictions = []
        loss, _ = self._run_epoch(loader, train=False, predictions=predictions)

        return {
            "loss": loss,
            "accuracy": float(accuracy_score(loader.dataset.labels.numpy(), np.concatenate(predictions)))
        }

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the model weights and architecture.

        Args:
            path: Checkpoint file path
        """
        path = Path(path)
        path.parent.mkdir(exist_ok=True, parents=True)

        torch.save({
            "state_dict": self.model.state_dict(),
            "input_dim": self.model.input_dim,
            "hidden_units": self.model.hidden_units
        }, path)

        logger.info(f"Model saved to {path}")

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        learning_rate: float = 1e-3,
        optimizer: str = 'rmsprop',
        device: Optional[str] = None
    ) -> 'ClassifierTrainer':
        """
        Restore a trainer from a checkpoint written by save().

        Args:
            path: Checkpoint file path
            learning_rate: Learning rate for further training
            optimizer: Optimizer name for further training
            device: The device to use (cpu or cuda)

        Returns:
            ClassifierTrainer wrapping the restored model
        """
        checkpoint = torch.load(path, map_location='cpu')

        model = ReviewClassifier(
            input_dim=checkpoint["input_dim"],
            hidden_units=checkpoint["hidden_units"]
        )
        model.load_state_dict(checkpoint["state_dict"])
        model.eval()

        logger.info(f"Model loaded from {path}")

        return cls(model, learning_rate=learning_rate, optimizer=optimizer, device=device)


def plot_history(
    history: Dict[str, List[float]],
    save_path: Optional[Union[str, Path]] = None
) -> plt.Figure:
    """
    Plot training and validation loss and accuracy per epoch.

    Args:
        history: History dictionary returned by ClassifierTrainer.fit
        save_path: Optional path to save the figure

    Returns:
        The matplotlib figure
    """
    if not history.get("loss"):
        raise ValueError("History has no recorded epochs to plot")

    frame = pd.DataFrame({k: v for k, v in history.items() if v})
    frame.index = np.arange(1, len(frame) + 1)

    fig, (loss_ax, acc_ax) = plt.subplots(1, 2, figsize=(12, 5))

    loss_ax.plot(frame.index, frame["loss"], 'bo', label='Training loss')
    if "val_loss" in frame:
        loss_ax.plot(frame.index, frame["val_loss"], 'b', label='Validation loss')
    loss_ax.set_title('Training and validation loss')
    loss_ax.set_xlabel('Epochs')
    loss_ax.set_ylabel('Loss')
    loss_ax.legend()

    acc_ax.plot(frame.index, frame["accuracy"], 'bo', label='Training accuracy')
    if "val_accuracy" in frame:
        acc_ax.plot(frame.index, frame["val_accuracy"], 'b', label='Validation accuracy')
    acc_ax.set_title('Training and validation accuracy')
    acc_ax.set_xlabel('Epochs')
    acc_ax.set_ylabel('Accuracy')
    acc_ax.legend()

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300)

    return fig
