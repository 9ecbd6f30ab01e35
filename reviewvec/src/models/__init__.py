"""
Models Module for ReviewVec

This module provides the sentiment classifier and its trainer.
"""

from .classifier import ReviewClassifier, ClassifierTrainer, plot_history

__all__ = ['ReviewClassifier', 'ClassifierTrainer', 'plot_history']
