"""
Data Module for ReviewVec

This module provides loading and preparation utilities for tokenized review corpora.
"""

from .data_loader import ReviewCorpus, VectorizedReviewDataset

__all__ = ['ReviewCorpus', 'VectorizedReviewDataset']
