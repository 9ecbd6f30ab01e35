"""
ReviewVec: Multi-hot Preprocessing for Binary Review Classification

This package turns tokenized movie reviews into fixed-width indicator
vectors and trains a small dense sentiment classifier on them.
"""

__version__ = '0.1.0'
