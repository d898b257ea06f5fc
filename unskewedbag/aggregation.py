"""
Combining ensemble member outputs into one prediction.
"""

import numpy as np

# Sums closer to zero than this count as "no confidence at all".
ZERO_TOLERANCE = 1e-6


def align_proba(proba, member_classes, n_classes):
    """
    Spread a member's probability columns over the full class range.

    Members only know the classes present in their bag. ``member_classes``
    holds the encoded class indices of the member's columns.
    """
    proba = np.asarray(proba, dtype=float)
    if proba.shape[1] == n_classes:
        return proba
    full = np.zeros((proba.shape[0], n_classes))
    full[:, np.asarray(member_classes, dtype=int)] = proba
    return full


def aggregate_probabilities(probas):
    """
    Sum member class distributions and normalize each row.

    Parameters:
        probas: Member probabilities (n_members × n_samples × n_classes)

    Returns:
        distribution: (n_samples × n_classes); rows that sum to zero are
            returned as zeros
    """
    sums = np.sum(np.asarray(probas, dtype=float), axis=0)
    totals = sums.sum(axis=1, keepdims=True)
    degenerate = np.abs(totals) < ZERO_TOLERANCE
    return np.where(degenerate, sums, sums / np.where(degenerate, 1.0, totals))


def aggregate_predictions(predictions):
    """Average member regression outputs (n_members × n_samples)."""
    return np.mean(np.asarray(predictions, dtype=float), axis=0)
