# utils.py
import logging

import numpy as np
from sklearn.base import is_regressor
from sklearn.model_selection import train_test_split
from sklearn.metrics import balanced_accuracy_score, classification_report, mean_squared_error

from .UnskewedBagging import drop_missing_targets
from .sampling import partition_classes

logger = logging.getLogger(__name__)


def minority_mask(y, task='classification'):
    """
    Boolean mask of the rows that land in the minority pool.

    Classification targets are coded by their position among the sorted
    labels, regression targets are used as they are.
    """
    y = np.asarray(y)
    if task == 'classification':
        codes = np.unique(y, return_inverse=True)[1]
    elif task == 'regression':
        codes = y.astype(float)
    else:
        raise ValueError(f"Task {task} is not recognized; use 'classification' or 'regression'.")
    minority, _ = partition_classes(codes)
    mask = np.zeros(len(y), dtype=bool)
    mask[minority] = True
    return mask


def preprocess_data(X, y, test_size=0.2, random_state=None, stratify=True,
                    task='classification'):
    """
    Drop unlabelled rows and split into train/test sets

    Stratification keys on the minority / majority grouping used for
    bagging, so both splits keep the imbalance ratio even for binary-coded
    regression targets.

    Parameters:
        X: Feature matrix
        y: Target vector
        test_size: Proportion of test samples (default: 0.2)
        random_state: Random seed for reproducibility
        stratify: Whether to preserve the minority share (default: True)
        task: 'classification' or 'regression'

    Returns:
        X_train, X_test, y_train, y_test
    """
    X, y = drop_missing_targets(X, y)
    groups = minority_mask(y, task) if stratify else None
    if groups is not None:
        logger.debug("Splitting %d minority / %d majority rows", int(groups.sum()), int((~groups).sum()))
    return train_test_split(
        X, y,
        test_size=test_size,
        stratify=groups,
        random_state=random_state
    )


def evaluate_model(model, X_test, y_test, verbose=True):
    """
    Evaluate model performance

    Classifiers are scored with balanced accuracy, regressors with the
    mean squared error.

    Parameters:
        model: Trained estimator
        X_test: Test features
        y_test: True test targets
        verbose: Whether to log a detailed report (default: True)

    Returns:
        Dictionary of evaluation metrics
    """
    y_pred = model.predict(X_test)

    if is_regressor(model):
        results = {'mean_squared_error': mean_squared_error(y_test, y_pred)}
        if verbose:
            logger.info("Mean Squared Error: %.4f", results['mean_squared_error'])
        return results

    results = {
        'balanced_accuracy': balanced_accuracy_score(y_test, y_pred),
    }

    if verbose:
        logger.info("Classification Report:\n%s", classification_report(y_test, y_pred, zero_division=0))
        logger.info("Balanced Accuracy: %.4f", results['balanced_accuracy'])

    return results
