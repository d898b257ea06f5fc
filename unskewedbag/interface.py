from .UnskewedBagging import UnskewedBaggingClassifier, UnskewedBaggingRegressor

UNSKEWED_BAGGING_ALGORITHMS = {
    'UnderBag': {'roughly_balanced': False},
    'RBBag': {'roughly_balanced': True},
}

UNSKEWED_BAGGING_ESTIMATORS = {
    'classification': UnskewedBaggingClassifier,
    'regression': UnskewedBaggingRegressor,
}


def get_unskewed_bagging(algorithm='UnderBag', task='classification', **kwargs):
    if algorithm.lower() == 'underbag':
        mode = UNSKEWED_BAGGING_ALGORITHMS['UnderBag']
    elif algorithm.lower() == 'rbbag':
        mode = UNSKEWED_BAGGING_ALGORITHMS['RBBag']
    else:
        raise ValueError(f"Algorithm {algorithm} is not recognized or implemented.")

    if task.lower() not in UNSKEWED_BAGGING_ESTIMATORS:
        raise ValueError(f"Task {task} is not recognized; use 'classification' or 'regression'.")

    if 'roughly_balanced' in kwargs:
        raise ValueError("roughly_balanced is set by the algorithm name")
    return UNSKEWED_BAGGING_ESTIMATORS[task.lower()](**mode, **kwargs)
