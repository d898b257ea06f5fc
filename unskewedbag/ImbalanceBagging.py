from sklearn.base import BaseEstimator


class BaseImbalanceBagging(BaseEstimator):
    """
    Shared scaffolding for ensembles that train one copy of a base
    estimator per resampled bag.

    Holds the ensemble size, the base estimator and the seed, and routes
    ``estimator__<name>`` parameters to the base estimator.
    """
    def __init__(self, n_estimators=10, estimator=None, random_state=None):
        self.n_estimators = n_estimators
        self.estimator = estimator
        self.random_state = random_state

    def _default_estimator(self):
        raise NotImplementedError("Subclasses should provide a default estimator!")

    def _validate_estimator(self):
        if self.estimator is None:
            return self._default_estimator()
        return self.estimator

    def get_params(self, deep=True):
        params = super().get_params(deep=False)
        if deep:
            estimator = self._validate_estimator()
            if hasattr(estimator, "get_params"):
                for key, value in estimator.get_params(deep=deep).items():
                    params[f"estimator__{key}"] = value
        return params

    def set_params(self, **parameters):
        estimator_params = {}
        valid = super().get_params(deep=False)
        for key, value in parameters.items():
            if key.startswith("estimator__"):
                estimator_params[key.split('__', 1)[1]] = value
            elif key in valid:
                setattr(self, key, value)
            else:
                raise ValueError(f"Invalid parameter {key} for {type(self).__name__}")
        if estimator_params:
            if self.estimator is None:
                self.estimator = self._default_estimator()
            self.estimator.set_params(**estimator_params)
        return self

    def fit(self, X, y):
        raise NotImplementedError("Subclasses should implement the fit method!")
