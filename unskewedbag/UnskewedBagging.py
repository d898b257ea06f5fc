# UnskewedBagging.py
import logging
import numbers
import warnings

import numpy as np
import pandas as pd
from sklearn.base import ClassifierMixin, RegressorMixin, clone
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor
from sklearn.utils import check_random_state
from sklearn.utils.validation import check_X_y, check_array, check_is_fitted

from .ImbalanceBagging import BaseImbalanceBagging
from .Measures import MeasureAccumulator, produces_measures
from .aggregation import aggregate_predictions, aggregate_probabilities, align_proba
from .exceptions import MeasuresNotSupportedError, UnsupportedMeasureError
from .sampling import SEED_BOUND, BagSampler, compute_goals, partition_classes

logger = logging.getLogger(__name__)


def drop_missing_targets(X, y):
    """Remove the rows whose target is missing (None or NaN)."""
    y = np.asarray(y)
    if y.ndim == 2 and y.shape[1] == 1:
        y = y.ravel()
    labelled = ~pd.isna(y)
    if labelled.all():
        return X, y
    logger.debug("Dropping %d row(s) with a missing target", int((~labelled).sum()))
    if hasattr(X, "iloc"):
        return X.iloc[labelled], y[labelled]
    return np.asarray(X)[labelled], y[labelled]


class _BaseUnskewedBagging(BaseImbalanceBagging):
    """
    Bagging over class-rebalanced resamples of a binary-coded dataset.

    The training rows are split into a minority and a majority pool. Every bag
    holds all ``minority_goal`` minority draws followed by ``majority_goal``
    majority draws, where the majority goal comes either from a fixed ratio
    (UnderBagging) or from a negative binomial draw made once per fit
    (Roughly Balanced Bagging).

    Sampling without replacement removes drawn rows from their pool for the
    remainder of the fit, so pools deplete across bags and a later bag that
    needs more rows than are left raises ``InsufficientPoolError``.

    Parameters:
        n_estimators: Number of bags / ensemble members
        estimator: Base estimator, cloned for every bag
        bag_size_percent: Majority rows per bag as a fraction of the minority
            pool size (1.0 = 100%), used unless ``roughly_balanced`` is set
        roughly_balanced: Use Roughly Balanced Bagging
        minority_chance: Chance of drawing a minority row on each trial of
            Roughly Balanced Bagging; values outside (0, 1) give balanced bags
        no_replacement_minority: Don't sample with replacement on the minority class
        no_replacement_majority: Don't sample with replacement on the majority class
        calc_out_of_bag: Reserved; the out-of-bag error is not computed
        random_state: Seed of the master random stream
        verbose: Log per-member progress when > 0
    """
    def __init__(self, n_estimators=10, estimator=None, bag_size_percent=1.0,
                 roughly_balanced=False, minority_chance=0.5,
                 no_replacement_minority=False, no_replacement_majority=False,
                 calc_out_of_bag=False, random_state=None, verbose=0):
        super().__init__(n_estimators=n_estimators,
                         estimator=estimator,
                         random_state=random_state)
        self.bag_size_percent = bag_size_percent
        self.roughly_balanced = roughly_balanced
        self.minority_chance = minority_chance
        self.no_replacement_minority = no_replacement_minority
        self.no_replacement_majority = no_replacement_majority
        self.calc_out_of_bag = calc_out_of_bag
        self.verbose = verbose

    def _check_params(self):
        if (not isinstance(self.n_estimators, numbers.Integral)
                or isinstance(self.n_estimators, bool) or self.n_estimators < 1):
            raise ValueError(f"n_estimators must be a positive integer, got {self.n_estimators!r}")
        if self.bag_size_percent < 0:
            raise ValueError(f"bag_size_percent must be non-negative, got {self.bag_size_percent}")
        if self.calc_out_of_bag:
            warnings.warn("calc_out_of_bag is set but the out-of-bag error is not computed.")

    def _prepare_targets(self, X, y):
        raise NotImplementedError

    def fit(self, X, y):
        """
        Build the ensemble.

        The master random stream is consumed in a fixed order: the Roughly
        Balanced Bagging seed (if used), then per bag the minority draws, the
        majority draws and the member seed.
        """
        self._check_params()
        X, y = drop_missing_targets(X, y)
        X, y, codes, target_attrs = self._prepare_targets(X, y)

        minority, majority = partition_classes(codes)
        if not minority:
            raise ValueError("Both the minority and the majority group need at least one instance")

        rng = check_random_state(self.random_state)
        minority_goal, majority_goal = compute_goals(
            len(minority), len(majority), rng,
            bag_size_percent=self.bag_size_percent,
            roughly_balanced=self.roughly_balanced,
            minority_chance=self.minority_chance,
            no_replacement_minority=self.no_replacement_minority,
            no_replacement_majority=self.no_replacement_majority)
        sampler = BagSampler(minority, majority, minority_goal, majority_goal,
                             no_replacement_minority=self.no_replacement_minority,
                             no_replacement_majority=self.no_replacement_majority)

        estimator = self._validate_estimator()
        seedable = "random_state" in estimator.get_params(deep=False)
        measures = MeasureAccumulator()
        models, bags, seeds = [], [], []
        for b in range(self.n_estimators):
            bag = sampler.draw(rng)
            model = clone(estimator)
            seed = None
            if seedable:
                seed = int(rng.randint(SEED_BOUND))
                model.set_params(random_state=seed)
            model.fit(X[bag], y[bag])
            if produces_measures(model):
                measures.collect(model)
            if self.verbose > 0:
                logger.info("Trained member %d/%d on %d instances", b + 1, self.n_estimators, len(bag))
            models.append(model)
            bags.append(bag)
            seeds.append(seed)

        # Fitted state is replaced as a whole, only after every member trained.
        for name, value in target_attrs.items():
            setattr(self, name, value)
        self.n_features_in_ = X.shape[1]
        self.minority_goal_ = minority_goal
        self.majority_goal_ = majority_goal
        self.models_ = models
        self.bags_ = bags
        self.seeds_ = seeds
        self.measures_ = measures
        return self

    def _check_input(self, X):
        check_is_fitted(self, 'models_')
        X = check_array(X)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(f"Expected {self.n_features_in_} features, got {X.shape[1]}")
        return X

    def summary(self):
        """Text description of the ensemble members."""
        name = type(self).__name__
        if not hasattr(self, "models_"):
            return f"{name}: No model built yet."
        lines = [f"{name}: {len(self.models_)} members, "
                 f"{self.minority_goal_} minority + {self.majority_goal_} majority per bag",
                 "All the base estimators:", ""]
        for b, model in enumerate(self.models_):
            lines.append(f"[{b}] {model!r} (seed={self.seeds_[b]})")
        return "\n".join(lines)

    def enumerate_measures(self):
        """Names of the additional measures the base estimator can report."""
        estimator = self._validate_estimator()
        if produces_measures(estimator):
            return list(estimator.enumerate_measures())
        return []

    def get_measure(self, name):
        """Sum of the measure ``name`` over all ensemble members."""
        if not produces_measures(self._validate_estimator()):
            raise MeasuresNotSupportedError("Additional measures not supported by base estimator.")
        measures = getattr(self, "measures_", None)
        if measures is None or name not in measures:
            raise UnsupportedMeasureError(name)
        return measures[name]


class UnskewedBaggingClassifier(ClassifierMixin, _BaseUnskewedBagging):
    """
    Unskewed Bagging classifier for imbalanced binary classification.

    Labels are encoded by their position in the sorted ``classes_``; the first
    label is coded 0 and every other label counts as the "> 0" group when the
    pools are formed. Member class distributions are summed and normalized.

    Based on:
      Breiman, L. (1996). Bagging predictors. Machine Learning, 24(2), 123-140.
      Hido, S., Kashima, H., & Takahashi, Y. (2009). Roughly balanced bagging
      for imbalanced data. Statistical Analysis and Data Mining, 2(5-6), 412-426.

    License: MIT License
    """
    def _default_estimator(self):
        return DecisionTreeClassifier()

    def _prepare_targets(self, X, y):
        X, y = check_X_y(X, y)
        classes, codes = np.unique(y, return_inverse=True)
        if len(classes) < 2:
            raise ValueError("The dataset must have at least two classes.")
        return X, codes, codes, {"classes_": classes, "n_classes_": len(classes)}

    def predict_proba(self, X):
        X = self._check_input(X)
        probas = [align_proba(model.predict_proba(X), model.classes_, self.n_classes_)
                  for model in self.models_]
        return aggregate_probabilities(probas)

    def predict(self, X):
        proba = self.predict_proba(X)
        return self.classes_[np.argmax(proba, axis=1)]


class UnskewedBaggingRegressor(RegressorMixin, _BaseUnskewedBagging):
    """
    Unskewed Bagging for numeric targets.

    Rows with a target <= 0 and rows with a target > 0 form the two pools,
    so the target is expected to be binary-coded (e.g. 0/1 scores). Member
    predictions are averaged.

    License: MIT License
    """
    def _default_estimator(self):
        return DecisionTreeRegressor()

    def _prepare_targets(self, X, y):
        X, y = check_X_y(X, y, y_numeric=True)
        return X, y, y, {}

    def predict(self, X):
        X = self._check_input(X)
        return aggregate_predictions([model.predict(X) for model in self.models_])
