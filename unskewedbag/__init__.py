from .UnskewedBagging import UnskewedBaggingClassifier, UnskewedBaggingRegressor
from .Measures import MeasureAccumulator
from .exceptions import InsufficientPoolError, MeasuresNotSupportedError, UnsupportedMeasureError
from .interface import get_unskewed_bagging
from .sampling import BagSampler, compute_goals, partition_classes

__version__ = "0.1.0"

__all__ = [
    'UnskewedBaggingClassifier',
    'UnskewedBaggingRegressor',
    'MeasureAccumulator',
    'InsufficientPoolError',
    'MeasuresNotSupportedError',
    'UnsupportedMeasureError',
    'get_unskewed_bagging',
    'BagSampler',
    'compute_goals',
    'partition_classes'
]
