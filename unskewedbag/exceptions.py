# exceptions.py


class InsufficientPoolError(ValueError):
    """Raised when a bag draw hits a pool that sampling without replacement has emptied."""

    def __init__(self, pool_name, requested):
        self.pool_name = pool_name
        self.requested = requested
        super().__init__(
            f"The {pool_name} pool is exhausted: cannot draw {requested} more "
            f"instance(s) without replacement"
        )


class UnsupportedMeasureError(KeyError):
    """Raised when an unknown additional measure is requested."""

    def __init__(self, measure_name):
        self.measure_name = measure_name
        super().__init__(f"The additional measure, {measure_name}, could not be found.")

    def __str__(self):
        return self.args[0]


class MeasuresNotSupportedError(NotImplementedError):
    """Raised when the base estimator does not produce additional measures."""
