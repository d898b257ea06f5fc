#---------------------------------------------------------------
# Measures.py
#---------------------------------------------------------------
from collections import OrderedDict

MEASURE_PREFIX = "measure"


def produces_measures(model):
    """True when ``model`` exposes ``enumerate_measures`` and ``get_measure``."""
    return (callable(getattr(model, "enumerate_measures", None))
            and callable(getattr(model, "get_measure", None)))


class MeasureAccumulator:
    """
    Running sums of the additional measures reported by ensemble members.

    Names are stored lowercase. Values are summed over the members, so a
    measure reported by every member grows with the ensemble size.
    """
    def __init__(self):
        self.sums = OrderedDict()

    def add(self, name, value):
        key = name.lower()
        self.sums[key] = self.sums.get(key, 0.0) + float(value)

    def collect(self, model):
        """Add every ``measure*`` value reported by ``model``."""
        for name in model.enumerate_measures():
            if name.startswith(MEASURE_PREFIX):
                self.add(name, model.get_measure(name))

    def __contains__(self, name):
        return name.lower() in self.sums

    def __getitem__(self, name):
        return self.sums[name.lower()]

    def __len__(self):
        return len(self.sums)

    def names(self):
        return list(self.sums)

    def as_dict(self):
        return dict(self.sums)
