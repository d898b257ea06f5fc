# sampling.py
import logging
import warnings

import numpy as np
from sklearn.utils import check_random_state

from .exceptions import InsufficientPoolError

logger = logging.getLogger(__name__)

SEED_BOUND = np.iinfo(np.int32).max


def partition_classes(codes):
    """
    Split row indices into a minority and a majority group.

    Rows whose code is <= 0 go to one group, rows whose code is > 0 to the
    other, both in their original order. The smaller group is returned first;
    on a tie the <= 0 group is the minority.

    Parameters:
        codes: Per-row target codes (class index or numeric target)

    Returns:
        (minority, majority) as lists of row indices
    """
    codes = np.asarray(codes, dtype=float)
    lower = np.flatnonzero(codes <= 0.0).tolist()
    upper = np.flatnonzero(codes > 0.0).tolist()
    if len(lower) > len(upper):
        lower, upper = upper, lower
    return lower, upper


def round_half_up(value):
    return int(np.floor(value + 0.5))


def roughly_balanced_majority_count(minority_goal, minority_chance, seed):
    """
    Number of majority draws for Roughly Balanced Bagging.

    Counts the failures of Bernoulli(minority_chance) trials, run on a stream
    seeded with ``seed``, until ``minority_goal`` successes were seen. That
    count follows a negative binomial distribution and is drawn as one.
    A chance outside (0, 1) falls back to ``minority_goal``.
    """
    if not 0.0 < minority_chance < 1.0:
        return minority_goal
    if minority_goal == 0:
        return 0
    rng = check_random_state(seed)
    return int(rng.negative_binomial(minority_goal, minority_chance))


def compute_goals(minority_size, majority_size, rng, bag_size_percent=1.0,
                  roughly_balanced=False, minority_chance=0.5,
                  no_replacement_minority=False, no_replacement_majority=False):
    """
    Work out how many minority and majority rows every bag receives.

    Called once per fit; the result is shared by all bags.

    Parameters:
        minority_size: Size of the minority pool
        majority_size: Size of the majority pool
        rng: Master RandomState (one seed is drawn in roughly balanced mode)
        bag_size_percent: Majority multiplier for fixed-ratio mode (1.0 = 100%)
        roughly_balanced: Use Roughly Balanced Bagging instead of UnderBagging
        minority_chance: Chance of drawing a minority row per trial
        no_replacement_minority: Clamp the minority goal to its pool size
        no_replacement_majority: Clamp the majority goal to its pool size

    Returns:
        (minority_goal, majority_goal)
    """
    minority_goal = minority_size
    if roughly_balanced:
        seed = rng.randint(SEED_BOUND)
        if not 0.0 < minority_chance < 1.0:
            warnings.warn(
                f"minority_chance={minority_chance} is outside (0, 1); "
                "falling back to a perfectly balanced bag size."
            )
        majority_goal = roughly_balanced_majority_count(minority_goal, minority_chance, seed)
    else:
        majority_goal = round_half_up(bag_size_percent * minority_goal)

    if no_replacement_minority and minority_goal > minority_size:
        minority_goal = minority_size
    if no_replacement_majority and majority_goal > majority_size:
        majority_goal = majority_size

    logger.debug("Bag goals: %d minority + %d majority (pools %d / %d)",
                 minority_goal, majority_goal, minority_size, majority_size)
    return minority_goal, majority_goal


class BagSampler:
    """
    Draws bags of row indices from a minority and a majority pool.

    The pools are copied once when the sampler is built. With no replacement
    a drawn row leaves its pool for good, so pools shrink across successive
    bags of the same sampler.
    """
    def __init__(self, minority, majority, minority_goal, majority_goal,
                 no_replacement_minority=False, no_replacement_majority=False):
        self.minority = list(minority)
        self.majority = list(majority)
        self.minority_goal = minority_goal
        self.majority_goal = majority_goal
        self.no_replacement_minority = no_replacement_minority
        self.no_replacement_majority = no_replacement_majority

    def __draw_from(self, pool, goal, remove, pool_name, rng, bag):
        for i in range(goal):
            if not pool:
                raise InsufficientPoolError(pool_name, goal - i)
            idx = rng.randint(len(pool))
            bag.append(pool[idx])
            if remove:
                del pool[idx]

    def draw(self, rng):
        """Return the next bag: minority draws followed by majority draws."""
        bag = []
        self.__draw_from(self.minority, self.minority_goal,
                         self.no_replacement_minority, "minority", rng, bag)
        self.__draw_from(self.majority, self.majority_goal,
                         self.no_replacement_majority, "majority", rng, bag)
        return np.asarray(bag, dtype=np.intp)
