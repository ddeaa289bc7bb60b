"""Fairness policy constants.

SCORE_TABLE maps (provided dimensions, matched dimensions) to points. Bump
POLICY_VERSION whenever a value here changes.
"""

from typing import Dict, Tuple

POLICY_VERSION = "2024.1"

MAX_SLOT_SCORE = 3.0

# Teams without any preference are satisfied by every slot
NO_PREFERENCE_SCORE = MAX_SLOT_SCORE

SCORE_TABLE: Dict[Tuple[int, int], float] = {
    (1, 1): 3.0,
    (1, 0): 0.0,
    (2, 2): 3.0,
    (2, 1): 1.5,
    (2, 0): 0.0,
    (3, 3): 3.0,
    (3, 2): 2.0,
    (3, 1): 1.0,
    (3, 0): 0.0,
}

FUZZY_TIME_TOLERANCE_MINUTES = 30

# Minimum acceptable season average, 50% of the maximum slot score
EXPECTED_MINIMUM_SCORE = 1.5

MAX_SPREAD_PENALTY = 50.0
SPREAD_PENALTY_FACTOR = 10.0
MAX_DEFICIT_PENALTY = 50.0
DEFICIT_PENALTY_FACTOR = 5.0

MAX_BASE_BOOST = 2.0
LOW_AVERAGE_RATIO = 0.8
LOW_AVERAGE_BONUS = 0.5

# Weight a scheduler gives to teams that have not played yet
UNPLAYED_TEAM_WEIGHT = 1.2

HIGH_SPREAD_STD_DEV = 0.5
