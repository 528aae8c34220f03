"""Result records returned by the split scanners."""

from typing import NamedTuple


class SplitRecord(NamedTuple):
    """Best split found for one feature of a classification or regression node.

    Attributes:
        left_impurity: Impurity of the samples at or below the threshold.
        right_impurity: Impurity of the samples above the threshold.
        threshold: Midpoint between two adjacent distinct feature values.
        gain: Impurity reduction versus not splitting. 0 when no split helps.
    """

    left_impurity: float
    right_impurity: float
    threshold: float
    gain: float


class GradientSplitRecord(NamedTuple):
    """Best split found for one feature of a gradient-boosted node.

    Attributes:
        threshold: Midpoint between two adjacent distinct feature values.
        gain: Second-order loss reduction versus not splitting.
    """

    threshold: float
    gain: float
