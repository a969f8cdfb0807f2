"""
Shared constants for anonymization quality measurement.

This module defines constants used across the quality models for consistency in
operations like equality comparisons of floats and for the special labels that
mark suppressed, wildcard and missing cells.
"""

import math

import numpy as np

# Used to determine equality of floats
MAXIMUM_PRECISION_DIGITS: int = 8
EPSILON: float = math.pow(10, -MAXIMUM_PRECISION_DIGITS)

NOT_DEFINED_NA: float = np.nan

# Label of the top level of every generalization hierarchy
SUPPRESSED_VALUE: str = "*"
# Wildcard published for a cell that may take any value
ANY_VALUE: str = "*"
# Published for a cell without a value
NULL_VALUE: str = "NULL"

# Progress checkpoints, in percent
PROGRESS_PREPARED: int = 10
PROGRESS_GROUPED: int = 20
PROGRESS_DONE: int = 100
