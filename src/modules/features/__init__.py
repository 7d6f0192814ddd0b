"""Features — validated price bars, statistics and technical indicators.

PriceBars is the input every indicator and signal rule works from.
"""

from src.modules.features.bars import PriceBars
from src.modules.features.errors import (
    InsufficientDataError,
    InvalidArgumentError,
    InvalidInputError,
    RatingError,
)

__all__ = [
    "PriceBars",
    "RatingError",
    "InvalidInputError",
    "InsufficientDataError",
    "InvalidArgumentError",
]
