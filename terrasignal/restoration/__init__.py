"""SOC degradation assessment and portfolio prioritisation."""

from .degradation import assess_degradation, classify_climate_zone
from .portfolio import rank_portfolio

__all__ = ["assess_degradation", "classify_climate_zone", "rank_portfolio"]
