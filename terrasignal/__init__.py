"""terrasignal: restoration-priority and soil-carbon monitoring analytics."""

__version__ = "0.1.0"
