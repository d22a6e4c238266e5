"""Statistics library public API.

Pure numeric helpers used by the metric services.
"""

from lok_sabha_api.lib.statistics.pearson import pearson_correlation, percentage

__all__ = [
    "pearson_correlation",
    "percentage",
]
