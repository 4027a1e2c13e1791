"""
Error classification for the rate chart pipeline.

Data quality problems inside payloads are never raised; they degrade into
empty results. These exceptions cover caller mistakes and broken configuration.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
]
