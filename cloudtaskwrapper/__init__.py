"""
Cloud Tasks Wrapper
Helper operations on top of the Google Cloud Tasks API.
"""

__version__ = "0.1.0"
__author__ = "Your Name"

from cloudtaskwrapper.core.client import TaskQueueClient, ConfigurationError
from cloudtaskwrapper.core.task import (
    ReplaceOutcome,
    ReplaceResult,
    TaskVariant,
    TaskVariantError,
)

__all__ = [
    "TaskQueueClient",
    "ConfigurationError",
    "ReplaceOutcome",
    "ReplaceResult",
    "TaskVariant",
    "TaskVariantError",
]
