"""Filter configuration, filter primitives and the processing pipeline."""

from . import filters
from .config import ColorName, FilterConfiguration, FilterMode
from .pipeline import (
    ConfigurationSource,
    DisplaySink,
    ErrorReporter,
    FilterPipeline,
    ProcessingState,
)

__all__ = [
    "ColorName",
    "ConfigurationSource",
    "DisplaySink",
    "ErrorReporter",
    "FilterConfiguration",
    "FilterMode",
    "FilterPipeline",
    "ProcessingState",
    "filters",
]
