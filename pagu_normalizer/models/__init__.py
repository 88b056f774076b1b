"""Domain models for the budget realisation report normalizer.

This package contains the domain model classes used throughout the application:
configuration, the per-run trace buffer, pipeline / batch results and the
structured error record.
"""

from .account_summary import AccountSummaryItem
from .config_models import NormalizeConfig, PeriodLabels, TemplateConfig
from .error_record import ErrorRecord
from .processing_result import FileStat, PipelineResult, ProcessingResult, StepTiming
from .trace import HierarchyState, TraceBuffer

__all__ = [
    # Configuration models
    "NormalizeConfig",
    "PeriodLabels",
    "TemplateConfig",
    # Processing models
    "HierarchyState",
    "TraceBuffer",
    "PipelineResult",
    "StepTiming",
    "AccountSummaryItem",
    # Batch models
    "FileStat",
    "ProcessingResult",
    "ErrorRecord",
]
