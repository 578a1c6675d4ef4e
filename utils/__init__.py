"""Utilities for the intel exchange."""

from .utils import (
    setup_logging,
    save_results,
    PerformanceMonitor,
    create_performance_report,
    get_system_info,
    format_duration,
    timed,
)

__all__ = [
    'setup_logging',
    'save_results',
    'PerformanceMonitor',
    'create_performance_report',
    'get_system_info',
    'format_duration',
    'timed',
]
