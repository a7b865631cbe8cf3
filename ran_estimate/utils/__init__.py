"""
工具模块
"""

from .formatters import (
    bps_to_mbps,
    format_config_list,
    format_number_with_units,
    format_results,
    seconds_to_ms,
)

__all__ = [
    "bps_to_mbps",
    "format_config_list",
    "format_number_with_units",
    "format_results",
    "seconds_to_ms",
]
