"""
指标模块

提供可注入的指标接收器，导出吞吐量、延迟等仪表盘指标。
"""

from .sink import MetricsSink, NullMetricsSink, PrometheusMetricsSink

__all__ = ["MetricsSink", "NullMetricsSink", "PrometheusMetricsSink"]
