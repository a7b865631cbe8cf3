"""
指标导出

估算器的调用方通过注入的 MetricsSink 记录每次估算，
PrometheusMetricsSink 为每个实例维护独立的 CollectorRegistry。
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from ..models.base import DuplexMode, RanConfigRequest, SimulationResult
from ..utils.formatters import bps_to_mbps, seconds_to_ms

logger = logging.getLogger(__name__)


class MetricsSink(ABC):
    """指标接收器基础类"""

    @abstractmethod
    def record_estimate(self, config: RanConfigRequest, result: SimulationResult,
                        source: str = "builtin") -> None:
        """记录一次成功的估算"""
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, Any]:
        """返回最近一次记录的数值"""
        pass


class NullMetricsSink(MetricsSink):
    """不导出任何指标"""

    def record_estimate(self, config: RanConfigRequest, result: SimulationResult,
                        source: str = "builtin") -> None:
        pass

    def snapshot(self) -> Dict[str, Any]:
        return {}


class PrometheusMetricsSink(MetricsSink):
    """Prometheus 指标接收器"""

    def __init__(self, registry: Optional[CollectorRegistry] = None,
                 default_collectors: bool = True):
        self.registry = registry or CollectorRegistry()
        self._last: Dict[str, Any] = {}

        if default_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.simulation_counter = Counter(
            "ran_simulation", "Total number of RAN simulations run",
            ["duplex_mode"], registry=self.registry)
        self.source_counter = Counter(
            "ran_simulation_source", "RAN simulations by result source",
            ["source"], registry=self.registry)

        # 按双工模式区分的原始单位指标
        self.throughput_gauge = Gauge(
            "ran_throughput_bps", "RAN throughput in bits per second",
            ["duplex_mode"], registry=self.registry)
        self.latency_gauge = Gauge(
            "ran_latency_seconds", "RAN latency in seconds",
            ["duplex_mode"], registry=self.registry)
        self.frequency_gauge = Gauge(
            "ran_frequency_hz", "RAN frequency in Hz",
            ["duplex_mode"], registry=self.registry)
        self.bandwidth_gauge = Gauge(
            "ran_bandwidth_hz", "RAN bandwidth in Hz",
            ["duplex_mode"], registry=self.registry)
        self.transmit_power_gauge = Gauge(
            "ran_transmit_power_dbm", "RAN transmit power in dBm",
            ["duplex_mode"], registry=self.registry)

        # 无标签的全局指标，便于Grafana直接展示
        self.global_throughput_gauge = Gauge(
            "ran_throughput_global_bps", "Latest RAN throughput in bits per second",
            registry=self.registry)
        self.global_latency_gauge = Gauge(
            "ran_latency_global_seconds", "Latest RAN latency in seconds",
            registry=self.registry)
        self.graph_throughput_gauge = Gauge(
            "ran_throughput_mbps", "Latest RAN throughput in Mbps",
            registry=self.registry)
        self.graph_latency_gauge = Gauge(
            "ran_latency_ms", "Latest RAN latency in milliseconds",
            registry=self.registry)

        for mode in DuplexMode:
            for gauge in self._labeled_gauges():
                gauge.labels(duplex_mode=mode.value).set(0)

    def _labeled_gauges(self):
        return (self.throughput_gauge, self.latency_gauge, self.frequency_gauge,
                self.bandwidth_gauge, self.transmit_power_gauge)

    def record_estimate(self, config: RanConfigRequest, result: SimulationResult,
                        source: str = "builtin") -> None:
        mode = config.duplex_mode.value

        self.simulation_counter.labels(duplex_mode=mode).inc()
        self.source_counter.labels(source=source).inc()

        self.throughput_gauge.labels(duplex_mode=mode).set(result.throughput)
        self.latency_gauge.labels(duplex_mode=mode).set(result.latency)
        self.frequency_gauge.labels(duplex_mode=mode).set(config.frequency)
        self.bandwidth_gauge.labels(duplex_mode=mode).set(config.bandwidth)
        self.transmit_power_gauge.labels(duplex_mode=mode).set(config.transmit_power)

        throughput_mbps = bps_to_mbps(result.throughput)
        latency_ms = seconds_to_ms(result.latency)

        self.global_throughput_gauge.set(result.throughput)
        self.global_latency_gauge.set(result.latency)
        self.graph_throughput_gauge.set(throughput_mbps)
        self.graph_latency_gauge.set(latency_ms)

        self._last = {
            **config.to_params(),
            "throughput": result.throughput,
            "latency": result.latency,
            "throughputMbps": throughput_mbps,
            "latencyMs": latency_ms,
            "source": source,
        }
        logger.info("Metrics updated: duplexMode=%s, throughput=%.1f Mbps, latency=%.3f ms",
                    mode, throughput_mbps, latency_ms)

    def snapshot(self) -> Dict[str, Any]:
        counts = {}
        for mode in DuplexMode:
            counts[mode.value] = self.registry.get_sample_value(
                "ran_simulation_total", {"duplex_mode": mode.value}) or 0.0

        return {
            "last": dict(self._last),
            "simulationCount": counts,
        }

    def render(self) -> Tuple[bytes, str]:
        """导出Prometheus文本格式"""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
