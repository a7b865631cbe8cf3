#!/usr/bin/env python3
"""
测试RAN性能估算公式
"""

import math

import pytest

from ran_estimate.estimator.base import (
    MIN_LATENCY_S,
    PerformanceEstimator,
    estimate_config,
    estimate_performance,
    shannon_efficiency,
)
from ran_estimate.models.base import DuplexMode, RanConfigRequest


class TestEstimatePerformance:
    """测试内置估算公式"""

    def test_tdd_reference_scenario(self):
        """3.5 GHz / 20 MHz / TDD / 20 dBm"""
        result = estimate_performance(3.5e9, 20e6, DuplexMode.TDD, 20)

        expected = 20e6 * math.log2(11) * 0.8 * 4 * 0.85
        assert result.throughput == pytest.approx(expected)
        assert result.throughput == pytest.approx(188_193_344, rel=1e-5)
        assert result.latency == pytest.approx(0.00375)

    def test_fdd_reference_scenario(self):
        result = estimate_performance(3.5e9, 20e6, DuplexMode.FDD, 20)

        expected = 20e6 * math.log2(11) * 0.95 * 4 * 0.85
        assert result.throughput == pytest.approx(expected)
        assert result.throughput == pytest.approx(223_479_783, rel=1e-5)
        assert result.latency == pytest.approx(0.0025)

    def test_deterministic(self):
        first = estimate_performance(28e9, 100e6, DuplexMode.TDD, 33.5)
        second = estimate_performance(28e9, 100e6, DuplexMode.TDD, 33.5)
        assert first.throughput == second.throughput
        assert first.latency == second.latency

    @pytest.mark.parametrize("mode", list(DuplexMode))
    def test_throughput_non_decreasing_in_bandwidth(self, mode):
        bandwidths = [1e6, 5e6, 20e6, 100e6, 400e6]
        throughputs = [estimate_performance(3.5e9, bw, mode, 23).throughput for bw in bandwidths]
        assert throughputs == sorted(throughputs)

    @pytest.mark.parametrize("bandwidth", [5e6, 20e6, 50e6, 100e6, 200e6, 400e6])
    def test_tdd_latency_not_below_fdd(self, bandwidth):
        tdd = estimate_performance(3.5e9, bandwidth, DuplexMode.TDD, 20)
        fdd = estimate_performance(3.5e9, bandwidth, DuplexMode.FDD, 20)
        assert tdd.latency >= fdd.latency

    @pytest.mark.parametrize("bandwidth", [1e3, 1e6, 100e6, 400e6, 1e9, 1e12])
    def test_latency_floor(self, bandwidth):
        for mode in DuplexMode:
            assert estimate_performance(3.5e9, bandwidth, mode, 20).latency >= MIN_LATENCY_S

    def test_latency_floor_reached_for_wide_channels(self):
        result = estimate_performance(28e9, 1e9, DuplexMode.FDD, 20)
        assert result.latency == MIN_LATENCY_S

    def test_mimo_factor_doubles_above_6ghz(self):
        below = estimate_performance(5.999e9, 20e6, DuplexMode.FDD, 20)
        at_edge = estimate_performance(6e9, 20e6, DuplexMode.FDD, 20)
        assert at_edge.throughput == pytest.approx(2 * below.throughput)
        # 频率不影响延迟
        assert at_edge.latency == below.latency

    def test_transmit_power_shifts_snr(self):
        # 30 dBm -> SNR 15 dB
        result = estimate_performance(3.5e9, 20e6, DuplexMode.FDD, 30)
        expected = 20e6 * math.log2(1 + 10 ** 1.5) * 0.95 * 4 * 0.85
        assert result.throughput == pytest.approx(expected)

    def test_negative_transmit_power_is_allowed(self):
        result = estimate_performance(3.5e9, 20e6, DuplexMode.TDD, -10)
        assert result.throughput > 0

    def test_very_high_transmit_power_stays_finite(self):
        # 7000 dBm -> SNR 3500 dB，10^350 超出双精度范围
        result = estimate_performance(3.5e9, 20e6, DuplexMode.TDD, 7000)
        expected = 20e6 * 350 * math.log2(10) * 0.8 * 4 * 0.85
        assert math.isfinite(result.throughput)
        assert result.throughput == pytest.approx(expected)

    def test_shannon_efficiency_is_continuous_at_large_snr(self):
        below = shannon_efficiency(3000)
        above = shannon_efficiency(3000.001)
        assert below == pytest.approx(math.log2(1 + 10 ** 300))
        assert above == pytest.approx(below)
        assert above > below


class TestPerformanceEstimator:
    """测试估算器（未启用外部仿真器）"""

    def test_builtin_source(self, tdd_request):
        outcome = PerformanceEstimator().estimate(tdd_request)
        assert outcome.source == "builtin"
        assert outcome.result == estimate_config(tdd_request)

    def test_external_flag_without_simulator(self, fdd_request):
        estimator = PerformanceEstimator(simulator=None, use_external=True)
        assert not estimator.external_enabled
        assert estimator.estimate(fdd_request).source == "builtin"

    def test_request_rejects_non_positive_bandwidth(self):
        with pytest.raises(ValueError):
            RanConfigRequest(frequency=3.5e9, bandwidth=0, duplex_mode="TDD", transmit_power=20)

    def test_request_rejects_unknown_duplex_mode(self):
        with pytest.raises(ValueError):
            RanConfigRequest(frequency=3.5e9, bandwidth=20e6, duplex_mode="HDX", transmit_power=20)

    @pytest.mark.parametrize("field,value", [
        ("frequency", float("nan")),
        ("bandwidth", float("inf")),
        ("transmit_power", float("-inf")),
        ("bandwidth", 1e13),
        ("transmit_power", 1000),
    ])
    def test_request_rejects_non_finite_or_out_of_range(self, field, value):
        params = {"frequency": 3.5e9, "bandwidth": 20e6, "duplex_mode": "TDD",
                  "transmit_power": 20}
        params[field] = value
        with pytest.raises(ValueError):
            RanConfigRequest(**params)
