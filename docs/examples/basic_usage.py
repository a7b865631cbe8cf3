#!/usr/bin/env python3
"""
RAN-Estimate 基本使用示例

演示如何使用RAN-Estimate进行性能估算。
"""

import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from ran_estimate import DuplexMode, Ns3Simulator, PerformanceEstimator, RanConfigRequest


def main():
    """主函数"""
    print("=== RAN-Estimate 基本使用示例 ===\n")

    # 1. 创建性能估算器（启用ns-3，未安装时自动回退到内置公式）
    estimator = PerformanceEstimator(simulator=Ns3Simulator(), use_external=True)

    # 2. 对比 sub-6GHz 与毫米波、TDD 与 FDD
    scenarios = [
        (3.5e9, 20e6, DuplexMode.TDD, 20),
        (3.5e9, 20e6, DuplexMode.FDD, 20),
        (28e9, 100e6, DuplexMode.TDD, 23),
    ]

    for frequency, bandwidth, duplex_mode, transmit_power in scenarios:
        config = RanConfigRequest(
            frequency=frequency,
            bandwidth=bandwidth,
            duplex_mode=duplex_mode,
            transmit_power=transmit_power,
        )
        outcome = estimator.estimate(config)

        # 3. 显示结果
        print(f"{frequency / 1e9:.1f} GHz / {bandwidth / 1e6:.0f} MHz / "
              f"{duplex_mode.value} / {transmit_power} dBm")
        print(f"  吞吐量: {outcome.result.throughput / 1e6:.1f} Mbps")
        print(f"  延迟: {outcome.result.latency * 1000:.3f} ms")
        print(f"  结果来源: {outcome.source}")

    print("\n=== 示例完成 ===")


if __name__ == "__main__":
    main()
