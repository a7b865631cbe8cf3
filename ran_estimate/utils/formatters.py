"""
数据格式化工具

提供估算结果、配置列表的格式化以及单位换算。
"""

import json
from typing import Any, Dict, List

from tabulate import tabulate


def bps_to_mbps(bps: float) -> float:
    """bps 转换为 Mbps"""
    return bps / 1e6


def seconds_to_ms(seconds: float) -> float:
    """秒转换为毫秒"""
    return seconds * 1000


def format_number_with_units(value: float, unit: str) -> str:
    """
    格式化数字并添加单位

    Args:
        value: 数值
        unit: 单位

    Returns:
        格式化后的字符串，如 3.50GHz
    """
    if value >= 1e12:
        return f"{value/1e12:.2f}T{unit}"
    elif value >= 1e9:
        return f"{value/1e9:.2f}G{unit}"
    elif value >= 1e6:
        return f"{value/1e6:.2f}M{unit}"
    elif value >= 1e3:
        return f"{value/1e3:.2f}K{unit}"
    else:
        return f"{value:.2f}{unit}"


def format_results(result: Dict[str, Any], format_type: str = "table") -> str:
    """
    格式化估算结果

    Args:
        result: 包含 config 与 simulationResult 的字典
        format_type: 输出格式 ("table", "json", "csv")

    Returns:
        格式化后的字符串
    """
    if format_type == "json":
        return json.dumps(result, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        return format_results_csv(result)

    else:  # table format
        return format_results_table(result)


def format_results_table(result: Dict[str, Any]) -> str:
    """格式化为表格形式"""
    config = result["config"]
    sim = result["simulationResult"]

    lines = ["=== RAN性能估算结果 ===\n"]

    config_data = [
        ["载波频率", format_number_with_units(config["frequency"], "Hz")],
        ["系统带宽", format_number_with_units(config["bandwidth"], "Hz")],
        ["双工模式", config["duplexMode"]],
        ["发射功率", f"{config['transmitPower']:.1f} dBm"],
    ]
    lines.append("配置参数:")
    lines.append(tabulate(config_data, headers=["参数", "值"], tablefmt="grid"))

    metrics_data = [
        ["吞吐量", f"{bps_to_mbps(sim['throughput']):.2f} Mbps"],
        ["延迟", f"{seconds_to_ms(sim['latency']):.3f} ms"],
    ]
    lines.append("\n性能指标:")
    lines.append(tabulate(metrics_data, headers=["指标", "值"], tablefmt="grid"))

    return "\n".join(lines)


def format_results_csv(result: Dict[str, Any]) -> str:
    """格式化为CSV形式"""
    config = result["config"]
    sim = result["simulationResult"]

    headers = ["frequency", "bandwidth", "duplexMode", "transmitPower", "throughput", "latency"]
    values = [
        str(config["frequency"]),
        str(config["bandwidth"]),
        config["duplexMode"],
        str(config["transmitPower"]),
        str(sim["throughput"]),
        str(sim["latency"]),
    ]

    return "\n".join([",".join(headers), ",".join(values)])


def format_config_list(records: List[Dict[str, Any]]) -> str:
    """
    格式化已保存的配置列表

    Args:
        records: 配置记录（JSON形式）列表

    Returns:
        表格字符串
    """
    if not records:
        return "无数据"

    table_data = []
    for record in records:
        sim = record["simulationResult"]
        table_data.append([
            record["id"],
            record["createdAt"],
            format_number_with_units(record["frequency"], "Hz"),
            format_number_with_units(record["bandwidth"], "Hz"),
            record["duplexMode"],
            f"{record['transmitPower']:.1f}",
            f"{bps_to_mbps(sim['throughput']):.2f}",
            f"{seconds_to_ms(sim['latency']):.3f}",
        ])

    headers = ["ID", "创建时间", "频率", "带宽", "双工", "功率(dBm)", "吞吐量(Mbps)", "延迟(ms)"]

    return tabulate(table_data, headers=headers, tablefmt="grid")
