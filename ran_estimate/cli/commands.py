"""
CLI命令实现

提供命令行界面的具体命令实现。
"""

import json
from typing import Optional

import click
from pydantic import ValidationError

from ..config.settings import get_settings, setup_logging
from ..estimator.base import PerformanceEstimator, compare_providers
from ..estimator.external import Ns3Simulator
from ..models.base import DuplexMode, RanConfigRequest
from ..storage import StorageError, create_repository
from ..utils.formatters import format_config_list, format_results


def config_options(func):
    """四个RAN配置参数的公共选项"""
    options = [
        click.option("--frequency", "-f", type=float, required=True, help="载波频率 (Hz)，如 3.5e9"),
        click.option("--bandwidth", "-b", type=float, required=True, help="系统带宽 (Hz)，如 20e6"),
        click.option("--duplex-mode", "-d", required=True,
                     type=click.Choice([mode.value for mode in DuplexMode]), help="双工模式"),
        click.option("--transmit-power", "-p", type=float, required=True, help="发射功率 (dBm)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_request(frequency: float, bandwidth: float, duplex_mode: str,
                  transmit_power: float) -> RanConfigRequest:
    """构建并校验配置请求"""
    try:
        return RanConfigRequest(
            frequency=frequency,
            bandwidth=bandwidth,
            duplex_mode=duplex_mode,
            transmit_power=transmit_power,
        )
    except ValidationError as e:
        messages = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise click.BadParameter(messages)


@click.group()
@click.version_option(version="0.1.0", prog_name="ran-estimate")
def cli():
    """5G RAN性能估算工具

    根据载波频率、带宽、双工模式和发射功率估算吞吐量与延迟，
    可选调用ns-3仿真器，并提供HTTP接口和Prometheus指标。
    """
    setup_logging(get_settings())


@cli.command()
@config_options
@click.option("--use-ns3", is_flag=True, help="调用外部ns-3仿真器（失败时自动回退到内置公式）")
@click.option("--format", "format_type", default=None,
              type=click.Choice(["table", "json", "csv"]), help="输出格式")
@click.option("--output-file", type=click.Path(), help="输出文件路径")
def estimate(frequency: float, bandwidth: float, duplex_mode: str, transmit_power: float,
             use_ns3: bool, format_type: Optional[str], output_file: Optional[str]):
    """估算RAN配置的吞吐量和延迟（不保存）"""
    settings = get_settings()
    request = build_request(frequency, bandwidth, duplex_mode, transmit_power)

    estimator = PerformanceEstimator(
        simulator=Ns3Simulator.from_settings(settings),
        use_external=use_ns3 or settings.use_ns3,
    )
    outcome = estimator.estimate(request)

    result = {
        "config": request.to_params(),
        "simulationResult": outcome.result.model_dump(),
    }
    formatted_result = format_results(result, format_type or settings.default_output_format)

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(formatted_result)
        click.echo(f"结果已保存到: {output_file}")
    else:
        click.echo(formatted_result)


@cli.command("verify-ns3")
@config_options
def verify_ns3(frequency: float, bandwidth: float, duplex_mode: str, transmit_power: float):
    """对比内置公式与ns-3仿真器的结果"""
    settings = get_settings()
    request = build_request(frequency, bandwidth, duplex_mode, transmit_power)

    simulator = Ns3Simulator.from_settings(settings)
    comparison = compare_providers(PerformanceEstimator(simulator), request)
    comparison["ns3_status"] = simulator.status()

    click.echo(json.dumps(comparison, indent=2, ensure_ascii=False))
    if comparison["are_different"]:
        click.echo("结论: ns-3 正常工作（结果不同）")
    else:
        click.echo(f"结论: ns-3 可能未生效（结果相同，来源: {comparison['external_source']}）")


@cli.command("list-configs")
@click.option("--format", "format_type", default="table",
              type=click.Choice(["table", "json"]), help="输出格式")
def list_configs(format_type: str):
    """列出已保存的RAN配置"""
    repository = create_repository(get_settings())
    try:
        records = [record.to_json() for record in repository.list()]
    except StorageError as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()

    if format_type == "json":
        click.echo(json.dumps(records, indent=2, ensure_ascii=False))
    else:
        click.echo(format_config_list(records))


@cli.command()
@click.option("--host", default=None, help="监听地址")
@click.option("--port", type=int, default=None, help="监听端口")
def serve(host: Optional[str], port: Optional[int]):
    """启动HTTP接口服务"""
    import uvicorn

    from ..api.app import create_app

    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
