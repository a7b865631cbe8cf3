#!/usr/bin/env python3
"""
测试命令行接口
"""

import json

import pytest
from click.testing import CliRunner

from ran_estimate.cli.commands import cli
from ran_estimate.config.settings import config_manager
from ran_estimate.estimator.base import estimate_performance
from ran_estimate.models.base import DuplexMode

BASE_ARGS = ["-f", "3.5e9", "-b", "20e6", "-d", "TDD", "-p", "20"]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """每个测试使用内存存储和不存在的ns-3目录"""
    monkeypatch.setenv("RAN_ESTIMATE_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("RAN_ESTIMATE_NS3_DIR", str(tmp_path / "no-ns3"))
    monkeypatch.setenv("RAN_ESTIMATE_USE_NS3", "false")
    config_manager.reset()
    yield
    config_manager.reset()


@pytest.fixture
def runner():
    return CliRunner()


class TestEstimateCommand:
    """测试 estimate 命令"""

    def test_table_output(self, runner):
        result = runner.invoke(cli, ["estimate", *BASE_ARGS])
        assert result.exit_code == 0, result.output
        assert "RAN性能估算结果" in result.output
        assert "3.50GHz" in result.output
        assert "3.750 ms" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["estimate", *BASE_ARGS, "--format", "json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        expected = estimate_performance(3.5e9, 20e6, DuplexMode.TDD, 20)
        assert data["config"]["duplexMode"] == "TDD"
        assert data["simulationResult"]["throughput"] == expected.throughput
        assert data["simulationResult"]["latency"] == expected.latency

    def test_csv_output(self, runner):
        result = runner.invoke(cli, ["estimate", *BASE_ARGS, "--format", "csv"])
        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines[0] == "frequency,bandwidth,duplexMode,transmitPower,throughput,latency"
        assert lines[1].startswith("3500000000.0,20000000.0,TDD,20.0,")

    def test_use_ns3_falls_back(self, runner):
        plain = runner.invoke(cli, ["estimate", *BASE_ARGS, "--format", "json"])
        with_ns3 = runner.invoke(cli, ["estimate", *BASE_ARGS, "--format", "json", "--use-ns3"])
        assert with_ns3.exit_code == 0, with_ns3.output
        assert json.loads(with_ns3.stdout) == json.loads(plain.stdout)

    def test_output_file(self, runner, tmp_path):
        output_file = tmp_path / "result.json"
        result = runner.invoke(cli, ["estimate", *BASE_ARGS, "--format", "json",
                                     "--output-file", str(output_file)])
        assert result.exit_code == 0, result.output
        assert "结果已保存到" in result.output
        assert json.loads(output_file.read_text(encoding="utf-8"))["config"]["frequency"] == 3.5e9

    def test_invalid_duplex_mode(self, runner):
        result = runner.invoke(cli, ["estimate", "-f", "3.5e9", "-b", "20e6", "-d", "XDD", "-p", "20"])
        assert result.exit_code != 0

    def test_non_positive_bandwidth(self, runner):
        result = runner.invoke(cli, ["estimate", "-f", "3.5e9", "-b", "0", "-d", "FDD", "-p", "20"])
        assert result.exit_code != 0
        assert "bandwidth" in result.output

    def test_missing_transmit_power(self, runner):
        result = runner.invoke(cli, ["estimate", "-f", "3.5e9", "-b", "20e6", "-d", "FDD"])
        assert result.exit_code != 0


class TestOtherCommands:
    """测试 verify-ns3 与 list-configs"""

    def test_verify_ns3_reports_fallback(self, runner):
        result = runner.invoke(cli, ["verify-ns3", *BASE_ARGS])
        assert result.exit_code == 0, result.output
        assert '"external_source": "fallback"' in result.output
        assert '"are_different": false' in result.output
        assert "ns-3 可能未生效" in result.output

    def test_list_configs_empty(self, runner):
        result = runner.invoke(cli, ["list-configs"])
        assert result.exit_code == 0, result.output
        assert "无数据" in result.output

    def test_list_configs_json(self, runner):
        result = runner.invoke(cli, ["list-configs", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == []
