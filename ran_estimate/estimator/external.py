"""
外部仿真器接口

通过子进程调用 ns-3 的 nr-simulation 程序，并读取其输出的JSON结果。
任何失败都以 ExternalSimulatorError 抛出，由估算器决定是否回退。
"""

import json
import logging
import math
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

from ..models.base import RanConfigRequest, SimulationOutput, SimulationResult

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "simulation_output.json"


class ExternalSimulatorError(Exception):
    """外部仿真失败"""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class ExternalSimulator(ABC):
    """外部仿真器基础类，输出结构与内置公式一致"""

    @abstractmethod
    def run(self, config: RanConfigRequest) -> SimulationResult:
        """执行仿真，失败时抛出 ExternalSimulatorError"""
        pass

    @abstractmethod
    def status(self) -> Dict[str, Any]:
        """返回仿真器可用性信息"""
        pass


class Ns3Simulator(ExternalSimulator):
    """ns-3 仿真器"""

    def __init__(self, ns3_dir: str = "~/ns-3.43", command: str = "./ns3",
                 program: str = "nr-simulation", timeout: float = 10.0):
        self.ns3_dir = Path(ns3_dir).expanduser()
        self.command = command
        self.program = program
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "Ns3Simulator":
        return cls(
            ns3_dir=settings.ns3_dir,
            command=settings.ns3_command,
            program=settings.ns3_program,
            timeout=settings.ns3_timeout,
        )

    def build_command(self, config: RanConfigRequest, output_path: Path) -> List[str]:
        """构建ns-3命令行，程序参数作为 ns3 run 的单个参数传入"""
        program_args = " ".join([
            self.program,
            f"--frequency={config.frequency}",
            f"--bandwidth={config.bandwidth}",
            f"--duplexMode={config.duplex_mode.value}",
            f"--transmitPower={config.transmit_power}",
            f"--outputPath={output_path}",
        ])
        return [self.command, "run", program_args]

    def run(self, config: RanConfigRequest) -> SimulationResult:
        with tempfile.TemporaryDirectory(prefix="ran-estimate-") as tmp_dir:
            output_path = Path(tmp_dir) / OUTPUT_FILENAME
            command = self.build_command(config, output_path)
            logger.info("Running ns-3 command: %s (cwd=%s)", " ".join(command), self.ns3_dir)

            try:
                subprocess.run(
                    command,
                    cwd=self.ns3_dir,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    timeout=self.timeout,
                    check=True,
                )
            except subprocess.TimeoutExpired as e:
                raise ExternalSimulatorError(
                    "timeout", f"ns-3 did not finish within {self.timeout}s") from e
            except subprocess.CalledProcessError as e:
                logger.debug("ns-3 stderr: %s", e.stderr)
                raise ExternalSimulatorError(
                    "exit", f"ns-3 exited with code {e.returncode}") from e
            except OSError as e:
                raise ExternalSimulatorError("spawn", f"cannot start ns-3: {e}") from e
            except subprocess.SubprocessError as e:
                raise ExternalSimulatorError("exit", f"ns-3 failed: {e}") from e

            if not output_path.exists():
                raise ExternalSimulatorError(
                    "missing_output", f"ns-3 did not create {output_path}")

            try:
                output = SimulationOutput.model_validate(
                    json.loads(output_path.read_text(encoding="utf-8")))
            except (OSError, ValueError) as e:
                raise ExternalSimulatorError(
                    "parse", f"invalid ns-3 output: {e}") from e

            results = output.results
            if not (math.isfinite(results.throughput) and math.isfinite(results.latency)):
                raise ExternalSimulatorError(
                    "parse", f"non-finite ns-3 results: {results.model_dump()}")

        return output.results

    def status(self) -> Dict[str, Any]:
        runner = self.ns3_dir / self.command
        return {
            "ns3_dir": str(self.ns3_dir),
            "ns3_dir_exists": self.ns3_dir.is_dir(),
            "runner_executable": runner.is_file() and os.access(runner, os.X_OK),
            "program": self.program,
            "timeout_s": self.timeout,
        }
