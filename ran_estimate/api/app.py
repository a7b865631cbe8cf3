"""
HTTP接口

提供RAN配置的提交与查询、外部仿真器开关以及Prometheus指标导出。
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError

from ..config.settings import Settings, get_settings
from ..estimator.base import PerformanceEstimator, compare_providers
from ..estimator.external import Ns3Simulator
from ..metrics.sink import MetricsSink, NullMetricsSink, PrometheusMetricsSink
from ..models.base import RanConfigRequest
from ..service import SimulationService, SubmissionError
from ..storage import StorageError, create_repository

logger = logging.getLogger(__name__)


class SimulatorToggle(BaseModel):
    """外部仿真器开关，enabled为空时切换当前状态"""
    enabled: Optional[bool] = None


def build_service(settings: Settings, metrics: MetricsSink) -> SimulationService:
    """根据设置组装估算器、仓库和指标接收器"""
    estimator = PerformanceEstimator(
        simulator=Ns3Simulator.from_settings(settings),
        use_external=settings.use_ns3,
    )
    return SimulationService(estimator, create_repository(settings), metrics)


def create_app(settings: Optional[Settings] = None,
               service: Optional[SimulationService] = None,
               metrics: Optional[MetricsSink] = None) -> FastAPI:
    settings = settings or get_settings()
    if metrics is None:
        if service is not None:
            metrics = service.metrics
        elif settings.metrics_enabled:
            metrics = PrometheusMetricsSink()
        else:
            metrics = NullMetricsSink()
    if service is None:
        service = build_service(settings, metrics)

    app = FastAPI(title="RAN Estimate", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.service = service
    app.state.metrics = metrics

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        # 原始输入可能含有NaN等无法序列化为JSON的值，不回显
        errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
        if any(err.get("type") == "missing" for err in errors):
            message = "Please provide all required fields"
        else:
            message = "Invalid RAN configuration"
        return JSONResponse(
            status_code=400,
            content={"message": message, "errors": jsonable_encoder(errors)},
        )

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"message": "Server error", "error": str(exc)})

    @app.post("/api/configs", status_code=201)
    def create_config(payload: RanConfigRequest):
        try:
            record = service.submit(payload)
        except SubmissionError as e:
            logger.error("Error creating configuration: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "message": "Server error",
                    "error": str(e),
                    "simulationResult": e.result.model_dump(),
                },
            )

        body = record.to_json()
        return {
            "message": "RAN Config saved",
            "config": body,
            "simulationResult": body["simulationResult"],
        }

    @app.get("/api/configs")
    def list_configs():
        return [record.to_json() for record in service.list_configurations()]

    @app.get("/api/configs/{config_id}")
    def get_config(config_id: str):
        record = service.get_configuration(config_id)
        if record is None:
            return JSONResponse(status_code=404, content={"message": "Configuration not found"})
        return record.to_json()

    @app.get("/api/simulator")
    def simulator_status():
        estimator = service.estimator
        status = estimator.simulator.status() if estimator.simulator else {}
        return {"useNs3": estimator.external_enabled, "status": status}

    @app.put("/api/simulator")
    def toggle_simulator(toggle: SimulatorToggle):
        estimator = service.estimator
        if toggle.enabled is None:
            estimator.use_external = not estimator.use_external
        else:
            estimator.use_external = toggle.enabled
        logger.info("NS-3 usage changed to: %s", estimator.use_external)
        return {"useNs3": estimator.external_enabled}

    @app.get("/api/simulator/verify")
    def verify_simulator(frequency: float = 3.5e9,
                         bandwidth: float = 20e6,
                         duplex_mode: str = Query("TDD", alias="duplexMode"),
                         transmit_power: float = Query(20.0, alias="transmitPower")):
        try:
            config = RanConfigRequest(frequency=frequency, bandwidth=bandwidth,
                                      duplex_mode=duplex_mode, transmit_power=transmit_power)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False)) from e

        estimator = service.estimator
        comparison = compare_providers(estimator, config)
        comparison["ns3_status"] = estimator.simulator.status() if estimator.simulator else {}
        return comparison

    @app.get("/metrics")
    def metrics_endpoint():
        if not isinstance(metrics, PrometheusMetricsSink):
            return JSONResponse(status_code=404, content={"message": "Metrics disabled"})
        content, content_type = metrics.render()
        return Response(content=content, media_type=content_type)

    @app.get("/metrics-debug")
    def metrics_debug():
        return metrics.snapshot()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
