"""
全局系统设置

定义系统级配置参数和默认值，支持通过 RAN_ESTIMATE_ 前缀的环境变量或 .env 文件覆盖。
"""

import logging
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """系统设置类"""

    model_config = SettingsConfigDict(
        env_prefix="RAN_ESTIMATE_",
        env_file=".env",
        extra="ignore",
    )

    # 日志配置
    log_level: str = Field(default="INFO", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径")

    # 输出配置
    default_output_format: str = Field(default="table", description="默认输出格式")

    # API配置
    api_host: str = Field(default="0.0.0.0", description="API监听地址")
    api_port: int = Field(default=5001, description="API监听端口")
    cors_origins: List[str] = Field(default=["*"], description="允许跨域的来源")

    # 存储配置
    storage_backend: str = Field(default="mongo", description="存储后端：mongo或memory")
    mongo_uri: str = Field(default="mongodb://localhost:27017", description="MongoDB连接地址")
    mongo_database: str = Field(default="5g-ran-portal", description="数据库名称")
    mongo_collection: str = Field(default="ranconfigs", description="集合名称")
    mongo_timeout_ms: int = Field(default=5000, description="服务器选择超时(毫秒)")

    # ns-3 外部仿真器配置
    use_ns3: bool = Field(default=False, description="是否调用外部ns-3仿真器")
    ns3_dir: str = Field(default="~/ns-3.43", description="ns-3安装目录")
    ns3_command: str = Field(default="./ns3", description="ns-3运行脚本")
    ns3_program: str = Field(default="nr-simulation", description="ns-3仿真程序名称")
    ns3_timeout: float = Field(default=10.0, description="ns-3超时时间(秒)")

    # 指标配置
    metrics_enabled: bool = Field(default=True, description="是否导出Prometheus指标")


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def reset(self) -> None:
        """丢弃缓存的设置，下次访问时重新读取环境变量"""
        self._settings = None


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """根据设置初始化日志"""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=settings.log_file,
    )
