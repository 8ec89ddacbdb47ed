"""
使用 Pydantic Settings 进行配置管理
从 app.properties 文件和环境变量加载配置
"""

from functools import lru_cache
from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger

from .constants import DEFAULT_CONNECT_TIMEOUT


class Settings(BaseSettings):
    """应用配置，包含参数校验"""

    # Redis 配置
    REDIS_HOST: str = Field(default="localhost", description="Redis 主机")
    REDIS_PORT: int = Field(default=6379, description="Redis 端口")
    REDIS_DB: int = Field(default=0, description="Redis 数据库编号")
    REDIS_UNIX_SOCKET: Optional[str] = Field(
        default=None, description="Redis Unix 套接字路径，设置后优先使用"
    )
    REDIS_CONNECT_TIMEOUT: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT, description="连接超时（秒）"
    )
    REDIS_SOCKET_TIMEOUT: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT, description="单次命令超时（秒）"
    )

    # API 服务器配置
    API_HOST: str = Field(default="0.0.0.0", description="API 服务器主机")
    API_PORT: int = Field(default=8000, description="API 服务器端口")
    API_WORKERS: int = Field(default=1, description="API 服务器进程数")

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FILE: Optional[str] = Field(default=None, description="日志文件路径")

    model_config = SettingsConfigDict(
        env_file="app.properties",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("REDIS_PORT", "API_PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"端口必须在 1-65535 之间，当前为 {v}")
        return v

    @field_validator("REDIS_CONNECT_TIMEOUT", "REDIS_SOCKET_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("超时时间必须大于 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL 必须为 {valid_levels} 中的一项")
        return v_upper

    @property
    def use_unix_socket(self) -> bool:
        return bool(self.REDIS_UNIX_SOCKET)

    def get_redis_address(self) -> str:
        """
        获取 connect() 使用的地址

        返回:
            Unix 套接字路径或主机名
        """
        return self.REDIS_UNIX_SOCKET if self.use_unix_socket else self.REDIS_HOST

    def ensure_directories(self) -> None:
        """确保日志目录存在"""
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置实例（单例）

    返回:
        配置实例
    """
    settings = Settings()
    logger.info("Settings loaded")
    return settings


def reload_settings() -> Settings:
    """
    重新加载配置

    清除 lru_cache 缓存并重新加载配置

    返回:
        新的配置实例
    """
    get_settings.cache_clear()
    logger.info("Settings reloaded")
    return get_settings()
