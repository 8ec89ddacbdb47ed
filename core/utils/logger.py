"""
Loguru-based logging configuration
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


# request_id 由 API 中间件通过 logger.contextualize 注入，脚本中保持为 "-"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | {name}:{line} | {message}"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "100 MB",
    retention: str = "14 days",
) -> None:
    """
    配置 loguru：彩色 stderr 输出，可选的滚动日志文件

    Args:
        log_level: 日志级别
        log_file: 日志文件路径（可选）
        rotation: 文件滚动阈值
        retention: 旧文件保留时长
    """
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level, colorize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            enqueue=True,
        )

    logger.debug(f"Logger initialized with level: {log_level}")
