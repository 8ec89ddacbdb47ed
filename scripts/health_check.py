#!/usr/bin/env python3
"""
用于监控 Redis 连接状态的健康检查脚本
"""

import sys
from pathlib import Path

# 将项目根目录添加到路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from core.config import get_settings
from core.services import JobStore
from core.utils.logger import setup_logger


def check_redis(store: JobStore) -> bool:
    """检查Redis连接"""
    settings = get_settings()
    info = store.connect_from_settings(settings)
    if not info.ok:
        logger.error(f"✗ Redis连接失败: {info.message}")
        return False

    if store.ping():
        logger.info(f"✓ Redis连接正常 ({settings.get_redis_address()})")
        return True

    logger.error("✗ Redis连接失败：ping返回False")
    return False


def main() -> int:
    """主健康检查流程"""
    setup_logger("INFO")

    logger.info("=== 系统健康检查 ===")

    with JobStore.from_settings(get_settings()) as store:
        healthy = check_redis(store)

    logger.info("=" * 30)
    if healthy:
        logger.info("✓ 综合状态: 健康")
        return 0
    logger.error("✗ 综合状态: 不健康")
    return 1


if __name__ == "__main__":
    sys.exit(main())
