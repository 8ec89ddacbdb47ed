"""
API错误处理装饰器
"""

import functools
from typing import Callable, Dict, Optional, Type

from fastapi import HTTPException, status
from loguru import logger

from core.exceptions import (
    ECRException,
    JobNotFoundException,
    JobSerializationException,
    RedisConnectionException,
    RedisProtocolException,
)


# 异常映射表：业务异常 -> HTTP状态码
EXCEPTION_MAP: Dict[Type[Exception], int] = {
    JobNotFoundException: status.HTTP_404_NOT_FOUND,
    JobSerializationException: status.HTTP_400_BAD_REQUEST,
    RedisConnectionException: status.HTTP_503_SERVICE_UNAVAILABLE,
    RedisProtocolException: status.HTTP_502_BAD_GATEWAY,
}


def _lookup_status(exc: Exception) -> Optional[int]:
    """按异常类的 MRO 查找状态码，子类沿用父类的映射"""
    for klass in type(exc).__mro__:
        if klass in EXCEPTION_MAP:
            return EXCEPTION_MAP[klass]
    return None


def handle_api_errors(func: Callable):
    """
    统一的API错误处理装饰器

    自动捕获并转换异常为HTTP响应，避免重复的try-except代码

    使用示例:
        @router.get("/{job_id}")
        @handle_api_errors
        async def get_job(...):
            ...
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        # 已知的业务异常
        except tuple(EXCEPTION_MAP.keys()) as e:
            status_code = _lookup_status(e)
            logger.warning(f"[{func.__name__}] {type(e).__name__}: {e}")
            raise HTTPException(status_code=status_code, detail=str(e))

        # 其他业务异常（包括调用约定异常）
        except ECRException as e:
            logger.error(f"[{func.__name__}] {type(e).__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
            )

        # 未预期的异常
        except Exception as e:
            # 使用 repr() 避免异常信息中的 {} 导致格式化错误
            logger.error(f"[{func.__name__}] Unexpected error: {repr(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper
