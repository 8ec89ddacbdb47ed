"""
请求ID追踪中间件
"""
import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    为每个请求分配追踪ID（优先使用客户端的 X-Request-ID 头）

    请求处理期间的日志都会带上该ID；访问日志额外记录路由中的作业ID。
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            # 路由匹配后 path_params 写回同一个 scope
            job_id = request.scope.get("path_params", {}).get("job_id")
            target = f" job={job_id}" if job_id else ""
            logger.info(
                f"{request.method} {request.url.path}{target} "
                f"-> {response.status_code} ({duration:.3f}s)"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration:.3f}"
        return response
