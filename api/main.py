"""
FastAPI 主入口
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool

from core.config import get_settings
from core.services import JobStore
from core.utils.logger import setup_logger
from .routers import jobs_router
from .middleware import RequestIDMiddleware


SERVICE_NAME = "ecr-jobstore"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    应用生命周期管理器（启动与关闭事件）
    """
    settings = get_settings()

    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("启动 ECR Job Store API 服务")

    settings.ensure_directories()

    # 外部注入的仓储由注入方负责关闭其自行建立的连接
    owns_store = app.state.job_store is None
    if owns_store:
        app.state.job_store = JobStore.from_settings(settings)

    store: JobStore = app.state.job_store
    connected_here = not store.is_connected
    if connected_here:
        info = await run_in_threadpool(store.connect_from_settings, settings)
        if not info.ok:
            logger.error(f"Redis初始化失败: {info.message}")
            raise ConnectionError(info.message)
        logger.info("Redis已初始化")

    logger.info(f"API 服务已启动，监听 {settings.API_HOST}:{settings.API_PORT}")

    yield

    logger.info("正在关闭 ECR Job Store API 服务")
    if connected_here and store.is_connected:
        await run_in_threadpool(store.disconnect)
    logger.info("API 服务已停止")


def create_app(job_store: Optional[JobStore] = None) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        job_store: 可选的作业仓储（用于测试或嵌入），为空时在启动阶段按配置创建
    """
    app = FastAPI(
        title="ECR Job Store",
        description="作业记录存储 - REST API",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.job_store = job_store

    app.add_middleware(RequestIDMiddleware)
    app.include_router(jobs_router)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """根接口 - 返回 API 信息"""
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running",
        }

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check():
        """健康检查接口"""
        store: Optional[JobStore] = app.state.job_store
        if store is not None and await run_in_threadpool(store.ping):
            return {"status": "healthy", "service": SERVICE_NAME}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "service": SERVICE_NAME},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """全局异常处理"""
        logger.error(f"未处理的异常: {exc!r}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "服务器内部错误"},
        )

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        workers=settings.API_WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
