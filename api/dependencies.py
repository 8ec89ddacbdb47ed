"""
FastAPI 依赖项，用于依赖注入
"""

from fastapi import Request

from core.services import JobStore


def get_job_store(request: Request) -> JobStore:
    """
    获取应用级作业仓储的依赖项

    用法示例:
        @router.get("/endpoint")
        async def endpoint(store: JobStore = Depends(get_job_store)):
            ...
    """
    return request.app.state.job_store
