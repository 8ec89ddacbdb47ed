"""
作业管理 API 端点
"""

from fastapi import APIRouter, Depends, Request, status
from loguru import logger
from starlette.concurrency import run_in_threadpool

from core.models import Job
from core.services import JobStore
from ..decorators import handle_api_errors
from ..dependencies import get_job_store
from ..schemas import JobRecord, StatusResponse


router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post(
    "", response_model=StatusResponse, status_code=status.HTTP_201_CREATED
)
@handle_api_errors
async def store_job(
    request: Request, store: JobStore = Depends(get_job_store)
) -> StatusResponse:
    """
    保存作业

    请求体为作业的 JSON 记录，同ID的已有记录会被覆盖。

    Raises:
        400: 请求体不是合法的作业记录
    """
    body = await request.body()
    job = Job.parse(body)
    info = await run_in_threadpool(store.store, job)
    info.raise_for_status()
    logger.info(f"Job {job.id} stored")
    return StatusResponse.from_status(info)


@router.get("/{job_id}", response_model=JobRecord)
@handle_api_errors
async def retrieve_job(
    job_id: str, store: JobStore = Depends(get_job_store)
) -> JobRecord:
    """
    读取作业

    Raises:
        404: 作业未找到
    """
    job = await run_in_threadpool(store.retrieve, job_id)
    return JobRecord.from_job(job)


@router.delete("/{job_id}", response_model=StatusResponse)
@handle_api_errors
async def remove_job(
    job_id: str, store: JobStore = Depends(get_job_store)
) -> StatusResponse:
    """
    删除作业

    Raises:
        404: 作业本就不存在
    """
    info = await run_in_threadpool(store.remove, job_id)
    info.raise_for_status()
    logger.info(f"Job {job_id} removed")
    return StatusResponse.from_status(info)
