"""
作业相关的请求/响应数据模型
"""

from pydantic import BaseModel, Field

from core.models import Job
from core.status import StatusInfo


class JobDataRecord(BaseModel):
    """作业负载的 JSON 记录格式"""

    content: str = Field(..., description="命令行或脚本内容")
    is_command: int = Field(..., ge=0, le=1, description="1 为命令，0 为脚本")
    lang: int = Field(..., ge=0, description="脚本语言编码")


class JobRecord(BaseModel):
    """作业的 JSON 记录格式"""

    id: str = Field(..., description="作业ID")
    description: str = Field(..., description="作业描述")
    data: JobDataRecord = Field(..., description="作业负载")

    @classmethod
    def from_job(cls, job: Job) -> "JobRecord":
        return cls.model_validate(job.to_structured())

    class Config:
        json_schema_extra = {
            "example": {
                "id": "job-1",
                "description": "demo",
                "data": {"content": "echo hi", "is_command": 1, "lang": 0},
            }
        }


class StatusResponse(BaseModel):
    """存储操作的状态响应"""

    code: int = Field(..., description="状态码：0 成功，1 失败，2 不存在")
    message: str = Field(..., description="状态消息")

    @classmethod
    def from_status(cls, info: StatusInfo) -> "StatusResponse":
        return cls(code=int(info.code), message=info.message)

    class Config:
        json_schema_extra = {"example": {"code": 0, "message": "OK"}}
