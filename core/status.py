"""
存储操作的状态结果
"""
from dataclasses import dataclass, field
from typing import Optional

from .constants import STATUS_MESSAGE_SUCCESS
from .enums import StatusCode
from .exceptions import ECRException


@dataclass(frozen=True)
class StatusInfo:
    """状态码 + 可读消息"""

    code: StatusCode
    message: str
    # 失败时对应的异常，供 raise_for_status 使用
    error: Optional[ECRException] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.code == StatusCode.SUCCESS

    @classmethod
    def success(cls, message: str = STATUS_MESSAGE_SUCCESS) -> "StatusInfo":
        return cls(code=StatusCode.SUCCESS, message=message)

    @classmethod
    def failure(cls, error: ECRException) -> "StatusInfo":
        return cls(code=StatusCode.FAILURE, message=str(error), error=error)

    @classmethod
    def not_found(cls, error: ECRException) -> "StatusInfo":
        return cls(code=StatusCode.NOT_FOUND, message=str(error), error=error)

    def raise_for_status(self) -> "StatusInfo":
        """非成功状态时抛出对应的异常，成功时返回自身"""
        if self.ok:
            return self
        if self.error is not None:
            raise self.error
        raise ECRException(self.message)

    def to_dict(self) -> dict:
        return {"code": int(self.code), "message": self.message}
