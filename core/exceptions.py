"""
作业存储系统的自定义异常
"""
from typing import Any


class ECRException(Exception):
    """ECR 基础异常类"""
    pass


# ========== 调用约定异常 ==========

class ContractViolationException(ECRException, RuntimeError):
    """
    调用约定被违反（编程错误，不可恢复）

    例如在错误的连接状态下调用操作，或传入 None 作为必需参数。
    库代码从不捕获此类异常。
    """
    pass


class RedisNotConnectedException(ContractViolationException):
    """Redis 未连接异常"""
    def __init__(self, operation: str = "operation"):
        super().__init__(
            f"Cannot run '{operation}': not connected to redis. Call connect() first."
        )


class RedisAlreadyConnectedException(ContractViolationException):
    """重复连接异常"""
    def __init__(self):
        super().__init__(
            "Already connected to redis. Call disconnect() before connecting again."
        )


def require_argument(name: str, value: Any) -> None:
    """必需参数为 None 时抛出约定异常"""
    if value is None:
        raise ContractViolationException(f"Argument '{name}' must not be None")


# ========== Redis异常 ==========

class RedisException(ECRException):
    """Redis相关异常基类"""
    pass


class RedisConnectionException(RedisException):
    """Redis连接异常"""
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Connection error: {detail}")


class RedisProtocolException(RedisException):
    """Redis 返回了错误或非预期类型的响应"""
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Protocol error: {detail}")


# ========== 作业异常 ==========

class JobNotFoundException(ECRException):
    """作业未找到异常"""
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class JobSerializationException(ECRException):
    """作业 JSON 解析或字段校验失败"""
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid job record: {detail}")
