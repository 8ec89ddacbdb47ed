"""
Job Store - 作业仓储

职责：
- 管理到 Redis 的单个连接（connect / disconnect）
- 以 "<前缀>:<作业ID>" 为键存取作业记录
- 记录格式为 Job.to_text() 生成的 JSON 文本
"""

from typing import Callable, Optional

from loguru import logger
from redis import Redis

from core.config import Settings
from core.constants import JOB_KEY_PREFIX
from core.enums import Language
from core.exceptions import (
    JobNotFoundException,
    RedisException,
    RedisProtocolException,
    require_argument,
)
from core.models import Job, JobData
from core.redis_client import RedisManager
from core.status import StatusInfo


class JobStore:
    """
    作业仓储 - 数据访问层

    所有数据操作都要求处于已连接状态；未连接时调用会抛出 RedisNotConnectedException。
    操作之间通过 RedisManager 的互斥锁串行执行，可在多线程中共享同一实例。

    用法示例:
        with JobStore() as store:
            store.connect("localhost", 6379)
            store.store(job)
            job = store.retrieve(job.id)
    """

    def __init__(self, manager: Optional[RedisManager] = None):
        """
        初始化仓储

        Args:
            manager: 连接句柄（可选，用于依赖注入）
        """
        self._manager = manager or RedisManager()

    @classmethod
    def from_settings(
        cls, settings: Settings, connection_factory: Callable[..., Redis] = Redis
    ) -> "JobStore":
        """按配置创建（尚未连接的）仓储"""
        manager = RedisManager(
            connection_factory=connection_factory,
            connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            db=settings.REDIS_DB,
        )
        return cls(manager)

    def __enter__(self) -> "JobStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.is_connected:
            self.disconnect()

    @staticmethod
    def job_key(job_id: str) -> str:
        """作业ID对应的 Redis 键"""
        require_argument("job_id", job_id)
        return f"{JOB_KEY_PREFIX}:{job_id}"

    @property
    def is_connected(self) -> bool:
        return self._manager.is_connected

    # ========== 连接管理 ==========

    def connect(self, host: str, port: int, use_unix_socket: bool = False) -> StatusInfo:
        return self._manager.connect(host, port, use_unix_socket)

    def connect_from_settings(self, settings: Settings) -> StatusInfo:
        """使用配置中的地址建立连接"""
        return self.connect(
            settings.get_redis_address(),
            settings.REDIS_PORT,
            settings.use_unix_socket,
        )

    def disconnect(self) -> StatusInfo:
        return self._manager.disconnect()

    def ping(self) -> bool:
        return self._manager.ping()

    # ========== 工厂方法 ==========

    @staticmethod
    def create_job_data(content: str, is_command: bool, lang: Language) -> JobData:
        require_argument("content", content)
        return JobData(content=content, is_command=is_command, lang=lang)

    @staticmethod
    def create_job(job_id: str, description: str, data: JobData) -> Job:
        require_argument("job_id", job_id)
        require_argument("description", description)
        require_argument("data", data)
        return Job(id=job_id, description=description, data=data)

    # ========== 数据操作 ==========

    def store(self, job: Job) -> StatusInfo:
        """
        保存作业，已存在的同ID记录会被覆盖

        Args:
            job: 要保存的作业

        Returns:
            成功时消息为 Redis 的回复（"OK"），连接或协议错误时为失败状态
        """
        require_argument("job", job)
        key = self.job_key(job.id)
        payload = job.to_text()

        try:
            with self._manager.session("store") as client:
                reply = client.set(key, payload)
        except RedisException as e:
            logger.error(f"Failed to store job {job.id}: {e}")
            return StatusInfo.failure(e)

        if reply is not True:
            error = RedisProtocolException(f"unexpected reply to SET: {reply!r}")
            logger.error(f"Failed to store job {job.id}: {error}")
            return StatusInfo.failure(error)

        logger.debug(f"作业已保存: key={key}, bytes={len(payload.encode('utf-8'))}")
        return StatusInfo.success("OK")

    def retrieve(self, job_id: str) -> Job:
        """
        读取作业

        Args:
            job_id: 作业ID

        Returns:
            重建的作业

        Raises:
            JobNotFoundException: 键不存在
            JobSerializationException: 存储的记录无法解析
            RedisConnectionException: 连接失败
            RedisProtocolException: Redis 返回错误（例如键类型不对）
        """
        key = self.job_key(job_id)
        with self._manager.session("retrieve") as client:
            raw = client.get(key)

        if raw is None:
            logger.debug(f"作业不存在: key={key}")
            raise JobNotFoundException(job_id)
        if not isinstance(raw, (str, bytes)):
            raise RedisProtocolException(f"unexpected reply to GET: {raw!r}")

        return Job.parse(raw)

    def remove(self, job_id: str) -> StatusInfo:
        """
        删除作业

        Returns:
            记录存在并被删除时为 SUCCESS，记录本就不存在时为 NOT_FOUND
        """
        key = self.job_key(job_id)

        try:
            with self._manager.session("remove") as client:
                removed = client.delete(key)
        except RedisException as e:
            logger.error(f"Failed to remove job {job_id}: {e}")
            return StatusInfo.failure(e)

        if not isinstance(removed, int):
            error = RedisProtocolException(f"unexpected reply to DEL: {removed!r}")
            logger.error(f"Failed to remove job {job_id}: {error}")
            return StatusInfo.failure(error)

        if removed == 0:
            logger.debug(f"作业不存在，无需删除: key={key}")
            return StatusInfo.not_found(JobNotFoundException(job_id))

        logger.debug(f"作业已删除: key={key}")
        return StatusInfo.success(f"Removed job {job_id}")
