"""
Redis 连接管理器
持有单个连接句柄，并用互斥锁串行化所有存储操作
"""

import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

from redis import Redis
from redis.backoff import NoBackoff
from redis.exceptions import ConnectionError, RedisError, TimeoutError
from redis.retry import Retry
from loguru import logger

from .constants import DEFAULT_CONNECT_TIMEOUT, STATUS_MESSAGE_DISCONNECTED
from .exceptions import (
    RedisAlreadyConnectedException,
    RedisConnectionException,
    RedisException,
    RedisNotConnectedException,
    RedisProtocolException,
    require_argument,
)
from .status import StatusInfo


def translate_redis_error(error: RedisError) -> RedisException:
    """将 redis-py 异常转换为连接异常或协议异常"""
    detail = str(error) or type(error).__name__
    if isinstance(error, (ConnectionError, TimeoutError)):
        return RedisConnectionException(detail)
    return RedisProtocolException(detail)


class RedisManager:
    """
    Redis 连接句柄

    状态机：未连接 -> 已连接 -> 未连接。
    只有 connect() 和 disconnect() 会改变状态，在错误状态下调用属于编程错误。
    """

    def __init__(
        self,
        connection_factory: Callable[..., Redis] = Redis,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        socket_timeout: Optional[float] = None,
        db: int = 0,
    ):
        """
        Args:
            connection_factory: 创建客户端的可调用对象（可替换为测试替身）
            connect_timeout: 建立连接的超时（秒）
            socket_timeout: 单次命令的超时（秒），默认与连接超时相同
            db: Redis 数据库编号
        """
        self._factory = connection_factory
        self._connect_timeout = connect_timeout
        self._socket_timeout = (
            socket_timeout if socket_timeout is not None else connect_timeout
        )
        self._db = db
        self._redis: Optional[Redis] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._redis is not None

    def _client_kwargs(self, host: str, port: int, use_unix_socket: bool) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "db": self._db,
            "socket_connect_timeout": self._connect_timeout,
            "socket_timeout": self._socket_timeout,
            # 不自动重试，调用方自行决定是否重新 connect
            "retry": Retry(NoBackoff(), 0),
        }
        if use_unix_socket:
            kwargs["unix_socket_path"] = host
        else:
            kwargs["host"] = host
            kwargs["port"] = port
        return kwargs

    def connect(self, host: str, port: int, use_unix_socket: bool = False) -> StatusInfo:
        """
        建立连接并用 PING 验证

        Args:
            host: 主机名；use_unix_socket 为 True 时为套接字路径
            port: 端口（Unix 套接字模式下忽略）
            use_unix_socket: 是否通过本地套接字连接

        Returns:
            成功或失败的 StatusInfo，失败时保持未连接状态

        Raises:
            RedisAlreadyConnectedException: 已经处于连接状态
        """
        require_argument("host", host)
        address = host if use_unix_socket else f"{host}:{port}"

        with self._lock:
            if self._redis is not None:
                raise RedisAlreadyConnectedException()

            client = None
            try:
                client = self._factory(**self._client_kwargs(host, port, use_unix_socket))
                client.ping()
            except RedisError as e:
                if client is not None:
                    client.close()
                error = RedisConnectionException(str(e) or type(e).__name__)
                logger.warning(f"无法连接到 Redis {address}: {error}")
                return StatusInfo.failure(error)

            self._redis = client

        logger.info(f"已连接到 Redis {address}")
        return StatusInfo.success()

    def disconnect(self) -> StatusInfo:
        """
        关闭连接

        Raises:
            RedisNotConnectedException: 当前未连接
        """
        with self._lock:
            if self._redis is None:
                raise RedisNotConnectedException("disconnect")
            client, self._redis = self._redis, None
            client.close()

        logger.info("Redis连接已关闭")
        return StatusInfo.success(STATUS_MESSAGE_DISCONNECTED)

    @contextmanager
    def session(self, operation: str) -> Iterator[Redis]:
        """
        在持有互斥锁的情况下使用连接

        redis-py 异常会被转换为 RedisConnectionException / RedisProtocolException，
        连接本身保持打开。

        用法示例:
            with manager.session("store") as client:
                client.set(key, value)
        """
        with self._lock:
            if self._redis is None:
                raise RedisNotConnectedException(operation)
            try:
                yield self._redis
            except RedisError as e:
                raise translate_redis_error(e) from e

    def ping(self) -> bool:
        """
        检查Redis是否可用

        返回:
            已连接且响应 PING 时为 True
        """
        with self._lock:
            if self._redis is None:
                return False
            try:
                return bool(self._redis.ping())
            except RedisError as e:
                logger.error(f"Redis ping失败: {e}")
                return False
