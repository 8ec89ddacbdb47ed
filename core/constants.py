"""
进程级常量
"""

# 所有作业键的命名空间前缀，完整键为 "<前缀>:<作业ID>"
JOB_KEY_PREFIX = "ecr_job"

# 连接超时参考值（秒）
DEFAULT_CONNECT_TIMEOUT = 1.5

STATUS_MESSAGE_SUCCESS = "SUCCESS"
STATUS_MESSAGE_DISCONNECTED = "Connection to redis closed"
