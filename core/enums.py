"""
作业存储的枚举类型定义
"""

from enum import IntEnum


class Language(IntEnum):
    """
    脚本语言标签

    序列化时使用固定的整数编码（而不是名称），编码值一经发布不可更改
    """

    NONE = 0  # 无（命令作业）
    SHELL = 1  # POSIX sh
    BASH = 2
    PYTHON = 3
    PERL = 4
    RUBY = 5
    JAVASCRIPT = 6  # node
    LUA = 7


class StatusCode(IntEnum):
    """存储操作的返回状态码"""

    SUCCESS = 0  # 成功
    FAILURE = 1  # 连接或协议错误
    NOT_FOUND = 2  # 目标键不存在
