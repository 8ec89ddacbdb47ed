"""
作业数据模型
基于 Pydantic，实例创建后不可变，提供与 JSON 记录格式之间的无损转换
"""
import json
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import Language
from .exceptions import JobSerializationException, require_argument


def _field(node: Dict[str, Any], name: str, path: str) -> Any:
    """取出必需字段，缺失时抛出序列化异常"""
    if name not in node:
        raise JobSerializationException(f"missing field '{path}'")
    return node[name]


def _expect_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise JobSerializationException(
            f"field '{path}' must be a string, got {type(value).__name__}"
        )
    return value


def _expect_object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise JobSerializationException(
            f"field '{path}' must be an object, got {type(value).__name__}"
        )
    return value


class JobData(BaseModel):
    """作业负载 - 命令行或脚本内容"""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="命令行或脚本内容")
    is_command: bool = Field(
        ..., description="True 表示 content 为直接执行的命令，False 表示脚本"
    )
    lang: Language = Field(
        ..., description="脚本语言，仅在 is_command 为 False 时有意义"
    )

    def to_structured(self) -> Dict[str, Any]:
        """
        转换为 JSON 节点

        is_command 编码为 0/1，lang 编码为整数
        """
        return {
            "content": self.content,
            "is_command": int(self.is_command),
            "lang": int(self.lang),
        }

    @classmethod
    def from_structured(cls, node: Any) -> "JobData":
        """
        从 JSON 节点构建作业负载

        Args:
            node: json.loads 得到的对象

        Returns:
            JobData 实例

        Raises:
            JobSerializationException: 字段缺失或类型错误
        """
        node = _expect_object(node, "data")
        content = _expect_str(_field(node, "content", "data.content"), "data.content")

        # bool 是 int 的子类，JSON 中的 true/false 也一并接受
        raw_flag = _field(node, "is_command", "data.is_command")
        if isinstance(raw_flag, bool):
            is_command = raw_flag
        elif isinstance(raw_flag, int) and raw_flag in (0, 1):
            is_command = bool(raw_flag)
        else:
            raise JobSerializationException(
                f"field 'data.is_command' must be 0 or 1, got {raw_flag!r}"
            )

        raw_lang = _field(node, "lang", "data.lang")
        if isinstance(raw_lang, bool) or not isinstance(raw_lang, int):
            raise JobSerializationException(
                f"field 'data.lang' must be an integer, got {raw_lang!r}"
            )
        try:
            lang = Language(raw_lang)
        except ValueError:
            raise JobSerializationException(
                f"unknown language code {raw_lang}"
            ) from None

        return cls(content=content, is_command=is_command, lang=lang)


class Job(BaseModel):
    """作业 - 标识符、描述与唯一归属的负载"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="作业ID，同时作为存储键")
    description: str = Field(..., description="作业描述")
    data: JobData = Field(..., description="作业负载")

    @classmethod
    def from_command(cls, id: str, description: str, command: str) -> "Job":
        """创建命令作业"""
        return cls(
            id=id,
            description=description,
            data=JobData(content=command, is_command=True, lang=Language.NONE),
        )

    @classmethod
    def from_script(
        cls, id: str, description: str, source: str, lang: Language
    ) -> "Job":
        """创建脚本作业"""
        return cls(
            id=id,
            description=description,
            data=JobData(content=source, is_command=False, lang=lang),
        )

    @classmethod
    def parse(cls, text: Union[str, bytes]) -> "Job":
        """
        从 JSON 文本解析作业（例如请求体或 Redis 中的记录）

        Raises:
            JobSerializationException: JSON 无效或字段缺失/类型错误，不会返回不完整的作业
        """
        require_argument("text", text)
        try:
            if isinstance(text, bytes):
                # 记录格式固定为 UTF-8，不做编码探测
                text = text.decode("utf-8")
            node = json.loads(text)
        except UnicodeDecodeError as e:
            raise JobSerializationException(f"record is not valid UTF-8: {e}") from e
        except (json.JSONDecodeError, RecursionError) as e:
            raise JobSerializationException(f"malformed JSON: {e}") from e
        return cls.from_structured(node)

    @classmethod
    def from_structured(cls, node: Any) -> "Job":
        """从 JSON 节点构建作业"""
        if not isinstance(node, dict):
            raise JobSerializationException(
                f"job record must be an object, got {type(node).__name__}"
            )
        job_id = _expect_str(_field(node, "id", "id"), "id")
        description = _expect_str(
            _field(node, "description", "description"), "description"
        )
        data = JobData.from_structured(_field(node, "data", "data"))
        return cls(id=job_id, description=description, data=data)

    def to_structured(self) -> Dict[str, Any]:
        """转换为 JSON 节点，键顺序固定为 id、description、data"""
        return {
            "id": self.id,
            "description": self.description,
            "data": self.data.to_structured(),
        }

    def to_text(self) -> str:
        """序列化为紧凑的 JSON 文本（持久化记录格式）"""
        return json.dumps(
            self.to_structured(), ensure_ascii=False, separators=(",", ":")
        )
