"""Task Domain Model -- 远端 /todos 资源中的任务记录

Task 是远端记录在本地的镜像，远端额外字段原样保留（PUT 时完整回传）。
TaskDraft 是表单输入，经校验后才会生成 Task。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from ulid import ULID

from ..config import TIME_PATTERN, TITLE_PATTERN


def new_task_id() -> str:
    """生成客户端任务 ID（ULID 格式，避免多客户端并发创建时碰撞）"""
    return str(ULID())


class Task(BaseModel):
    """Task 数据模型

    id/time 允许远端返回数字（如 json-server 的历史数据），统一转成字符串。
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="唯一标识，客户端创建时生成")
    title: str = Field(description="任务标题")
    time: str = Field(description="预计耗时（小时），非负整数字符串")
    done: bool = Field(default=False, description="是否已完成")

    @field_validator("id", "time", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class TaskDraft(BaseModel):
    """表单草稿 -- 对应创建表单的两个输入框"""

    title: str = Field(pattern=TITLE_PATTERN, description="任务标题")
    time: str = Field(pattern=TIME_PATTERN, description="预计耗时（小时）")

    def to_task(self) -> Task:
        """生成待提交的 Task（新 ID，done=False）"""
        return Task(id=new_task_id(), title=self.title, time=self.time, done=False)
