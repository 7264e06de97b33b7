"""taskmirror Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .task import Task, TaskDraft, new_task_id

__all__ = [
    "Task",
    "TaskDraft",
    "new_task_id",
]
