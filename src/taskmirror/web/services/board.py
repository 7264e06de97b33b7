"""TaskBoard -- 视图本地状态

保存任务集合的本地镜像、初次加载标记与表单草稿。
实例挂在 app.state 上，生命周期与应用一致。
"""

from taskmirror.core.models import Task


class TaskBoard:
    """任务列表视图的本地状态

    tasks 按插入顺序保存；只在初次加载时整体替换，之后逐条对账。
    """

    def __init__(self) -> None:
        self.tasks: list[Task] = []
        self.loading: bool = False
        self.draft_title: str = ""
        self.draft_time: str = ""

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def replace_all(self, tasks: list[Task]) -> None:
        self.tasks = list(tasks)

    def append(self, task: Task) -> None:
        self.tasks = [*self.tasks, task]

    def replace(self, task: Task) -> bool:
        """用远端确认的记录替换同 id 的本地条目

        Returns:
            是否找到并替换
        """
        replaced = False
        updated: list[Task] = []
        for current in self.tasks:
            if current.id == task.id:
                updated.append(task)
                replaced = True
            else:
                updated.append(current)
        self.tasks = updated
        return replaced

    def remove(self, task_id: str) -> bool:
        """移除同 id 的本地条目，返回是否有条目被移除"""
        remaining = [t for t in self.tasks if t.id != task_id]
        removed = len(remaining) != len(self.tasks)
        self.tasks = remaining
        return removed

    def keep_draft(self, title: str, time: str) -> None:
        self.draft_title = title
        self.draft_time = time

    def clear_draft(self) -> None:
        self.draft_title = ""
        self.draft_time = ""
